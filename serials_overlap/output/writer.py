"""
Tabular report writers.

Writes the three output tables as CSV:
- summary.csv: covered counts per package
- packages.csv: package index used to name detail tables
- <detail_dirname>/package-NNN.csv: one detail table per package
"""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Sequence

from ..core.summary import sort_detail
from ..core.types import Candidate, OverlapResult, PackageIndexEntry, PackageSummary

SUMMARY_COLUMNS = ["packageName", "totalJournals", "coveredJournals", "coveredPct"]
INDEX_COLUMNS = ["index", "packageName", "detailFile"]
STRATEGIES = ("earliest", "latest", "longest")


def detail_columns() -> list[str]:
    columns = [
        "journalKey",
        "packageName",
        "hideOnPublicationFinder",
        "effectiveBegin",
        "effectiveEnd",
        "durationDays",
    ]
    for strategy in STRATEGIES:
        columns.extend(
            [
                f"{strategy}Package",
                f"{strategy}HideOnPublicationFinder",
                f"{strategy}Begin",
                f"{strategy}End",
                f"{strategy}DurationDays",
                f"coveredBy{strategy.capitalize()}",
            ]
        )
    columns.append("covered")
    return columns


def detail_filename(entry: PackageIndexEntry) -> str:
    return f"package-{entry.index:03d}.csv"


def _fmt(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _candidate_cells(strategy: str, candidate: Candidate | None) -> dict[str, str]:
    holding = candidate.holding if candidate is not None else None
    return {
        f"{strategy}Package": _fmt(holding.package_name if holding else None),
        f"{strategy}HideOnPublicationFinder": _fmt(
            holding.hide_on_publication_finder if holding else None
        ),
        f"{strategy}Begin": _fmt(holding.effective_begin if holding else None),
        f"{strategy}End": _fmt(holding.effective_end if holding else None),
        f"{strategy}DurationDays": _fmt(holding.duration_days if holding else None),
        f"coveredBy{strategy.capitalize()}": _fmt(
            candidate is not None and candidate.covered
        ),
    }


def detail_row(result: OverlapResult) -> dict[str, str]:
    """Flatten one OverlapResult into a detail table row."""
    holding = result.holding
    row = {
        "journalKey": holding.journal_key,
        "packageName": holding.package_name,
        "hideOnPublicationFinder": _fmt(holding.hide_on_publication_finder),
        "effectiveBegin": _fmt(holding.effective_begin),
        "effectiveEnd": _fmt(holding.effective_end),
        "durationDays": _fmt(holding.duration_days),
    }
    row.update(_candidate_cells("earliest", result.earliest))
    row.update(_candidate_cells("latest", result.latest))
    row.update(_candidate_cells("longest", result.longest))
    row["covered"] = _fmt(result.covered)
    return row


def _write_rows(path: Path, fieldnames: list[str], rows: Iterable[dict[str, str]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    return path


def write_summary(summaries: Sequence[PackageSummary], path: Path, pct_decimals: int = 2) -> Path:
    rows = (
        {
            "packageName": summary.package_name,
            "totalJournals": str(summary.total_journals),
            "coveredJournals": str(summary.covered_journals),
            "coveredPct": f"{summary.covered_pct:.{pct_decimals}f}",
        }
        for summary in summaries
    )
    return _write_rows(path, SUMMARY_COLUMNS, rows)


def write_package_index(entries: Sequence[PackageIndexEntry], path: Path) -> Path:
    rows = (
        {
            "index": str(entry.index),
            "packageName": entry.package_name,
            "detailFile": detail_filename(entry),
        }
        for entry in entries
    )
    return _write_rows(path, INDEX_COLUMNS, rows)


def write_package_detail(results: Iterable[OverlapResult], path: Path) -> Path:
    """Write one package's results, covered rows first."""
    return _write_rows(path, detail_columns(), (detail_row(r) for r in sort_detail(results)))


def write_package_details(
    entries: Sequence[PackageIndexEntry],
    results_by_package: dict[str, list[OverlapResult]],
    detail_dir: Path,
) -> list[Path]:
    detail_dir.mkdir(parents=True, exist_ok=True)
    return [
        write_package_detail(
            results_by_package.get(entry.package_name, []),
            detail_dir / detail_filename(entry),
        )
        for entry in entries
    ]
