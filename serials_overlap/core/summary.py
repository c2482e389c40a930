"""
Aggregation of overlap results into report tables.

- summarize: covered counts and percentage per package
- sort_detail: covered rows first, stable within each group
- build_package_index: stable numeric index per package
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Sequence

from .types import OverlapResult, PackageIndexEntry, PackageSummary


def covered_percentage(covered: int, total: int) -> float:
    if total == 0:
        return 0.0
    return 100 * covered / total


def results_by_package(results: Iterable[OverlapResult]) -> dict[str, list[OverlapResult]]:
    grouped: dict[str, list[OverlapResult]] = defaultdict(list)
    for result in results:
        grouped[result.holding.package_name].append(result)
    return dict(grouped)


def summarize(results: Iterable[OverlapResult], packages: Sequence[str]) -> list[PackageSummary]:
    """Build one summary row per working package.

    Packages without any result still get a row with zero counts.
    """
    grouped = results_by_package(results)
    summaries = []
    for package_name in packages:
        rows = grouped.get(package_name, [])
        total = len(rows)
        covered = sum(1 for row in rows if row.covered)
        summaries.append(
            PackageSummary(
                package_name=package_name,
                total_journals=total,
                covered_journals=covered,
                covered_pct=covered_percentage(covered, total),
            )
        )
    return summaries


def sort_detail(results: Iterable[OverlapResult]) -> list[OverlapResult]:
    """Order rows with covered holdings first; sorted() keeps groups stable."""
    return sorted(results, key=lambda result: not result.covered)


def build_package_index(packages: Sequence[str]) -> list[PackageIndexEntry]:
    """Assign 1-based indexes following the working package order."""
    return [
        PackageIndexEntry(index=position, package_name=package_name)
        for position, package_name in enumerate(packages, start=1)
    ]
