"""
Holdings export reader.

Reads a delimited holdings export (EBSCO HoldingsIQ layout by default)
into HoldingRecord objects and applies the package denylist. Structural
problems raise ConfigurationError before any analysis starts.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from ..config import InputConfig
from ..core.errors import ConfigurationError
from ..core.types import HoldingRecord

REQUIRED_FIELDS = (
    "package_name",
    "journal_id",
    "title",
    "managed_begin",
    "managed_end",
    "custom_begin",
    "custom_end",
)
OPTIONAL_FIELDS = ("embargo", "hide_on_publication_finder")

_TRUE_VALUES = {"y", "yes", "true", "t", "1"}


def parse_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUE_VALUES


def _cell(row: dict[str, str | None], column: str | None) -> str:
    if column is None:
        return ""
    return (row.get(column) or "").strip()


def read_holdings(path: Path, cfg: InputConfig) -> list[HoldingRecord]:
    """Read all holding rows from a delimited export.

    Args:
        path: Path to the export file
        cfg: Input format configuration (delimiter, encoding, column names)

    Returns:
        Holding records in file order

    Raises:
        ConfigurationError: If the file cannot be read or required columns
            are missing
    """
    columns = cfg.columns
    unmapped = [name for name in REQUIRED_FIELDS if not columns.get(name)]
    if unmapped:
        raise ConfigurationError(f"No column configured for: {', '.join(unmapped)}")

    try:
        with open(path, "r", encoding=cfg.encoding, newline="") as f:
            reader = csv.DictReader(f, delimiter=cfg.delimiter)
            header = reader.fieldnames or []
            missing = [columns[name] for name in REQUIRED_FIELDS if columns[name] not in header]
            if missing:
                raise ConfigurationError(
                    f"{path} is missing required columns: {', '.join(missing)}"
                )
            optional = {
                name: columns.get(name) if columns.get(name) in header else None
                for name in OPTIONAL_FIELDS
            }

            records = []
            for row_number, row in enumerate(reader, start=1):
                embargo = _cell(row, optional["embargo"])
                records.append(
                    HoldingRecord(
                        package_name=_cell(row, columns["package_name"]),
                        journal_id=_cell(row, columns["journal_id"]),
                        title=_cell(row, columns["title"]),
                        managed_begin=_cell(row, columns["managed_begin"]),
                        managed_end=_cell(row, columns["managed_end"]),
                        custom_begin=_cell(row, columns["custom_begin"]),
                        custom_end=_cell(row, columns["custom_end"]),
                        embargo=embargo or None,
                        hide_on_publication_finder=parse_flag(
                            _cell(row, optional["hide_on_publication_finder"])
                        ),
                        row_number=row_number,
                    )
                )
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise ConfigurationError(f"Cannot read holdings from {path}: {exc}") from exc

    return records


def package_names(records: Iterable[HoldingRecord]) -> list[str]:
    """Distinct package names in order of first appearance."""
    seen: dict[str, None] = {}
    for record in records:
        seen.setdefault(record.package_name, None)
    return list(seen)


def apply_denylist(
    records: list[HoldingRecord], exclude_packages: Iterable[str]
) -> list[HoldingRecord]:
    """Drop every record of a denylisted package.

    Raises:
        ConfigurationError: If a denylisted package does not occur in the input
    """
    denylist = {name.strip() for name in exclude_packages if name and name.strip()}
    if not denylist:
        return list(records)
    unknown = sorted(denylist - set(package_names(records)))
    if unknown:
        raise ConfigurationError(
            f"Excluded packages not found in holdings: {', '.join(unknown)}"
        )
    return [record for record in records if record.package_name not in denylist]
