from __future__ import annotations

from datetime import date

import pytest

from serials_overlap.core.coverage import coverage_duration
from serials_overlap.core.types import Holding


def _to_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def build_holding(
    package: str,
    begin: str | None,
    end: str | None,
    journal_key: str = "1|Journal X",
    hidden: bool = False,
) -> Holding:
    begin_date = _to_date(begin)
    end_date = _to_date(end)
    return Holding(
        journal_key=journal_key,
        package_name=package,
        hide_on_publication_finder=hidden,
        effective_begin=begin_date,
        effective_end=end_date,
        duration_days=coverage_duration(begin_date, end_date),
    )


@pytest.fixture
def holding():
    return build_holding


HOLDINGS_HEADER = (
    "PackageName,KBID,Title,ManagedCoverageBegin,ManagedCoverageEnd,"
    "CustomCoverageBegin,CustomCoverageEnd,Embargo,HideOnPublicationFinder"
)


@pytest.fixture
def holdings_csv(tmp_path):
    def _write(*rows: str, header: str = HOLDINGS_HEADER, name: str = "holdings.csv"):
        path = tmp_path / name
        path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return path

    return _write
