"""
Candidate selection among other packages' holdings of one journal.

Three independent strategies pick an alternate holding:
- earliest: the earliest effective begin, longer duration breaking ties
- latest: the latest effective end, longer duration breaking ties
- longest: the longest duration

Remaining ties resolve on package name so that results never depend on
input row order. Holdings with undefined dates or duration are not
filtered out: they rank after every defined value and are picked only when
nothing better exists.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, NamedTuple, Sequence

from .types import Holding


class CandidateSet(NamedTuple):
    earliest: Holding | None
    latest: Holding | None
    longest: Holding | None


def _begin_key(value: date | None) -> tuple[bool, int]:
    return (value is None, value.toordinal() if value is not None else 0)


def _end_key(value: date | None) -> tuple[bool, int]:
    return (value is None, -value.toordinal() if value is not None else 0)


def _duration_key(value: int | None) -> tuple[bool, int]:
    return (value is None, -value if value is not None else 0)


def select_earliest(holdings: Sequence[Holding]) -> Holding | None:
    if not holdings:
        return None
    return min(
        holdings,
        key=lambda h: (
            _begin_key(h.effective_begin),
            _duration_key(h.duration_days),
            h.package_name,
        ),
    )


def select_latest(holdings: Sequence[Holding]) -> Holding | None:
    if not holdings:
        return None
    return min(
        holdings,
        key=lambda h: (
            _end_key(h.effective_end),
            _duration_key(h.duration_days),
            h.package_name,
        ),
    )


def select_longest(holdings: Sequence[Holding]) -> Holding | None:
    if not holdings:
        return None
    return min(holdings, key=lambda h: (_duration_key(h.duration_days), h.package_name))


def select_candidates(journal_holdings: Iterable[Holding], excluded_package: str) -> CandidateSet:
    """Pick the earliest, latest and longest alternates for one journal.

    Args:
        journal_holdings: All holdings of the journal, in any package
        excluded_package: The package under investigation

    Returns:
        CandidateSet whose members are all None when no other package
        holds the journal
    """
    others = [h for h in journal_holdings if h.package_name != excluded_package]
    return CandidateSet(
        earliest=select_earliest(others),
        latest=select_latest(others),
        longest=select_longest(others),
    )
