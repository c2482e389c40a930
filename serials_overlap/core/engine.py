"""
Overlap engine.

For every package in the working list, each of its journals is compared
with the other packages' holdings of the same journal. Holdings are grouped
by journal once; each package then only performs local lookups.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Iterable, Sequence

from .containment import is_covered_by
from .selection import select_candidates, select_longest
from .types import Candidate, Holding, OverlapResult


def group_by_journal(holdings: Iterable[Holding]) -> dict[str, list[Holding]]:
    """Map each journal key to its holdings, preserving input order."""
    grouped: dict[str, list[Holding]] = defaultdict(list)
    for holding in holdings:
        grouped[holding.journal_key].append(holding)
    return dict(grouped)


def _candidate(investigated: Holding, chosen: Holding | None) -> Candidate | None:
    if chosen is None:
        return None
    return Candidate(holding=chosen, covered=is_covered_by(investigated, chosen))


def analyze_holding(investigated: Holding, journal_holdings: Sequence[Holding]) -> OverlapResult:
    """Search the journal's other holdings for one that covers `investigated`."""
    picks = select_candidates(journal_holdings, investigated.package_name)
    return OverlapResult(
        holding=investigated,
        earliest=_candidate(investigated, picks.earliest),
        latest=_candidate(investigated, picks.latest),
        longest=_candidate(investigated, picks.longest),
    )


def package_journals(package_name: str, holdings: Iterable[Holding]) -> list[Holding]:
    """Pick one holding per journal of the package.

    A journal listed more than once by the same package is represented by
    its widest holding (longest duration, undefined durations last); ties
    keep the first listed.
    """
    by_key: dict[str, list[Holding]] = defaultdict(list)
    for holding in holdings:
        if holding.package_name == package_name:
            by_key[holding.journal_key].append(holding)
    return [select_longest(listed) for listed in by_key.values()]


def analyze_package(
    package_name: str,
    holdings: Sequence[Holding],
    by_journal: dict[str, list[Holding]] | None = None,
) -> list[OverlapResult]:
    """Produce one OverlapResult per journal of the package.

    Args:
        package_name: The package under investigation
        holdings: Normalized holdings; rows of other packages are ignored
        by_journal: Precomputed group_by_journal() of the full table;
            derived from `holdings` when omitted

    Returns:
        Results in order of each journal's first holding in the package
    """
    if by_journal is None:
        by_journal = group_by_journal(holdings)
    return [
        analyze_holding(h, by_journal.get(h.journal_key, ()))
        for h in package_journals(package_name, holdings)
    ]


def run_overlap(
    holdings: Sequence[Holding],
    packages: Sequence[str],
    on_package: Callable[[str, list[OverlapResult]], None] | None = None,
) -> list[OverlapResult]:
    """Run the overlap analysis for every package in the working list.

    Args:
        holdings: Normalized holdings, read-only
        packages: Working package names, in output order
        on_package: Optional callback invoked after each package

    Returns:
        All results, grouped by package in `packages` order
    """
    by_journal = group_by_journal(holdings)
    by_package: dict[str, list[Holding]] = defaultdict(list)
    for holding in holdings:
        by_package[holding.package_name].append(holding)

    results: list[OverlapResult] = []
    for package_name in packages:
        package_results = analyze_package(package_name, by_package.get(package_name, []), by_journal)
        results.extend(package_results)
        if on_package is not None:
            on_package(package_name, package_results)
    return results
