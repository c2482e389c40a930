"""
Core data types for the serials overlap analyzer.

This module defines the fundamental data structures used throughout the pipeline:
- HoldingRecord: Raw holding row as read from the holdings export
- Holding: Holding with its normalized effective coverage interval
- Candidate: Alternate holding chosen by one selection strategy
- OverlapResult: Per (package, journal) outcome of the overlap search
- PackageSummary: Per-package covered counts and percentage
- PackageIndexEntry: Stable numeric index for a package
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

JOURNAL_KEY_SEPARATOR = "|"


def make_journal_key(journal_id: str, title: str) -> str:
    """Build the journal identity from its identifier and title."""
    return f"{journal_id.strip()}{JOURNAL_KEY_SEPARATOR}{title.strip()}"


@dataclass
class HoldingRecord:
    """Represents one raw holding row from the export.

    Attributes:
        package_name: The owning package name
        journal_id: The journal identifier (e.g., KBID)
        title: The journal title
        managed_begin: Managed coverage begin date string, possibly empty
        managed_end: Managed coverage end date string, possibly empty
        custom_begin: Custom coverage begin override, empty when not set
        custom_end: Custom coverage end override, empty when not set
        embargo: Embargo text such as "6 Months", None when absent
        hide_on_publication_finder: Public finder visibility flag
        row_number: 1-based data row number in the source file
    """
    package_name: str
    journal_id: str
    title: str
    managed_begin: str = ""
    managed_end: str = ""
    custom_begin: str = ""
    custom_end: str = ""
    embargo: str | None = None
    hide_on_publication_finder: bool = False
    row_number: int = 0

    @property
    def journal_key(self) -> str:
        return make_journal_key(self.journal_id, self.title)


@dataclass(frozen=True)
class Holding:
    """A holding with its effective coverage interval.

    Dates and duration are None when they could not be derived; a None
    bound never satisfies a containment test.

    Attributes:
        journal_key: Journal identity (identifier + title)
        package_name: The owning package name
        hide_on_publication_finder: Public finder visibility flag
        effective_begin: Begin date after custom override
        effective_end: End date after override, "present" resolution and embargo
        embargo_days: Days subtracted from the end, None when no embargo applies
        duration_days: effective_end - effective_begin in days
    """
    journal_key: str
    package_name: str
    hide_on_publication_finder: bool = False
    effective_begin: date | None = None
    effective_end: date | None = None
    embargo_days: int | None = None
    duration_days: int | None = None


@dataclass(frozen=True)
class Candidate:
    """Alternate holding picked by one strategy and its containment outcome."""
    holding: Holding
    covered: bool


@dataclass(frozen=True)
class OverlapResult:
    """Outcome of the overlap search for one investigated holding.

    Attributes:
        holding: The investigated holding
        earliest: Candidate with the earliest begin, None if no alternate exists
        latest: Candidate with the latest end, None if no alternate exists
        longest: Candidate with the longest duration, None if no alternate exists
    """
    holding: Holding
    earliest: Candidate | None = None
    latest: Candidate | None = None
    longest: Candidate | None = None

    @property
    def covered_by_earliest(self) -> bool:
        return self.earliest is not None and self.earliest.covered

    @property
    def covered_by_latest(self) -> bool:
        return self.latest is not None and self.latest.covered

    @property
    def covered_by_longest(self) -> bool:
        return self.longest is not None and self.longest.covered

    @property
    def covered(self) -> bool:
        return self.covered_by_earliest or self.covered_by_latest or self.covered_by_longest


@dataclass(frozen=True)
class PackageSummary:
    """Covered journal counts for one package."""
    package_name: str
    total_journals: int
    covered_journals: int
    covered_pct: float


@dataclass(frozen=True)
class PackageIndexEntry:
    """Stable numeric index used to name a package's detail output."""
    index: int
    package_name: str
