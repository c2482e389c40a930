"""
Core domain models and overlap logic.

This package contains data types and business logic that is
independent of how holdings are read or reports are written.
"""

from .containment import is_covered_by
from .coverage import normalize_holding, normalize_holdings, parse_date, parse_embargo
from .engine import analyze_package, group_by_journal, run_overlap
from .errors import ConfigurationError
from .selection import select_candidates, select_earliest, select_latest, select_longest
from .summary import build_package_index, sort_detail, summarize
from .types import (
    Candidate,
    Holding,
    HoldingRecord,
    OverlapResult,
    PackageIndexEntry,
    PackageSummary,
)

__all__ = [
    "Candidate",
    "ConfigurationError",
    "Holding",
    "HoldingRecord",
    "OverlapResult",
    "PackageIndexEntry",
    "PackageSummary",
    "analyze_package",
    "build_package_index",
    "group_by_journal",
    "is_covered_by",
    "normalize_holding",
    "normalize_holdings",
    "parse_date",
    "parse_embargo",
    "run_overlap",
    "select_candidates",
    "select_earliest",
    "select_latest",
    "select_longest",
    "sort_detail",
    "summarize",
]
