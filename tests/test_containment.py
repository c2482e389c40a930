"""Tests for interval containment."""

from serials_overlap.core.containment import is_covered_by


def test_contained_interval(holding):
    investigated = holding("A", "2010-01-01", "2020-01-01")
    candidate = holding("B", "2005-01-01", "2021-01-01")

    assert is_covered_by(investigated, candidate)
    assert not is_covered_by(candidate, investigated)


def test_identical_intervals_are_covered(holding):
    investigated = holding("A", "2010-01-01", "2020-01-01")
    candidate = holding("B", "2010-01-01", "2020-01-01")

    assert is_covered_by(investigated, candidate)


def test_candidate_ending_early_does_not_cover(holding):
    investigated = holding("A", "2015-01-01", "2023-12-04")
    candidate = holding("C", "2010-01-01", "2023-12-01")

    assert not is_covered_by(investigated, candidate)


def test_candidate_starting_late_does_not_cover(holding):
    investigated = holding("A", "2000-01-01", "2010-01-01")
    candidate = holding("B", "2000-01-02", "2020-01-01")

    assert not is_covered_by(investigated, candidate)


def test_undefined_bounds_never_cover(holding):
    full = holding("B", "1900-01-01", "2100-01-01")

    assert not is_covered_by(holding("A", None, "2010-01-01"), full)
    assert not is_covered_by(holding("A", "2000-01-01", None), full)
    assert not is_covered_by(holding("A", "2000-01-01", "2010-01-01"), holding("B", None, "2100-01-01"))
    assert not is_covered_by(holding("A", "2000-01-01", "2010-01-01"), holding("B", "1900-01-01", None))


def test_missing_candidate_does_not_cover(holding):
    assert not is_covered_by(holding("A", "2000-01-01", "2010-01-01"), None)
