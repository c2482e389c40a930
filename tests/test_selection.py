"""Tests for candidate selection strategies."""

from serials_overlap.core.selection import (
    select_candidates,
    select_earliest,
    select_latest,
    select_longest,
)


def test_no_alternates_gives_no_candidates(holding):
    only = holding("A", "2010-01-01", "2020-01-01")

    picks = select_candidates([only], "A")

    assert picks.earliest is None
    assert picks.latest is None
    assert picks.longest is None


def test_investigated_package_is_excluded(holding):
    own = holding("A", "1900-01-01", "2100-01-01")
    other = holding("B", "2010-01-01", "2011-01-01")

    picks = select_candidates([own, other], "A")

    assert picks.earliest is other
    assert picks.latest is other
    assert picks.longest is other


def test_earliest_prefers_longer_on_same_begin(holding):
    short = holding("B", "2000-01-01", "2005-01-01")
    long = holding("C", "2000-01-01", "2015-01-01")
    later = holding("D", "2001-01-01", "2030-01-01")

    assert select_earliest([short, later, long]) is long


def test_latest_prefers_longer_on_same_end(holding):
    short = holding("B", "2015-01-01", "2020-01-01")
    long = holding("C", "2001-01-01", "2020-01-01")
    earlier_end = holding("D", "1990-01-01", "2019-12-31")

    assert select_latest([short, earlier_end, long]) is long


def test_longest_ignores_dates(holding):
    a = holding("B", "2000-01-01", "2010-01-01")
    b = holding("C", "1980-01-01", "2000-01-01")

    assert select_longest([a, b]) is b


def test_exact_ties_resolve_on_package_name(holding):
    z = holding("Zeta", "2000-01-01", "2010-01-01")
    a = holding("Alpha", "2000-01-01", "2010-01-01")

    assert select_earliest([z, a]) is a
    assert select_latest([z, a]) is a
    assert select_longest([z, a]) is a


def test_undefined_values_rank_last_but_remain_eligible(holding):
    undefined = holding("B", None, "2020-01-01")
    defined = holding("C", "2010-01-01", "2011-01-01")

    assert select_earliest([undefined, defined]) is defined
    assert select_longest([undefined, defined]) is defined
    assert select_earliest([undefined]) is undefined
    assert select_longest([undefined]) is undefined


def test_latest_with_undefined_end(holding):
    open_end = holding("B", "2000-01-01", None)
    closed = holding("C", "2000-01-01", "2001-01-01")

    assert select_latest([open_end, closed]) is closed
    assert select_latest([open_end]) is open_end


def test_empty_input():
    assert select_earliest([]) is None
    assert select_latest([]) is None
    assert select_longest([]) is None
