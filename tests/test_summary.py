"""Tests for result aggregation."""

from serials_overlap.core.engine import run_overlap
from serials_overlap.core.summary import (
    build_package_index,
    covered_percentage,
    sort_detail,
    summarize,
)


def _results(holding):
    holdings = [
        holding("A", "2010-01-01", "2020-01-01", journal_key="1|X"),
        holding("A", "2010-01-01", "2020-01-01", journal_key="2|Y"),
        holding("A", "2010-01-01", "2020-01-01", journal_key="3|Z"),
        holding("A", "2010-01-01", "2020-01-01", journal_key="4|W"),
        holding("B", "2000-01-01", "2021-01-01", journal_key="1|X"),
        holding("B", "2000-01-01", "2015-01-01", journal_key="2|Y"),
        holding("B", "2000-01-01", "2021-01-01", journal_key="3|Z"),
    ]
    return run_overlap(holdings, ["A", "B"])


def test_summary_counts_and_percentage(holding):
    summaries = summarize(_results(holding), ["A", "B"])

    a, b = summaries
    assert (a.package_name, a.total_journals, a.covered_journals) == ("A", 4, 2)
    assert a.covered_pct == 50.0
    assert (b.package_name, b.total_journals, b.covered_journals) == ("B", 3, 0)
    assert b.covered_pct == 0.0


def test_summary_for_package_without_results():
    [summary] = summarize([], ["Empty"])

    assert summary.total_journals == 0
    assert summary.covered_journals == 0
    assert summary.covered_pct == 0.0


def test_covered_percentage():
    assert covered_percentage(1, 3) == 100 / 3
    assert covered_percentage(2, 3) == 100 * 2 / 3
    assert covered_percentage(3, 3) == 100.0
    assert covered_percentage(0, 0) == 0.0


def test_sort_detail_puts_covered_first_and_is_stable(holding):
    a_results = [r for r in _results(holding) if r.holding.package_name == "A"]

    ordered = sort_detail(a_results)

    assert [r.covered for r in ordered] == [True, True, False, False]
    assert [r.holding.journal_key for r in ordered] == ["1|X", "3|Z", "2|Y", "4|W"]


def test_detail_and_summary_counts_agree(holding):
    results = _results(holding)
    summaries = {s.package_name: s for s in summarize(results, ["A", "B"])}

    for name, summary in summaries.items():
        rows = [r for r in results if r.holding.package_name == name]
        assert summary.total_journals == len(rows)
        assert summary.covered_journals == sum(r.covered for r in rows)


def test_package_index_is_one_based_and_ordered():
    index = build_package_index(["Gale", "JSTOR", "ProQuest"])

    assert [(e.index, e.package_name) for e in index] == [
        (1, "Gale"),
        (2, "JSTOR"),
        (3, "ProQuest"),
    ]


def test_duplicate_journal_rows_count_once(holding):
    holdings = [
        holding("A", "2010-01-01", "2012-01-01"),
        holding("A", "2000-01-01", "2020-01-01"),
        holding("B", "2000-01-01", "2001-01-01", journal_key="2|Other"),
    ]

    [a, b] = summarize(run_overlap(holdings, ["A", "B"]), ["A", "B"])

    assert (a.total_journals, a.covered_journals, a.covered_pct) == (1, 0, 0.0)
    assert b.total_journals == 1
