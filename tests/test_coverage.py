"""Tests for effective coverage normalization."""

from datetime import date

from serials_overlap.core.coverage import (
    normalize_holding,
    parse_date,
    parse_embargo,
    resolve_date,
)
from serials_overlap.core.types import HoldingRecord

PROCESSING_DATE = date(2024, 6, 1)


def _record(**kwargs) -> HoldingRecord:
    fields = {"package_name": "A", "journal_id": "123", "title": "Journal of Tests"}
    fields.update(kwargs)
    return HoldingRecord(**fields)


def test_custom_dates_override_managed_dates():
    record = _record(
        managed_begin="2000-01-01",
        managed_end="2010-12-31",
        custom_begin="2003-01-01",
        custom_end="2008-06-30",
    )

    holding = normalize_holding(record, PROCESSING_DATE)

    assert holding.effective_begin == date(2003, 1, 1)
    assert holding.effective_end == date(2008, 6, 30)


def test_managed_dates_used_when_custom_empty():
    record = _record(managed_begin="2000-01-01", managed_end="2010-12-31", custom_begin="  ")

    holding = normalize_holding(record, PROCESSING_DATE)

    assert holding.effective_begin == date(2000, 1, 1)
    assert holding.effective_end == date(2010, 12, 31)
    assert holding.duration_days == (date(2010, 12, 31) - date(2000, 1, 1)).days


def test_resolve_date_prefers_custom():
    assert resolve_date("2001-01-01", "1999-01-01") == "2001-01-01"
    assert resolve_date("", "1999-01-01") == "1999-01-01"
    assert resolve_date(None, None) == ""


def test_present_end_resolves_to_processing_date():
    record = _record(managed_begin="2015-01-01", custom_end="present")

    holding = normalize_holding(record, PROCESSING_DATE)

    assert holding.effective_end == PROCESSING_DATE
    assert holding.embargo_days is None


def test_present_sentinel_is_case_insensitive():
    record = _record(managed_begin="2015-01-01", managed_end="Present")

    holding = normalize_holding(record, PROCESSING_DATE)

    assert holding.effective_end == PROCESSING_DATE


def test_embargo_subtracted_from_present_end():
    record = _record(managed_begin="2015-01-01", custom_end="present", embargo="6 months")

    holding = normalize_holding(record, PROCESSING_DATE)

    assert holding.embargo_days == 180
    assert holding.effective_end == date(2023, 12, 4)
    assert holding.effective_begin == date(2015, 1, 1)


def test_embargo_units():
    assert parse_embargo("2 years") == 730
    assert parse_embargo("3 months") == 90
    assert parse_embargo("12 Months") == 360
    assert parse_embargo("10 days") == 10
    assert parse_embargo("4 weeks") == 4
    assert parse_embargo("7") == 7


def test_malformed_embargo_is_ignored():
    assert parse_embargo(None) is None
    assert parse_embargo("") is None
    assert parse_embargo("six months") is None

    record = _record(managed_begin="2000-01-01", managed_end="2010-01-01", embargo="N/A years")
    holding = normalize_holding(record, PROCESSING_DATE)

    assert holding.embargo_days is None
    assert holding.effective_end == date(2010, 1, 1)


def test_parse_date_formats():
    assert parse_date("2010-02-03") == date(2010, 2, 3)
    assert parse_date(" 2010-02-03T00:00:00 ") == date(2010, 2, 3)
    assert parse_date("02/03/2010", ["%m/%d/%Y"]) == date(2010, 2, 3)
    assert parse_date("02/03/2010") is None
    assert parse_date("") is None
    assert parse_date(None) is None
    assert parse_date("not a date") is None


def test_malformed_date_gives_undefined_duration():
    record = _record(managed_begin="garbage", managed_end="2010-01-01")

    holding = normalize_holding(record, PROCESSING_DATE)

    assert holding.effective_begin is None
    assert holding.effective_end == date(2010, 1, 1)
    assert holding.duration_days is None


def test_empty_end_stays_undefined():
    record = _record(managed_begin="2000-01-01", embargo="1 years")

    holding = normalize_holding(record, PROCESSING_DATE)

    assert holding.effective_end is None
    assert holding.duration_days is None
    assert holding.embargo_days == 365


def test_journal_key_combines_identifier_and_title():
    first = normalize_holding(_record(journal_id="1", title="Nature"), PROCESSING_DATE)
    second = normalize_holding(_record(journal_id="2", title="Nature"), PROCESSING_DATE)

    assert first.journal_key != second.journal_key
    assert "Nature" in first.journal_key


def test_empty_present_token_never_matches():
    record = _record(managed_begin="2000-01-01", managed_end="")

    holding = normalize_holding(record, PROCESSING_DATE, present_token="")

    assert holding.effective_end is None
    assert holding.duration_days is None
