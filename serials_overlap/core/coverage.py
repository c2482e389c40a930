"""
Effective coverage interval normalization.

Turns a raw holding row into a Holding by:
1. Preferring custom coverage dates over managed ones when set
2. Resolving an open-ended "present" end to the processing date
3. Subtracting the embargo period from the end date
4. Computing the coverage duration in days

Malformed dates and embargoes never raise. The affected value becomes
None and the holding can never satisfy a containment test.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from ..logging_utils import log_event
from .types import Holding, HoldingRecord

logger = logging.getLogger(__name__)

DEFAULT_PRESENT_TOKEN = "present"

EMBARGO_UNIT_DAYS = {
    "year": 365,
    "years": 365,
    "month": 30,
    "months": 30,
}


def resolve_date(custom: str | None, managed: str | None) -> str:
    """Return the custom date string when set, otherwise the managed one."""
    custom = (custom or "").strip()
    if custom:
        return custom
    return (managed or "").strip()


def parse_date(value: str | None, formats: Sequence[str] = ()) -> date | None:
    """Parse an ISO date, then each extra strftime format in order.

    Returns None for empty or unparseable values.
    """
    raw = (value or "").strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        pass
    for fmt in formats:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    return None


def parse_embargo(text: str | None) -> int | None:
    """Convert an embargo like "6 Months" into days.

    The text is split on the first space into an integer value and a unit.
    Years count as 365 days, months as 30 and any other unit as 1.

    Returns:
        Number of embargo days, or None when the text is absent or its
        value is not an integer
    """
    if text is None:
        return None
    raw = text.strip()
    if not raw:
        return None
    value, _, unit = raw.partition(" ")
    try:
        amount = int(value)
    except ValueError:
        return None
    return amount * EMBARGO_UNIT_DAYS.get(unit.strip().lower(), 1)


def coverage_duration(begin: date | None, end: date | None) -> int | None:
    if begin is None or end is None:
        return None
    return (end - begin).days


def normalize_holding(
    record: HoldingRecord,
    processing_date: date,
    present_token: str = DEFAULT_PRESENT_TOKEN,
    date_formats: Sequence[str] = (),
) -> Holding:
    """Build the normalized Holding for one raw record.

    Args:
        record: Raw holding row
        processing_date: Date substituted for an open-ended "present" end
        present_token: Sentinel marking an open-ended end (case-insensitive)
        date_formats: Extra strftime formats tried after ISO parsing

    Returns:
        Holding with effective begin/end, embargo days and duration
    """
    begin_raw = resolve_date(record.custom_begin, record.managed_begin)
    end_raw = resolve_date(record.custom_end, record.managed_end)

    begin = parse_date(begin_raw, date_formats)
    if begin_raw and begin is None:
        _log_malformed("Malformed begin date", "malformed_date", record, begin_raw)

    if present_token and end_raw.lower() == present_token.strip().lower():
        end = processing_date
    else:
        end = parse_date(end_raw, date_formats)
        if end_raw and end is None:
            _log_malformed("Malformed end date", "malformed_date", record, end_raw)

    embargo_days = parse_embargo(record.embargo)
    if record.embargo and record.embargo.strip() and embargo_days is None:
        _log_malformed("Malformed embargo", "malformed_embargo", record, record.embargo)
    if end is not None and embargo_days is not None:
        end = end - timedelta(days=embargo_days)

    return Holding(
        journal_key=record.journal_key,
        package_name=record.package_name,
        hide_on_publication_finder=record.hide_on_publication_finder,
        effective_begin=begin,
        effective_end=end,
        embargo_days=embargo_days,
        duration_days=coverage_duration(begin, end),
    )


def normalize_holdings(
    records: Iterable[HoldingRecord],
    processing_date: date,
    present_token: str = DEFAULT_PRESENT_TOKEN,
    date_formats: Sequence[str] = (),
) -> list[Holding]:
    """Normalize every record, preserving input order."""
    return [
        normalize_holding(record, processing_date, present_token, date_formats)
        for record in records
    ]


def _log_malformed(message: str, event: str, record: HoldingRecord, value: str) -> None:
    log_event(
        logger,
        message,
        level=logging.DEBUG,
        event=event,
        row=record.row_number,
        package=record.package_name,
        value=value,
    )
