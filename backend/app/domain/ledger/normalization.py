"""
Record normalization helpers.

Dates on records are raw ISO strings: either a calendar day ("2025-12-26")
or a full timestamp ("2025-12-26T10:15:00.000Z"). Day comparisons use the
ISO date prefix; window comparisons use parsed timestamps.
"""

from datetime import date, datetime
from typing import Optional, Union

from backend.app.models.ledger_entry import LedgerEntry
from backend.app.models.trip import Trip

Record = Union[Trip, LedgerEntry]


def iso_day(value: Optional[str]) -> Optional[str]:
    """ISO date prefix (YYYY-MM-DD) of a raw date string."""
    if not value:
        return None
    return value.strip()[:10] or None


def effective_date(record: Record) -> Optional[str]:
    """Calendar day of a record: `date` first, then `createdAt`."""
    day = iso_day(record.date)
    if day:
        return day
    return iso_day(getattr(record, "created_at", None))


def is_dated(record: Record, day: date) -> bool:
    return effective_date(record) == day.isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO string to a naive local datetime.

    Aware values are converted to local time first so that aware and naive
    inputs compare on the same clock. Day-only strings become midnight.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def has_time_component(value: Optional[str]) -> bool:
    return bool(value) and len(value.strip()) > 10


def effective_timestamp(entry: LedgerEntry) -> Optional[datetime]:
    """
    Moment a ledger entry was written.

    `date` when it carries a time, else `createdAt`, else midnight of `date`.
    """
    if has_time_component(entry.date):
        stamp = parse_timestamp(entry.date)
        if stamp is not None:
            return stamp
    stamp = parse_timestamp(entry.created_at)
    if stamp is not None:
        return stamp
    return parse_timestamp(iso_day(entry.date))


def normalize_lr(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def same_trip(first: LedgerEntry, second: LedgerEntry) -> bool:
    """Two entries reference the same trip, by LR number or by trip id."""
    lr_first, lr_second = normalize_lr(first.lr_number), normalize_lr(second.lr_number)
    if lr_first and lr_second and lr_first == lr_second:
        return True
    trip_first, trip_second = first.referenced_trip_id, second.referenced_trip_id
    return bool(trip_first and trip_second and trip_first == trip_second)
