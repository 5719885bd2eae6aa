"""
Agent wallet balance.

Replays an agent's ledger oldest first. Finance payment pairs cancel out,
informational rows are skipped, and trip creation always debits the advance.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from backend.app.models.ledger_entry import LedgerEntry
from backend.app.models.ledger_enums import LedgerEntryType
from backend.app.models.trip import Trip
from backend.app.domain.ledger.matcher import LedgerMatcher
from backend.app.domain.ledger.normalization import effective_timestamp, normalize_lr


def dedupe_key(entry: LedgerEntry) -> Tuple:
    """Id when present, else type, amount, timestamp and trip."""
    if entry.id is not None:
        return ("id", entry.id)
    return (
        "content",
        entry.type,
        entry.amount,
        entry.created_at or entry.date,
        normalize_lr(entry.lr_number) or entry.referenced_trip_id
    )


def dedupe_entries(entries: Iterable[LedgerEntry]) -> List[LedgerEntry]:
    """Drop repeated entries, keeping the first occurrence."""
    seen = set()
    unique = []
    for entry in entries:
        key = dedupe_key(entry)
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    return unique


def chronological(entries: Iterable[LedgerEntry]) -> List[LedgerEntry]:
    return sorted(entries, key=lambda entry: effective_timestamp(entry) or datetime.min)


def _find_trip(entry: LedgerEntry, trips: Sequence[Trip]) -> Optional[Trip]:
    trip_id = entry.referenced_trip_id
    lr_number = normalize_lr(entry.lr_number)
    for trip in trips:
        if trip_id and trip.id == trip_id:
            return trip
        if lr_number and trip.lr_number == lr_number:
            return trip
    return None


def trip_created_debit(entry: LedgerEntry, trips: Sequence[Trip]) -> Decimal:
    """Advance taken out when a trip is created: entry advance, then trip advance, then amount."""
    if entry.advance is not None and entry.advance > 0:
        return entry.advance
    trip = _find_trip(entry, trips)
    if trip is not None and trip.advance_paid > 0:
        return trip.advance_paid
    return entry.amount


def compute_agent_balance(
    entries: Iterable[LedgerEntry],
    trips: Sequence[Trip] = (),
    matcher: Optional[LedgerMatcher] = None
) -> Decimal:
    """
    Current wallet balance for one agent's ledger.

    Args:
        entries: The agent's ledger entries (any order, duplicates allowed)
        trips: Trips used to look up advances for "Trip Created" rows
        matcher: LedgerMatcher for Finance pair detection

    Returns:
        Balance (credits minus debits)
    """
    matcher = matcher or LedgerMatcher()
    ledger = chronological(dedupe_entries(entries))

    pairs = matcher.find_finance_payment_pairs(ledger)
    paired = {id(pair.top_up) for pair in pairs} | {id(pair.payment) for pair in pairs}

    balance = Decimal("0")
    for entry in ledger:
        if entry.type == LedgerEntryType.TRIP_CLOSED.value or entry.is_informational:
            continue
        if id(entry) in paired:
            continue
        if entry.type == LedgerEntryType.TRIP_CREATED.value:
            balance -= trip_created_debit(entry, trips)
            continue
        if entry.is_credit:
            balance += entry.amount
        else:
            balance -= entry.amount
    return balance
