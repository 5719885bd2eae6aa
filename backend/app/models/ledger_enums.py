"""
Ledger enumerations.
"""

import enum


class LedgerEntryType(str, enum.Enum):
    """Ledger entry type enumeration (known values; the ledger may carry others)."""
    TOP_UP = "Top-up"  # Cash made available against a trip
    VIRTUAL_TOP_UP = "Virtual Top-up"  # Credit + immediate debit for direct payments
    ON_TRIP_PAYMENT = "On-Trip Payment"  # Cash disbursed during a trip
    TRIP_CREATED = "Trip Created"  # Advance paid out at trip creation
    TRIP_CLOSED = "Trip Closed"  # Informational marker
    SETTLEMENT = "Settlement"


class LedgerDirection(str, enum.Enum):
    """Ledger entry direction enumeration."""
    CREDIT = "Credit"  # Money entering the agent wallet
    DEBIT = "Debit"  # Money leaving the agent wallet


TOP_UP_TYPES = (LedgerEntryType.TOP_UP.value, LedgerEntryType.VIRTUAL_TOP_UP.value)
