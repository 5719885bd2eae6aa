"""
Ledger Matcher.

An On-Trip Payment reaches the ledger two ways:
1. Directly, tagged with who paid (`paymentMadeBy`).
2. As a pair written by Finance: a Top-up plus the On-Trip Payment it funds,
   in two separate writes of one user action.

Finance mid-payments must count each real cash movement once, whichever
shape it took.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, NamedTuple, Optional, Sequence

from backend.app.core.config import settings
from backend.app.models.ledger_entry import LedgerEntry
from backend.app.models.ledger_enums import LedgerEntryType, LedgerDirection
from backend.app.domain.ledger.normalization import effective_timestamp, is_dated, same_trip

# Amount tolerance when pairing entries for the wallet balance
BALANCE_PAIR_TOLERANCE = Decimal("0.01")


class LinkedPaymentPair(NamedTuple):
    """A Finance Top-up and the On-Trip Payment it funded. Never persisted."""
    top_up: LedgerEntry
    payment: LedgerEntry


class LedgerMatcher:

    def __init__(self, window_seconds: Optional[int] = None, finance_payer: Optional[str] = None):
        if window_seconds is None:
            window_seconds = settings.pairing_window_seconds
        self.window = timedelta(seconds=window_seconds)
        self.finance_payer = finance_payer or settings.finance_payer

    def is_finance_top_up(self, entry: LedgerEntry) -> bool:
        return entry.type == LedgerEntryType.TOP_UP.value and entry.payment_made_by == self.finance_payer

    def find_pairing_top_up(self, payment: LedgerEntry, all_entries: Iterable[LedgerEntry]) -> Optional[LedgerEntry]:
        """
        Find a Finance Top-up written with this payment.

        Match: same amount, same trip (LR number or trip id), timestamps at
        most `window` apart in either direction.
        """
        payment_time = effective_timestamp(payment)
        if payment_time is None:
            return None

        for candidate in all_entries:
            if candidate is payment or not self.is_finance_top_up(candidate):
                continue
            if candidate.amount != payment.amount or not same_trip(candidate, payment):
                continue
            candidate_time = effective_timestamp(candidate)
            if candidate_time is None:
                continue
            if abs(candidate_time - payment_time) <= self.window:
                return candidate
        return None

    def is_counted_payment(
        self,
        entry: LedgerEntry,
        all_entries: Sequence[LedgerEntry],
        today: Optional[date] = None
    ) -> bool:
        """
        Decide whether an entry counts toward Finance mid-payments today.

        Rules (first applicable wins):
        1. Only On-Trip Payments dated today are eligible.
        2. Direct: paid by Finance.
        3. Pairing: a Finance Top-up for the same trip and amount within the window.
        """
        today = today or date.today()
        if entry.type != LedgerEntryType.ON_TRIP_PAYMENT.value or not is_dated(entry, today):
            return False
        if entry.payment_made_by == self.finance_payer:
            return True
        return self.find_pairing_top_up(entry, all_entries) is not None

    def counted_payments(
        self,
        entries: Sequence[LedgerEntry],
        today: Optional[date] = None,
        candidates: Optional[Sequence[LedgerEntry]] = None
    ) -> List[LedgerEntry]:
        """Counted payments among `entries`; pairing partners come from `candidates` (default `entries`)."""
        today = today or date.today()
        pool = entries if candidates is None else candidates
        return [entry for entry in entries if self.is_counted_payment(entry, pool, today)]

    def find_finance_payment_pairs(self, entries: Sequence[LedgerEntry]) -> List[LinkedPaymentPair]:
        """
        Pair Finance Top-up credits with Finance On-Trip Payment debits one-to-one.

        Each entry joins at most one pair; the first unconsumed debit in
        `entries` order wins. Used for wallet balances, where both halves of a
        pair cancel out.
        """
        pairs: List[LinkedPaymentPair] = []
        consumed = set()

        for credit in entries:
            if not self.is_finance_top_up(credit) or credit.direction != LedgerDirection.CREDIT.value:
                continue
            for debit in entries:
                if id(debit) in consumed:
                    continue
                if (
                    debit.type == LedgerEntryType.ON_TRIP_PAYMENT.value
                    and debit.payment_made_by == self.finance_payer
                    and debit.direction == LedgerDirection.DEBIT.value
                    and abs(credit.amount - debit.amount) <= BALANCE_PAIR_TOLERANCE
                    and same_trip(credit, debit)
                ):
                    pairs.append(LinkedPaymentPair(top_up=credit, payment=debit))
                    consumed.add(id(debit))
                    break
        return pairs


def is_counted_payment(entry: LedgerEntry, all_entries: Sequence[LedgerEntry], today: Optional[date] = None) -> bool:
    """Module-level shortcut using the configured window."""
    return LedgerMatcher().is_counted_payment(entry, all_entries, today)
