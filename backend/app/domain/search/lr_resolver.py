"""
LR Resolver.

Responsible for turning LR search results into exactly one trip.
Follows priority (first applicable strategy wins):
1. First trip returned by the search
2. Trip referenced by the first ledger entry returned by the search

The search collaborator's ordering is authoritative; nothing is re-sorted.
"""

from typing import Callable, List, Optional, Sequence

from backend.app.core.exceptions import EmptyQueryError, LRNotFoundError, NoTripForLedgerEntryError
from backend.app.models.ledger_entry import LedgerEntry
from backend.app.models.trip import Trip
from backend.app.schemas.search import MatchedVia, ResolutionResult

Strategy = Callable[[str, Sequence[Trip], Sequence[LedgerEntry]], Optional[ResolutionResult]]


def resolve_by_trip(query: str, trips: Sequence[Trip], ledger: Sequence[LedgerEntry]) -> Optional[ResolutionResult]:
    if not trips:
        return None
    trip = trips[0]
    return ResolutionResult(
        trip_id=trip.id,
        matched_via=MatchedVia.TRIP,
        multiple_candidates=len(trips) > 1,
        candidate_count=len(trips),
        lr_number=trip.display_lr
    )


def resolve_by_ledger(query: str, trips: Sequence[Trip], ledger: Sequence[LedgerEntry]) -> Optional[ResolutionResult]:
    if not ledger:
        return None
    entry = ledger[0]
    trip_id = entry.referenced_trip_id
    if not trip_id:
        # A record exists but is unlinked: distinct from plain not-found
        raise NoTripForLedgerEntryError(query, ledger_entry_id=entry.id)
    return ResolutionResult(
        trip_id=trip_id,
        matched_via=MatchedVia.LEDGER,
        multiple_candidates=False,
        candidate_count=1,
        lr_number=entry.lr_number
    )


DEFAULT_STRATEGIES: List[Strategy] = [resolve_by_trip, resolve_by_ledger]


class LRResolver:

    def __init__(self, strategies: Optional[Sequence[Strategy]] = None):
        self.strategies = list(strategies) if strategies is not None else list(DEFAULT_STRATEGIES)

    def resolve(self, query: str, trips: Sequence[Trip], ledger: Sequence[LedgerEntry]) -> ResolutionResult:
        """
        Resolve search results to a single trip.

        Raises:
            EmptyQueryError: If the query is blank after trimming.
            NoTripForLedgerEntryError: If only ledger entries matched and the
                first one carries no trip reference.
            LRNotFoundError: If nothing matched.
        """
        query = (query or "").strip()
        if not query:
            raise EmptyQueryError()

        for strategy in self.strategies:
            result = strategy(query, trips, ledger)
            if result is not None:
                return result

        raise LRNotFoundError(query)


def resolve(query: str, trips: Sequence[Trip], ledger: Sequence[LedgerEntry]) -> ResolutionResult:
    return LRResolver().resolve(query, trips, ledger)
