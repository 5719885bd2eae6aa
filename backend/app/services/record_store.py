"""
Record Store.

In-memory, read-only snapshot of trips and ledger entries supplied by the
data-fetch layer. Refreshing means building a new store.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from backend.app.models.ledger_entry import LedgerEntry
from backend.app.models.trip import Trip
from backend.app.schemas.search import SearchResults
from backend.app.domain.ledger.normalization import normalize_lr


class RecordStore:

    def __init__(self, trips: Iterable[Trip] = (), ledger: Iterable[LedgerEntry] = ()):
        self._trips: Tuple[Trip, ...] = tuple(trips)
        self._ledger: Tuple[LedgerEntry, ...] = tuple(ledger)

    @classmethod
    def from_raw(
        cls,
        trips: Iterable[Mapping[str, Any]] = (),
        ledger: Iterable[Mapping[str, Any]] = ()
    ) -> "RecordStore":
        """Parse raw camelCase dictionaries from the data-fetch layer."""
        return cls(
            trips=[Trip.model_validate(raw) for raw in trips],
            ledger=[LedgerEntry.model_validate(raw) for raw in ledger]
        )

    @property
    def trips(self) -> Tuple[Trip, ...]:
        return self._trips

    @property
    def ledger(self) -> Tuple[LedgerEntry, ...]:
        return self._ledger

    def get_trip(self, trip_id: str) -> Optional[Trip]:
        for trip in self._trips:
            if trip.id == trip_id:
                return trip
        return None

    def get_trip_by_lr(self, lr_number: str) -> Optional[Trip]:
        lr_number = normalize_lr(lr_number)
        for trip in self._trips:
            if lr_number and lr_number in (trip.lr_number, trip.trip_id):
                return trip
        return None

    def search(self, query: str) -> SearchResults:
        """
        Local full-text fallback for the search collaborator.

        Case-insensitive substring match on trip LR number / trip id and on
        ledger LR number. Store order is preserved.
        """
        needle = (query or "").strip().lower()
        if not needle:
            return SearchResults()

        def matches(*values: Optional[str]) -> bool:
            return any(value and needle in value.lower() for value in values)

        return SearchResults(
            trips=[trip for trip in self._trips if matches(trip.lr_number, trip.trip_id)],
            ledger=[entry for entry in self._ledger if matches(entry.lr_number)]
        )

    def trips_for_agent(
        self,
        agent_id: Optional[str],
        agent_name: Optional[str] = None,
        branch: Optional[str] = None
    ) -> List[Trip]:
        """
        Trips belonging to an agent, matched by id or, failing that, by name.

        When a branch is given, trips from other branches are dropped; trips
        without a branch are kept.
        """
        agent_id = (agent_id or "").strip()
        trips = [
            trip for trip in self._trips
            if (agent_id and trip.agent_id == agent_id)
            or (agent_name and trip.agent_name == agent_name)
        ]
        if branch:
            trips = [trip for trip in trips if not trip.branch or trip.branch == branch]
        return trips

    def ledger_for_trip(self, trip_id: str) -> List[LedgerEntry]:
        return [entry for entry in self._ledger if entry.referenced_trip_id == trip_id]

    def ledger_for_agent(self, agent_id: Optional[str], agent_name: Optional[str] = None) -> List[LedgerEntry]:
        agent_id = (agent_id or "").strip()
        return [
            entry for entry in self._ledger
            if (agent_id and entry.agent_id == agent_id)
            or (agent_name and entry.agent_name == agent_name)
        ]
