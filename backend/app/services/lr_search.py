"""
LR Search Service.

Global LR search: run the search, resolve to one trip, tell the user what
happened and open the trip page for their role. Never shows a picklist.
"""

from typing import Any, Callable, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from backend.app.core.exceptions import AppException, EmptyQueryError, TripIdMissingError
from backend.app.core.navigation import route_for
from backend.app.core.observability import get_logger, observed
from backend.app.domain.search.lr_resolver import LRResolver
from backend.app.models.ledger_entry import LedgerEntry
from backend.app.models.references import extract_identifier
from backend.app.models.trip import Trip
from backend.app.schemas.auth import CurrentUser
from backend.app.schemas.notification import NotificationKind
from backend.app.schemas.search import MatchedVia, ResolutionResult, SearchOutcome, SearchResults
from backend.app.services.record_store import RecordStore

logger = get_logger("lr_search")

SearchFn = Callable[[str], Union[SearchResults, Mapping[str, Any], None]]
NotifyFn = Callable[[NotificationKind, str], None]
NavigateFn = Callable[[str], None]

RecordT = TypeVar("RecordT", bound=BaseModel)

SEARCH_FAILED = "ERR_SEARCH_FAILED"


def success_message(resolution: ResolutionResult) -> str:
    if resolution.matched_via == MatchedVia.LEDGER:
        return "Opening trip from ledger entry"
    if resolution.multiple_candidates:
        return f"Found {resolution.candidate_count} trips. Opening first trip: {resolution.lr_number}"
    return f"Opening trip: {resolution.lr_number}"


# Error code -> toast kind. Not-found is informational, the rest are errors.
ERROR_KINDS = {
    "ERR_SEARCH_NOT_FOUND": NotificationKind.INFO,
    "ERR_SEARCH_NO_TRIP": NotificationKind.ERROR,
    "ERR_SEARCH_TRIP_ID_MISSING": NotificationKind.ERROR,
}


def parse_records(model: Type[RecordT], records: Optional[Iterable[Any]], kind: str) -> List[RecordT]:
    """Parse raw records one by one, skipping the malformed ones."""
    parsed: List[RecordT] = []
    for record in records or []:
        if isinstance(record, model):
            parsed.append(record)
            continue
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed search record",
                extra={"record_kind": kind, "error_count": exc.error_count()}
            )
    return parsed


class LRSearchService:

    def __init__(
        self,
        notify: NotifyFn,
        navigate: NavigateFn,
        search: Optional[SearchFn] = None,
        store: Optional[RecordStore] = None,
        resolver: Optional[LRResolver] = None
    ):
        if search is None:
            search = (store or RecordStore()).search
        self.search_fn = search
        self.notify = notify
        self.navigate = navigate
        self.resolver = resolver or LRResolver()

    def _run_search(self, query: str) -> SearchResults:
        raw = self.search_fn(query)
        if raw is None:
            return SearchResults()
        if isinstance(raw, SearchResults):
            return raw

        raw_trips = raw.get("trips") or []
        # The first trip wins, so it must be openable
        if raw_trips and not extract_identifier(raw_trips[0]):
            raise TripIdMissingError(query)

        return SearchResults(
            trips=parse_records(Trip, raw_trips, "trip"),
            ledger=parse_records(LedgerEntry, raw.get("ledger"), "ledger")
        )

    def _reject(self, exc: AppException) -> SearchOutcome:
        self.notify(ERROR_KINDS.get(exc.error_code, NotificationKind.ERROR), exc.message)
        return SearchOutcome(success=False, error_code=exc.error_code, message=exc.message)

    @observed("lr_search")
    def search(self, query: str, current_user: Optional[CurrentUser] = None) -> SearchOutcome:
        """
        Search by LR number and navigate to the single resolved trip.

        Returns:
            SearchOutcome: success with the navigated path, or the
            classified error code. Blank queries return quietly.
        """
        query = (query or "").strip()
        if not query:
            # Reported through the returned outcome only, no toast
            error = EmptyQueryError()
            return SearchOutcome(success=False, error_code=error.error_code, message=error.message)

        # 1. Search (external I/O already resolved by the collaborator)
        try:
            results = self._run_search(query)
        except AppException as exc:
            return self._reject(exc)
        except Exception as exc:
            logger.error("LR search collaborator failed", extra={"query": query, "error": str(exc)})
            message = "Search failed. " + (str(exc) or "Please check your connection and try again.")
            self.notify(NotificationKind.ERROR, message)
            return SearchOutcome(success=False, error_code=SEARCH_FAILED, message=message)

        # 2. Resolve
        try:
            resolution = self.resolver.resolve(query, results.trips, results.ledger)
        except AppException as exc:
            return self._reject(exc)

        # 3. Navigate
        role = current_user.role if current_user else None
        path = route_for(role, resolution.trip_id)
        self.navigate(path)

        message = success_message(resolution)
        self.notify(NotificationKind.SUCCESS, message)
        return SearchOutcome(success=True, path=path, resolution=resolution, message=message)
