"""
Custom exceptions for consistent, classified error outcomes.

Provides standardized error codes for the resolver and the aggregator.
"""

from typing import Any, Dict


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class EmptyQueryError(AppException):
    """Raised when the search input is blank after trimming."""

    def __init__(self):
        super().__init__(
            message="Search query is empty",
            error_code="ERR_SEARCH_EMPTY"
        )


class LRNotFoundError(AppException):
    """Raised when a search yields neither trips nor ledger entries."""

    def __init__(self, query: str):
        super().__init__(
            message=f'No trips found for "{query}"',
            error_code="ERR_SEARCH_NOT_FOUND",
            details={"query": query}
        )


class NoTripForLedgerEntryError(AppException):
    """Raised when a ledger entry matched but its trip reference is unusable."""

    def __init__(self, query: str, ledger_entry_id: Any = None):
        super().__init__(
            message="No trip found for this LR number",
            error_code="ERR_SEARCH_NO_TRIP",
            details={"query": query, "ledger_entry_id": ledger_entry_id}
        )


class TripIdMissingError(AppException):
    """Raised when the first trip returned by the search carries no id."""

    def __init__(self, query: str):
        super().__init__(
            message="Trip ID not found",
            error_code="ERR_SEARCH_TRIP_ID_MISSING",
            details={"query": query}
        )


class AggregationSourceUnavailable(AppException):
    """
    Raised when the precomputed stats collaborator fails.

    Never surfaces to callers of the aggregator: local computation takes over.
    """

    def __init__(self, reason: str = "Precomputed stats source unavailable"):
        super().__init__(
            message=reason,
            error_code="ERR_STATS_SOURCE",
            details={"reason": reason}
        )
