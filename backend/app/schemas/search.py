"""
LR Search Schemas.
"""

import enum
from pydantic import BaseModel, Field
from typing import List, Optional

from backend.app.models.trip import Trip
from backend.app.models.ledger_entry import LedgerEntry


class SearchResults(BaseModel):
    """What the full-text search collaborator returns."""
    trips: List[Trip] = Field(default_factory=list)
    ledger: List[LedgerEntry] = Field(default_factory=list)


class MatchedVia(str, enum.Enum):
    """How a query was resolved to a trip."""
    TRIP = "Trip"
    LEDGER = "Ledger"


class ResolutionResult(BaseModel):
    """Resolver decision: exactly one trip, never a picklist."""
    trip_id: str
    matched_via: MatchedVia
    multiple_candidates: bool = False
    candidate_count: int = 1
    lr_number: Optional[str] = None


class SearchOutcome(BaseModel):
    """Classified result of the search flow, handed back to the UI layer."""
    success: bool
    path: Optional[str] = None
    resolution: Optional[ResolutionResult] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
