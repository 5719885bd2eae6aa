"""
Ledger Entry record model.

Immutable, append-only record of a cash movement against a trip.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from backend.app.core.config import settings
from backend.app.models.references import TripRef, coerce_identifier, extract_identifier, extract_trip_id
from backend.app.models.trip import coerce_amount
from backend.app.models.ledger_enums import LedgerDirection


class LedgerEntry(BaseModel):
    """
    Ledger Entry model.

    References a Trip by id (weak reference: lookup only). The reference is a
    TripRef: a raw id or a populated trip object.
    NO updates or deletions.
    """
    id: Optional[str] = None

    # Linkage
    trip_id: Optional[TripRef] = Field(default=None, alias="tripId")
    lr_number: Optional[str] = Field(default=None, alias="lrNumber")
    agent_id: Optional[str] = Field(default=None, alias="agentId")
    agent_name: Optional[str] = Field(default=None, alias="agent")

    # Entry details
    type: Optional[str] = None
    payment_made_by: Optional[str] = Field(default=None, alias="paymentMadeBy")
    direction: Optional[str] = None
    bank: str = settings.default_bank
    is_informational: bool = Field(default=False, alias="isInformational")

    # Financials
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    advance: Optional[Decimal] = None

    # Timestamps (raw ISO strings)
    date: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @model_validator(mode="before")
    @classmethod
    def flatten_raw_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if not coerce_identifier(data.get("id")) and "_id" in data:
            data["id"] = data["_id"]
        agent = data.get("agent")
        if isinstance(agent, dict):
            data["agent"] = agent.get("name")
        return data

    @field_validator("id", "lr_number", mode="before")
    @classmethod
    def normalize_identifier(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @field_validator("trip_id", mode="before")
    @classmethod
    def normalize_trip_ref(cls, value: Any) -> Any:
        if isinstance(value, (dict, BaseModel)):
            return value
        return coerce_identifier(value)

    @field_validator("agent_id", mode="before")
    @classmethod
    def normalize_agent_ref(cls, value: Any) -> Optional[str]:
        return extract_identifier(value)

    @field_validator("amount", mode="before")
    @classmethod
    def default_amount(cls, value: Any) -> Any:
        return coerce_amount(value)

    @field_validator("advance", mode="before")
    @classmethod
    def blank_advance(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("bank", mode="before")
    @classmethod
    def default_bank(cls, value: Any) -> Any:
        return value or settings.default_bank

    @field_validator("is_informational", mode="before")
    @classmethod
    def default_informational(cls, value: Any) -> Any:
        return value is True

    @property
    def referenced_trip_id(self) -> Optional[str]:
        return extract_trip_id(self.trip_id)

    @property
    def is_credit(self) -> bool:
        return self.direction == LedgerDirection.CREDIT.value

    def __repr__(self):
        return f"<LedgerEntry(id={self.id}, type='{self.type}', amount={self.amount})>"
