"""
Trip record model.

Trips are created by Agents and mutated by settlement and dispute actions
elsewhere. This core only reads them.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from backend.app.models.references import coerce_identifier, extract_identifier
from backend.app.models.trip_enums import TripStatus, LRSheetStatus


def coerce_amount(value: Any) -> Any:
    """Missing or blank amounts count as zero."""
    if value is None or value == "":
        return Decimal("0")
    return value


class Trip(BaseModel):
    """
    Trip model.

    Identity is `id`. `lr_number` / `trip_id` are the human-facing keys and
    are not guaranteed unique across branches.
    """
    id: str
    lr_number: Optional[str] = Field(default=None, alias="lrNumber")
    trip_id: Optional[str] = Field(default=None, alias="tripId")
    date: Optional[str] = None

    # Ownership
    agent_id: Optional[str] = Field(default=None, alias="agentId")
    agent_name: Optional[str] = Field(default=None, alias="agentName")
    branch_id: Optional[str] = Field(default=None, alias="branchId")
    branch: Optional[str] = None

    # Status
    status: Optional[str] = None
    is_bulk: bool = Field(default=False, alias="isBulk")
    lr_sheet: Optional[str] = Field(default=None, alias="lrSheet")

    # Financials
    freight_amount: Decimal = Field(default=Decimal("0"), alias="freightAmount")
    advance_paid: Decimal = Field(default=Decimal("0"), alias="advancePaid")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @model_validator(mode="before")
    @classmethod
    def flatten_raw_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        # Document-store ids
        if not coerce_identifier(data.get("id")) and "_id" in data:
            data["id"] = data["_id"]

        # Agent may be populated or only named
        agent = data.get("agent")
        if not data.get("agentName") and not data.get("agent_name"):
            if isinstance(agent, dict):
                data["agentName"] = agent.get("name")
            elif isinstance(agent, str):
                data["agentName"] = agent

        # Branch may be populated
        branch = data.get("branch")
        if isinstance(branch, dict):
            data["branch"] = branch.get("name")
        elif not branch and data.get("branchName"):
            data["branch"] = data["branchName"]
        return data

    @field_validator("id", "lr_number", "trip_id", "branch_id", mode="before")
    @classmethod
    def normalize_identifier(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @field_validator("agent_id", mode="before")
    @classmethod
    def normalize_agent_ref(cls, value: Any) -> Optional[str]:
        return extract_identifier(value)

    @field_validator("freight_amount", "advance_paid", mode="before")
    @classmethod
    def default_amounts(cls, value: Any) -> Any:
        return coerce_amount(value)

    @field_validator("is_bulk", mode="before")
    @classmethod
    def default_is_bulk(cls, value: Any) -> Any:
        return bool(value)

    @property
    def display_lr(self) -> Optional[str]:
        """LR shown to users: LR number, else trip id."""
        return self.lr_number or self.trip_id

    @property
    def is_active(self) -> bool:
        return self.status == TripStatus.ACTIVE.value

    @property
    def lr_sheet_pending(self) -> bool:
        return not self.lr_sheet or self.lr_sheet == LRSheetStatus.NOT_RECEIVED.value

    def __repr__(self):
        return f"<Trip(id={self.id}, lr_number='{self.lr_number}', status='{self.status}')>"
