"""
Analytics Schemas for the dashboards.
"""

from datetime import date
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Mapping, Optional, Union


class DateRange(BaseModel):
    """Inclusive date filter. A missing bound is unbounded on that side."""
    start: Optional[date] = Field(default=None, alias="startDate")
    end: Optional[date] = Field(default=None, alias="endDate")

    class Config:
        populate_by_name = True

    @property
    def is_bounded(self) -> bool:
        return self.start is not None or self.end is not None

    def contains(self, day: Optional[str]) -> bool:
        """
        Check an ISO calendar day (YYYY-MM-DD) against the range.

        Records without a date fall outside any bounded range.
        """
        if not self.is_bounded:
            return True
        if not day:
            return False
        if self.start is not None and day < self.start.isoformat():
            return False
        if self.end is not None and day > self.end.isoformat():
            return False
        return True


class BankMovement(BaseModel):
    """Today's movement through one bank (or cash)."""
    bank: str
    credit: Decimal = Decimal("0")
    debit: Decimal = Decimal("0")
    net: Decimal = Decimal("0")
    count: int = 0


class DashboardStats(BaseModel):
    """KPI set for the Finance dashboard."""
    mid_payments_today: Decimal = Field(default=Decimal("0"), alias="midPaymentsToday")
    top_ups_today: Decimal = Field(default=Decimal("0"), alias="topUpsToday")
    active_trips: int = Field(default=0, alias="activeTrips")
    completed_trips: int = Field(default=0, alias="completedTrips")
    pending_trips: int = Field(default=0, alias="pendingTrips")
    disputed_trips: int = Field(default=0, alias="disputedTrips")
    total_trips: int = Field(default=0, alias="totalTrips")
    lr_sheets_not_received: int = Field(default=0, alias="lrSheetsNotReceived")
    normal_trips: int = Field(default=0, alias="normalTrips")
    bulk_trips: int = Field(default=0, alias="bulkTrips")
    bank_movements_today: int = Field(default=0, alias="bankMovementsToday")
    total_bank_net: Decimal = Field(default=Decimal("0"), alias="totalBankNet")
    bank_summary: List[BankMovement] = Field(default_factory=list, alias="bankSummary")

    class Config:
        populate_by_name = True

    @classmethod
    def from_precomputed(cls, snapshot: Union["DashboardStats", Mapping[str, Any]]) -> "DashboardStats":
        """
        Take an external snapshot verbatim, field by field.

        Missing or null numeric fields become 0. Keys may be camelCase or snake_case.
        """
        if isinstance(snapshot, DashboardStats):
            return snapshot.model_copy(deep=True)

        values: Dict[str, Any] = {}
        for name, field in cls.model_fields.items():
            value = snapshot.get(field.alias)
            if value is None:
                value = snapshot.get(name)
            if value is None:
                continue
            values[name] = value
        return cls(**values)
