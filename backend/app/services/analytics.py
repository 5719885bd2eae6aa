"""
Analytics Service for the Finance dashboard.

Handles KPI aggregation over trips and ledger entries.
Focused on READ-ONLY operations: every call recomputes from its inputs.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from backend.app.core.exceptions import AggregationSourceUnavailable
from backend.app.core.observability import get_logger, observed
from backend.app.core.reliability import CircuitBreaker, CircuitOpenError, stats_source_breaker
from backend.app.models.ledger_entry import LedgerEntry
from backend.app.models.ledger_enums import TOP_UP_TYPES
from backend.app.models.trip import Trip
from backend.app.models.trip_enums import TripStatus
from backend.app.schemas.analytics import BankMovement, DashboardStats, DateRange
from backend.app.domain.ledger.matcher import LedgerMatcher
from backend.app.domain.ledger.normalization import effective_date, is_dated

logger = get_logger("analytics")

Snapshot = Union[DashboardStats, Mapping[str, Any]]
StatsSource = Callable[[Optional[DateRange]], Optional[Snapshot]]


def _sum_amounts(entries: Sequence[LedgerEntry]) -> Decimal:
    return sum((entry.amount for entry in entries), Decimal("0"))


def summarize_banks(entries: Sequence[LedgerEntry]) -> List[BankMovement]:
    """Group entries by bank; Credit adds to net, anything else subtracts."""
    summary: Dict[str, BankMovement] = {}
    for entry in entries:
        movement = summary.setdefault(entry.bank, BankMovement(bank=entry.bank))
        movement.count += 1
        if entry.is_credit:
            movement.credit += entry.amount
            movement.net += entry.amount
        else:
            movement.debit += entry.amount
            movement.net -= entry.amount
    return list(summary.values())


def filter_by_range(records: Sequence, date_range: Optional[DateRange]) -> List:
    if date_range is None or not date_range.is_bounded:
        return list(records)
    return [record for record in records if date_range.contains(effective_date(record))]


class AnalyticsService:

    @staticmethod
    def compute_local_stats(
        trips: Sequence[Trip],
        ledger: Sequence[LedgerEntry],
        date_range: Optional[DateRange] = None,
        today: Optional[date] = None,
        matcher: Optional[LedgerMatcher] = None
    ) -> DashboardStats:
        """Compute the KPI set from raw records."""
        today = today or date.today()
        matcher = matcher or LedgerMatcher()

        all_entries = ledger
        trips = filter_by_range(trips, date_range)
        ledger = filter_by_range(ledger, date_range)

        # 1. Ledger KPIs (today only). Pairing partners may sit outside the range.
        todays_entries = [entry for entry in ledger if is_dated(entry, today)]
        mid_payments = _sum_amounts(matcher.counted_payments(ledger, today, candidates=all_entries))
        top_ups = _sum_amounts([entry for entry in todays_entries if entry.type in TOP_UP_TYPES])

        # 2. Bank-wise movements
        bank_summary = summarize_banks(todays_entries)

        # 3. Trip counts
        def count_status(status: TripStatus) -> int:
            return sum(1 for trip in trips if trip.status == status.value)

        return DashboardStats(
            mid_payments_today=mid_payments,
            top_ups_today=top_ups,
            active_trips=count_status(TripStatus.ACTIVE),
            completed_trips=count_status(TripStatus.COMPLETED),
            pending_trips=count_status(TripStatus.PENDING),
            disputed_trips=count_status(TripStatus.DISPUTE),
            total_trips=len(trips),
            lr_sheets_not_received=sum(1 for trip in trips if trip.lr_sheet_pending),
            normal_trips=sum(1 for trip in trips if not trip.is_bulk),
            bulk_trips=sum(1 for trip in trips if trip.is_bulk),
            bank_movements_today=len(bank_summary),
            total_bank_net=sum((movement.net for movement in bank_summary), Decimal("0")),
            bank_summary=bank_summary
        )

    @staticmethod
    def compute_stats(
        trips: Sequence[Trip],
        ledger: Sequence[LedgerEntry],
        date_range: Optional[DateRange] = None,
        precomputed: Optional[Snapshot] = None,
        today: Optional[date] = None,
        matcher: Optional[LedgerMatcher] = None
    ) -> DashboardStats:
        """
        Dashboard KPIs with fallback.

        Priority (first applicable wins):
        1. Precomputed snapshot, verbatim (even when all zero)
        2. Local computation over `trips` and `ledger`
        """
        strategies = [
            lambda: DashboardStats.from_precomputed(precomputed) if precomputed is not None else None,
            lambda: AnalyticsService.compute_local_stats(trips, ledger, date_range, today, matcher),
        ]
        # Local computation always applies, so the chain never runs dry
        for strategy in strategies:
            stats = strategy()
            if stats is not None:
                break
        return stats

    @staticmethod
    def fetch_precomputed(
        stats_source: StatsSource,
        date_range: Optional[DateRange] = None,
        breaker: Optional[CircuitBreaker] = None
    ) -> Optional[Snapshot]:
        """
        Call the precomputed stats collaborator through the circuit breaker.

        Raises:
            AggregationSourceUnavailable: If the source fails or the circuit is open.
        """
        breaker = breaker or stats_source_breaker
        try:
            return breaker.call(stats_source, date_range)
        except CircuitOpenError:
            raise AggregationSourceUnavailable("Stats source circuit is open")
        except Exception as exc:
            raise AggregationSourceUnavailable(f"{type(exc).__name__}: {exc}") from exc

    @staticmethod
    @observed("dashboard_stats")
    def get_dashboard_stats(
        trips: Sequence[Trip],
        ledger: Sequence[LedgerEntry],
        date_range: Optional[DateRange] = None,
        stats_source: Optional[StatsSource] = None,
        today: Optional[date] = None,
        matcher: Optional[LedgerMatcher] = None,
        breaker: Optional[CircuitBreaker] = None
    ) -> DashboardStats:
        """Dashboard KPIs, preferring the precomputed source and silently falling back."""
        precomputed = None
        if stats_source is not None:
            try:
                precomputed = AnalyticsService.fetch_precomputed(stats_source, date_range, breaker)
            except AggregationSourceUnavailable as exc:
                logger.warning(
                    "Precomputed stats unavailable, computing locally",
                    extra={"error_code": exc.error_code, "reason": exc.message}
                )
        return AnalyticsService.compute_stats(trips, ledger, date_range, precomputed, today, matcher)


def compute_stats(
    trips: Sequence[Trip],
    ledger: Sequence[LedgerEntry],
    date_range: Optional[DateRange] = None,
    precomputed: Optional[Snapshot] = None,
    today: Optional[date] = None
) -> DashboardStats:
    return AnalyticsService.compute_stats(trips, ledger, date_range, precomputed, today)
