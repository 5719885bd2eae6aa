"""
Concurrency Tests.

Aggregation and resolution keep no shared state, so concurrent calls over
different snapshots must not interfere.
"""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from backend.app.domain.search.lr_resolver import resolve
from backend.app.services.analytics import compute_stats
from backend.tests.factories import TODAY


def test_concurrent_stats_over_different_snapshots(make_trip, make_entry):
    snapshots = []
    for n in range(1, 9):
        trips = [make_trip(status="Active") for _ in range(n)]
        ledger = [make_entry(type="Top-up", amount=100 * n)]
        snapshots.append((trips, ledger))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda snap: compute_stats(snap[0], snap[1], today=TODAY), snapshots * 4))

    for index, stats in enumerate(results):
        n = index % 8 + 1
        assert stats.active_trips == n
        assert stats.top_ups_today == Decimal(100 * n)


def test_concurrent_resolution(make_trip):
    trips_by_query = {f"LR{n}": [make_trip(id=f"T{n}", lrNumber=f"LR{n}")] for n in range(20)}

    def run(query):
        return resolve(query, trips_by_query[query], []).trip_id

    with ThreadPoolExecutor(max_workers=6) as pool:
        resolved = list(pool.map(run, trips_by_query))

    assert resolved == [f"T{n}" for n in range(20)]
