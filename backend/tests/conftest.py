"""
Centralized Test Configuration.
"""

import pytest

from backend.app.core.reliability import CircuitBreaker
from backend.app.models.ledger_entry import LedgerEntry
from backend.app.models.trip import Trip
from backend.tests.factories import TODAY, stamp


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_trip():
    """Build a Trip from camelCase overrides."""
    counter = {"n": 0}

    def _make(**raw):
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "id": f"trip-{n}",
            "lrNumber": f"LR{n:03d}",
            "date": TODAY.isoformat(),
            "status": "Active",
            "isBulk": False,
            "lrSheet": "Received",
        }
        payload.update(raw)
        return Trip.model_validate(payload)
    return _make


@pytest.fixture
def make_entry():
    """Build a LedgerEntry from camelCase overrides."""
    counter = {"n": 0}

    def _make(**raw):
        counter["n"] += 1
        payload = {
            "id": f"entry-{counter['n']}",
            "date": stamp("09:00:00"),
            "amount": 0,
            "direction": "Credit",
        }
        payload.update(raw)
        return LedgerEntry.model_validate(payload)
    return _make


@pytest.fixture
def breaker():
    """Fresh breaker per test; the global instance keeps state across calls."""
    return CircuitBreaker(failure_threshold=2, reset_timeout=30)
