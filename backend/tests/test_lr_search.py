"""
LR search flow tests.

Search -> resolve -> navigate, with user feedback through the notifier.
"""

import pytest

from backend.app.schemas.auth import CurrentUser
from backend.app.schemas.notification import NotificationKind
from backend.app.schemas.search import MatchedVia, SearchResults
from backend.app.services.lr_search import LRSearchService
from backend.app.services.record_store import RecordStore


@pytest.fixture
def notify(mocker):
    return mocker.Mock()


@pytest.fixture
def navigate(mocker):
    return mocker.Mock()


@pytest.fixture
def finance_user():
    return CurrentUser(id=7, name="Priya", role="Finance", branch="Pune")


def test_multiple_trips_open_first_and_inform(notify, navigate, finance_user, make_trip, mocker):
    search = mocker.Mock(return_value=SearchResults(trips=[
        make_trip(id="A", lrNumber="LR001"),
        make_trip(id="B", lrNumber="LR001"),
    ]))
    service = LRSearchService(notify=notify, navigate=navigate, search=search)

    outcome = service.search("  LR001 ", finance_user)

    search.assert_called_once_with("LR001")
    navigate.assert_called_once_with("/finance/trips/A")
    notify.assert_called_once_with(NotificationKind.SUCCESS, "Found 2 trips. Opening first trip: LR001")
    assert outcome.success is True
    assert outcome.path == "/finance/trips/A"
    assert outcome.resolution.multiple_candidates is True


def test_single_trip_message_falls_back_to_trip_id(notify, navigate, mocker):
    search = mocker.Mock(return_value={"trips": [{"_id": "X1", "tripId": "TRP-9"}], "ledger": []})
    service = LRSearchService(notify=notify, navigate=navigate, search=search)

    outcome = service.search("TRP-9", CurrentUser(role="Admin"))

    navigate.assert_called_once_with("/admin/trips/X1")
    notify.assert_called_once_with(NotificationKind.SUCCESS, "Opening trip: TRP-9")
    assert outcome.resolution.multiple_candidates is False


def test_ledger_match_opens_referenced_trip(notify, navigate, mocker):
    search = mocker.Mock(return_value={
        "trips": None,
        "ledger": [{"_id": "L1", "lrNumber": "LR5", "tripId": {"_id": "T5"}, "amount": 10}],
    })
    service = LRSearchService(notify=notify, navigate=navigate, search=search)

    outcome = service.search("LR5", None)

    navigate.assert_called_once_with("/agent/trips/T5")
    notify.assert_called_once_with(NotificationKind.SUCCESS, "Opening trip from ledger entry")
    assert outcome.resolution.matched_via == MatchedVia.LEDGER


def test_unlinked_ledger_entry_reported_as_error(notify, navigate, finance_user, mocker):
    search = mocker.Mock(return_value={"trips": [], "ledger": [{"id": "L1", "lrNumber": "LR5"}]})
    service = LRSearchService(notify=notify, navigate=navigate, search=search)

    outcome = service.search("LR5", finance_user)

    navigate.assert_not_called()
    notify.assert_called_once_with(NotificationKind.ERROR, "No trip found for this LR number")
    assert outcome.success is False
    assert outcome.error_code == "ERR_SEARCH_NO_TRIP"


def test_not_found_reported_as_info(notify, navigate, finance_user, mocker):
    service = LRSearchService(notify=notify, navigate=navigate, search=mocker.Mock(return_value=None))

    outcome = service.search("LR404", finance_user)

    navigate.assert_not_called()
    notify.assert_called_once_with(NotificationKind.INFO, 'No trips found for "LR404"')
    assert outcome.error_code == "ERR_SEARCH_NOT_FOUND"


def test_blank_query_does_nothing(notify, navigate, finance_user, mocker):
    """A blank query is reported through the outcome only: no toast, no search."""
    search = mocker.Mock()
    service = LRSearchService(notify=notify, navigate=navigate, search=search)

    outcome = service.search("   ", finance_user)

    search.assert_not_called()
    navigate.assert_not_called()
    notify.assert_not_called()
    assert outcome.error_code == "ERR_SEARCH_EMPTY"


def test_search_failure_is_reported(notify, navigate, finance_user, mocker):
    search = mocker.Mock(side_effect=ConnectionError("Failed to fetch"))
    service = LRSearchService(notify=notify, navigate=navigate, search=search)

    outcome = service.search("LR001", finance_user)

    navigate.assert_not_called()
    notify.assert_called_once_with(NotificationKind.ERROR, "Search failed. Failed to fetch")
    assert outcome.error_code == "ERR_SEARCH_FAILED"


def test_store_search_used_without_collaborator(notify, navigate, finance_user, make_trip):
    store = RecordStore(trips=[make_trip(id="A", lrNumber="LR100"), make_trip(id="B", lrNumber="LR200")])
    service = LRSearchService(notify=notify, navigate=navigate, store=store)

    outcome = service.search("lr200", finance_user)

    assert outcome.path == "/finance/trips/B"


def test_malformed_later_trip_does_not_fail_search(notify, navigate, mocker):
    search = mocker.Mock(return_value={"trips": [{"id": "A", "lrNumber": "LR1"}, {"lrNumber": "LR1"}]})
    service = LRSearchService(notify=notify, navigate=navigate, search=search)

    outcome = service.search("LR1", CurrentUser(role="Admin"))

    navigate.assert_called_once_with("/admin/trips/A")
    notify.assert_called_once_with(NotificationKind.SUCCESS, "Opening trip: LR1")
    assert outcome.success is True
    assert outcome.resolution.candidate_count == 1


def test_first_trip_without_id_reported(notify, navigate, finance_user, mocker):
    search = mocker.Mock(return_value={"trips": [{"lrNumber": "LR1"}, {"id": "B", "lrNumber": "LR1"}]})
    service = LRSearchService(notify=notify, navigate=navigate, search=search)

    outcome = service.search("LR1", finance_user)

    navigate.assert_not_called()
    notify.assert_called_once_with(NotificationKind.ERROR, "Trip ID not found")
    assert outcome.success is False
    assert outcome.error_code == "ERR_SEARCH_TRIP_ID_MISSING"


def test_malformed_ledger_entry_skipped(notify, navigate, mocker):
    search = mocker.Mock(return_value={
        "trips": [],
        "ledger": [
            {"id": "L0", "lrNumber": "LR5", "amount": -5},
            {"id": "L1", "lrNumber": "LR5", "tripId": "T5", "amount": 10},
        ],
    })
    service = LRSearchService(notify=notify, navigate=navigate, search=search)

    outcome = service.search("LR5", None)

    navigate.assert_called_once_with("/agent/trips/T5")
    assert outcome.resolution.matched_via == MatchedVia.LEDGER
