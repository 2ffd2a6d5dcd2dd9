"""Tests for the remote ledger client."""

from datetime import date
from typing import Any

import pytest
import requests

from duet.domain.models import EntryKind, Money
from duet.errors import NotFoundError, RemoteFailure, SessionExpired
from duet.session import Session
from duet.store.remote import RemoteLedger, lookup_from_row, transaction_from_row

SESSION = Session(access_token="token-123", user_id="user-1")


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        return self.payload


class RecordingTransport:
    """Stands in for requests.request and remembers each call."""

    def __init__(self, *responses: FakeResponse) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def __call__(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.responses.pop(0)


def ledger_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "id": 42,
        "entry_date": "2025-04-10",
        "description": "Market",
        "amount": "150.75",
        "financial_category": {"id": 3, "label": "Food", "kind": "expense"},
        "movement_type": {"id": 1, "label": "Expense", "kind": "expense"},
    }
    row.update(overrides)
    return row


@pytest.fixture
def ledger() -> RemoteLedger:
    return RemoteLedger("https://example.test/", "anon-key", SESSION, timeout=5.0)


class TestRowConversion:
    """Tests for lookup_from_row and transaction_from_row."""

    def test_transaction_row(self) -> None:
        """Should map the joined lookups onto the transaction."""
        txn = transaction_from_row(ledger_row())

        assert txn.id == "42"
        assert txn.date == date(2025, 4, 10)
        assert txn.amount == 150.75
        assert txn.category == "Food"
        assert txn.kind == EntryKind.EXPENSE
        assert txn.movement_type_id == 1
        assert txn.category_id == 3

    def test_income_movement(self) -> None:
        """Should read the kind from the movement type."""
        txn = transaction_from_row(ledger_row(movement_type={"id": 2, "label": "Income", "kind": "income"}))

        assert txn.kind == EntryKind.INCOME

    def test_unresolved_joins(self) -> None:
        """Should fall back to uncategorized expense."""
        txn = transaction_from_row(ledger_row(financial_category=None, movement_type=None))

        assert txn.category == "Uncategorized"
        assert txn.kind == EntryKind.EXPENSE

    def test_lookup_unknown_kind(self) -> None:
        """Should treat unknown lookup kinds as expense."""
        option = lookup_from_row({"id": "5", "label": "Other", "kind": None})

        assert option.id == 5
        assert option.kind == EntryKind.EXPENSE


class TestRemoteLedgerReads:
    """Tests for the fetch methods."""

    def test_fetch_transactions(self, ledger: RemoteLedger, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should filter by user and order by date."""
        transport = RecordingTransport(FakeResponse([ledger_row(), ledger_row(id=43)]))
        monkeypatch.setattr(requests, "request", transport)

        transactions = ledger.fetch_transactions()

        assert [t.id for t in transactions] == ["42", "43"]
        call = transport.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "https://example.test/rest/v1/ledger_entries"
        assert call["params"]["user_id"] == "eq.user-1"
        assert call["params"]["order"] == "entry_date.asc"
        assert call["headers"]["Authorization"] == "Bearer token-123"
        assert call["headers"]["apikey"] == "anon-key"
        assert call["timeout"] == 5.0

    def test_fetch_lookups(self, ledger: RemoteLedger, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should order lookups by label."""
        transport = RecordingTransport(FakeResponse([{"id": 1, "label": "Food", "kind": "expense"}]))
        monkeypatch.setattr(requests, "request", transport)

        options = ledger.fetch_financial_categories()

        assert options[0].label == "Food"
        assert transport.calls[0]["url"].endswith("/financial_categories")
        assert transport.calls[0]["params"]["order"] == "label.asc"

    def test_http_error(self, ledger: RemoteLedger, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should turn HTTP failures into RemoteFailure."""
        monkeypatch.setattr(requests, "request", RecordingTransport(FakeResponse({}, status_code=500)))

        with pytest.raises(RemoteFailure):
            ledger.fetch_movement_types()

    def test_network_error(self, ledger: RemoteLedger, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should turn connection errors into RemoteFailure."""

        def refuse(*args: Any, **kwargs: Any) -> None:
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(requests, "request", refuse)

        with pytest.raises(RemoteFailure, match="Could not load the transactions"):
            ledger.fetch_transactions()

    def test_no_session(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should raise SessionExpired before calling the server."""
        transport = RecordingTransport()
        monkeypatch.setattr(requests, "request", transport)

        with pytest.raises(SessionExpired):
            RemoteLedger("https://example.test", "anon-key", None).fetch_transactions()
        assert transport.calls == []


class TestRemoteLedgerWrites:
    """Tests for insert_transaction and delete_transaction."""

    def test_insert(self, ledger: RemoteLedger, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should post the entry with the user id and return the stored row."""
        transport = RecordingTransport(FakeResponse(ledger_row()))
        monkeypatch.setattr(requests, "request", transport)

        txn = ledger.insert_transaction(date(2025, 4, 10), "Market", Money(150.75), 1, 3)

        assert txn.id == "42"
        call = transport.calls[0]
        assert call["method"] == "POST"
        assert call["json"]["user_id"] == "user-1"
        assert call["json"]["entry_date"] == "2025-04-10"
        assert call["headers"]["Prefer"] == "return=representation"

    def test_insert_failure(self, ledger: RemoteLedger, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should raise RemoteFailure when the insert is rejected."""
        monkeypatch.setattr(requests, "request", RecordingTransport(FakeResponse({}, status_code=400)))

        with pytest.raises(RemoteFailure, match="Could not save the transaction"):
            ledger.insert_transaction(date(2025, 4, 10), "Market", Money(10), 1, 3)

    def test_delete(self, ledger: RemoteLedger, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should delete by id."""
        transport = RecordingTransport(FakeResponse([ledger_row()]))
        monkeypatch.setattr(requests, "request", transport)

        ledger.delete_transaction("42")

        assert transport.calls[0]["method"] == "DELETE"
        assert transport.calls[0]["params"] == {"id": "eq.42"}

    def test_delete_missing(self, ledger: RemoteLedger, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should raise NotFoundError when nothing was deleted."""
        monkeypatch.setattr(requests, "request", RecordingTransport(FakeResponse([])))

        with pytest.raises(NotFoundError):
            ledger.delete_transaction("99")
