"""Remote ledger interactions over a PostgREST-style HTTP API."""

from datetime import date
from typing import Any

import requests

from duet.domain.categories import resolve_category
from duet.domain.models import Description, EntryKind, LookupOption, Money, Transaction
from duet.errors import NotFoundError, RemoteFailure, SessionExpired
from duet.session import Session

MOVEMENT_TYPES_TABLE = "movement_types"
CATEGORIES_TABLE = "financial_categories"
LEDGER_TABLE = "ledger_entries"

LOOKUP_COLUMNS = "id,label,kind"
LEDGER_COLUMNS = (
    "id,entry_date,description,amount,"
    "financial_category:category_id(id,label,kind),"
    "movement_type:movement_type_id(id,label,kind)"
)


def lookup_from_row(row: dict[str, Any]) -> LookupOption:
    """Convert a lookup row; unknown kinds count as expense."""
    kind = row.get("kind")
    return LookupOption(
        id=int(row["id"]),
        label=row.get("label") or "",
        kind=EntryKind.INCOME if kind == EntryKind.INCOME.value else EntryKind.EXPENSE,
    )


def transaction_from_row(row: dict[str, Any]) -> Transaction:
    """Convert a ledger row joined with its two lookups.

    A join that did not resolve leaves the transaction uncategorized and
    counted as an expense.
    """
    category = row.get("financial_category") or {}
    movement_type = row.get("movement_type") or {}
    kind = movement_type.get("kind")

    return Transaction(
        id=str(row["id"]),
        date=date.fromisoformat(row["entry_date"]),
        description=Description(row.get("description") or ""),
        category=resolve_category(category.get("label")),
        amount=Money(float(row["amount"])),
        kind=EntryKind.INCOME if kind == EntryKind.INCOME.value else EntryKind.EXPENSE,
        movement_type_id=movement_type.get("id"),
        category_id=category.get("id"),
    )


class RemoteLedger:
    """Reads and writes ledger entries for the signed-in user."""

    def __init__(self, base_url: str, api_key: str, session: Session | None, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        if self.session is None:
            raise SessionExpired()
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.session.access_token}",
            "Accept": "application/json",
        }

    def _request(self, method: str, table: str, failure: str, **kwargs: Any) -> Any:
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            response = requests.request(
                method,
                f"{self.base_url}/rest/v1/{table}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise RemoteFailure(failure) from e

    def fetch_movement_types(self) -> list[LookupOption]:
        """Movement type lookup, ordered by label.

        Raises:
            RemoteFailure: If the request fails.
            SessionExpired: If nobody is signed in.
        """
        rows = self._request(
            "GET",
            MOVEMENT_TYPES_TABLE,
            "Could not load the movement types.",
            params={"select": LOOKUP_COLUMNS, "order": "label.asc"},
        )
        return [lookup_from_row(row) for row in rows]

    def fetch_financial_categories(self) -> list[LookupOption]:
        """Financial category lookup, ordered by label."""
        rows = self._request(
            "GET",
            CATEGORIES_TABLE,
            "Could not load the financial categories.",
            params={"select": LOOKUP_COLUMNS, "order": "label.asc"},
        )
        return [lookup_from_row(row) for row in rows]

    def fetch_transactions(self) -> list[Transaction]:
        """The signed-in user's ledger entries, oldest first."""
        if self.session is None:
            raise SessionExpired()
        rows = self._request(
            "GET",
            LEDGER_TABLE,
            "Could not load the transactions.",
            params={
                "select": LEDGER_COLUMNS,
                "user_id": f"eq.{self.session.user_id}",
                "order": "entry_date.asc",
            },
        )
        return [transaction_from_row(row) for row in rows]

    def insert_transaction(
        self,
        entry_date: date,
        description: str,
        amount: Money,
        movement_type_id: int,
        category_id: int,
    ) -> Transaction:
        """Insert one ledger entry and return it joined with its lookups.

        Raises:
            RemoteFailure: If the insert fails.
            SessionExpired: If nobody is signed in.
        """
        if self.session is None:
            raise SessionExpired()
        row = self._request(
            "POST",
            LEDGER_TABLE,
            "Could not save the transaction.",
            params={"select": LEDGER_COLUMNS},
            headers={
                "Prefer": "return=representation",
                "Accept": "application/vnd.pgrst.object+json",
            },
            json={
                "entry_date": entry_date.isoformat(),
                "description": description,
                "amount": amount,
                "movement_type_id": movement_type_id,
                "category_id": category_id,
                "user_id": self.session.user_id,
            },
        )
        return transaction_from_row(row)

    def delete_transaction(self, txn_id: str) -> None:
        """Delete one ledger entry.

        Raises:
            NotFoundError: If no row had this id.
            RemoteFailure: If the delete fails.
            SessionExpired: If nobody is signed in.
        """
        deleted = self._request(
            "DELETE",
            LEDGER_TABLE,
            "Could not delete the transaction.",
            params={"id": f"eq.{txn_id}"},
            headers={"Prefer": "return=representation"},
        )
        if not deleted:
            raise NotFoundError(f"No transaction with id '{txn_id}'.")
