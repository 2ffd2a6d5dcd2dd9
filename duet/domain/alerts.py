"""Pure functions for due-date alerts.

A bill is either a realized expense transaction (always paid) or a planned
expense budget item that is overdue or due within the next week. Planned
items further away never raise an alert.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from duet.dates import last_day_of, period_key_of
from duet.domain.models import (
    BudgetItem,
    CategoryName,
    Description,
    EntryKind,
    Money,
    Month,
    Transaction,
)

DUE_SOON_DAYS = 7


class AlertStatus(str, Enum):
    """Urgency of a due date relative to today."""

    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    OK = "ok"


class BillSource(str, Enum):
    TRANSACTION = "transaction"
    BUDGET = "budget"


@dataclass(frozen=True)
class Bill:
    """Immutable alert-facing view of an expense."""

    id: str
    description: Description
    amount: Money
    date: date
    category: CategoryName
    source: BillSource
    is_paid: bool


@dataclass(frozen=True)
class AlertBoard:
    """Unpaid bills grouped by urgency."""

    overdue: list[Bill]
    due_soon: list[Bill]


def classify(due: date, today: date) -> AlertStatus:
    """Classify a due date at day granularity.

    Args:
        due: Due date.
        today: Reference day.

    Returns:
        OVERDUE before today, DUE_SOON from today to seven days ahead, else OK.
    """
    days = (due - today).days
    if days < 0:
        return AlertStatus.OVERDUE
    if days <= DUE_SOON_DAYS:
        return AlertStatus.DUE_SOON
    return AlertStatus.OK


def matches_transaction(item: BudgetItem, transactions: list[Transaction], month: Month) -> bool:
    """Check whether an expense transaction in the period already covers a budget item.

    A transaction covers the item when its description matches ignoring case
    and its amount matches to the cent.
    """
    description = item.description.lower()
    return any(
        t.kind == EntryKind.EXPENSE
        and t.description.lower() == description
        and round(t.amount, 2) == round(item.amount, 2)
        and period_key_of(t.date) == month
        for t in transactions
    )


def collect_bills(
    transactions: list[Transaction],
    budget_items: list[BudgetItem],
    month: Month,
    today: date,
) -> list[Bill]:
    """Build the bill list from realized expenses and urgent planned expenses.

    Args:
        transactions: Every transaction.
        budget_items: Every budget item.
        month: Selected period; supplies the fallback due date and the
            period in which a matching transaction counts as payment.
        today: Reference day for urgency.

    Returns:
        Transaction bills first, then budget bills, in collection order.
    """
    bills = [
        Bill(
            id=t.id,
            description=t.description,
            amount=t.amount,
            date=t.date,
            category=t.category,
            source=BillSource.TRANSACTION,
            is_paid=True,
        )
        for t in transactions
        if t.kind == EntryKind.EXPENSE
    ]

    fallback_due = last_day_of(month)
    for item in budget_items:
        if item.budget_type.kind != EntryKind.EXPENSE:
            continue

        due = item.due_date or fallback_due
        if classify(due, today) == AlertStatus.OK:
            continue

        bills.append(
            Bill(
                id=item.id,
                description=item.description,
                amount=item.amount,
                date=due,
                category=item.category,
                source=BillSource.BUDGET,
                is_paid=item.is_paid or matches_transaction(item, transactions, month),
            )
        )

    return bills


def pending_alerts(bills: list[Bill], today: date) -> AlertBoard:
    """Group unpaid bills into overdue and due-soon lists, oldest first."""
    unpaid = sorted((b for b in bills if not b.is_paid), key=lambda b: b.date)
    return AlertBoard(
        overdue=[b for b in unpaid if classify(b.date, today) == AlertStatus.OVERDUE],
        due_soon=[b for b in unpaid if classify(b.date, today) == AlertStatus.DUE_SOON],
    )
