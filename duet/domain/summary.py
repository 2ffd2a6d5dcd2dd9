"""Pure functions for period aggregation.

This module contains the functional core for the monthly dashboard:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Totals combine realized transactions with planned budget items that are not
yet paid. A paid budget item is assumed to be covered by a realized
transaction and is left out so it is not counted twice.
"""

from dataclasses import dataclass

from duet.dates import period_key_of
from duet.domain.models import (
    BudgetItem,
    CategoryName,
    EntryKind,
    Goal,
    Money,
    Month,
    Transaction,
)


@dataclass(frozen=True)
class PeriodSummary:
    """Immutable income/expense summary for one period."""

    month: Month
    transactions: list[Transaction]
    budget_items: list[BudgetItem]
    realized_income: Money
    realized_expense: Money
    planned_unpaid_income: Money
    planned_unpaid_expense: Money
    total_income: Money
    total_expense: Money
    balance: Money
    spend_ratio: float | None
    category_expenses: dict[CategoryName, Money]


@dataclass(frozen=True)
class GoalProgress:
    """Immutable chart data for one savings goal."""

    goal_id: str
    name: str
    saved_percent: float
    remaining_percent: float
    saved_value: Money
    remaining_value: Money
    target: Money


@dataclass(frozen=True)
class SpendingFeedback:
    """Encouragement message for the share of income already committed."""

    level: str  # "great", "attention", "careful" or "stop"
    message: str


def filter_transactions(transactions: list[Transaction], month: Month) -> list[Transaction]:
    """Transactions dated within the period."""
    return [t for t in transactions if period_key_of(t.date) == month]


def filter_budget_items(budget_items: list[BudgetItem], month: Month) -> list[BudgetItem]:
    """Budget items due within the period. Items without a due date are skipped."""
    return [b for b in budget_items if b.due_date is not None and period_key_of(b.due_date) == month]


def sum_realized(transactions: list[Transaction], kind: EntryKind, exclude_linked: bool = False) -> Money:
    """Sum realized transactions of one kind.

    Args:
        transactions: Transactions already filtered to the period.
        kind: Income or expense.
        exclude_linked: Skip transactions linked to a budget item.

    Returns:
        Total amount.
    """
    return Money(
        sum(
            t.amount
            for t in transactions
            if t.kind == kind and not (exclude_linked and t.budget_item_id is not None)
        )
    )


def sum_planned_unpaid(budget_items: list[BudgetItem], kind: EntryKind) -> Money:
    """Sum estimated amounts of unpaid budget items of one kind."""
    return Money(sum(b.amount for b in budget_items if b.budget_type.kind == kind and not b.is_paid))


def calculate_spend_ratio(total_income: Money, total_expense: Money) -> float | None:
    """Percentage of income taken by expenses, or None without income."""
    if total_income <= 0:
        return None
    return (total_expense / total_income) * 100


def category_expense_breakdown(
    transactions: list[Transaction],
    budget_items: list[BudgetItem],
    exclude_linked: bool = False,
) -> dict[CategoryName, Money]:
    """Fold expense transactions and unpaid expense items by category.

    Args:
        transactions: Transactions already filtered to the period.
        budget_items: Budget items already filtered to the period.
        exclude_linked: Skip transactions linked to a budget item.

    Returns:
        Dictionary of category to amount. Values sum to the period's total expense.
    """
    breakdown: dict[CategoryName, Money] = {}

    for t in transactions:
        if t.kind != EntryKind.EXPENSE or (exclude_linked and t.budget_item_id is not None):
            continue
        breakdown[t.category] = Money(breakdown.get(t.category, 0.0) + t.amount)

    for b in budget_items:
        if b.budget_type.kind != EntryKind.EXPENSE or b.is_paid:
            continue
        breakdown[b.category] = Money(breakdown.get(b.category, 0.0) + b.amount)

    return breakdown


def compute_period_summary(
    transactions: list[Transaction],
    budget_items: list[BudgetItem],
    month: Month,
    exclude_linked: bool = False,
) -> PeriodSummary:
    """Compute the dashboard summary for a period.

    Args:
        transactions: Every transaction, across all periods.
        budget_items: Every budget item, across all periods.
        month: Selected period key.
        exclude_linked: Leave out transactions linked to a budget item.

    Returns:
        PeriodSummary with filtered entities, totals and category breakdown.
    """
    period_transactions = filter_transactions(transactions, month)
    period_items = filter_budget_items(budget_items, month)

    realized_income = sum_realized(period_transactions, EntryKind.INCOME, exclude_linked)
    realized_expense = sum_realized(period_transactions, EntryKind.EXPENSE, exclude_linked)
    planned_income = sum_planned_unpaid(period_items, EntryKind.INCOME)
    planned_expense = sum_planned_unpaid(period_items, EntryKind.EXPENSE)

    category_expenses = category_expense_breakdown(period_transactions, period_items, exclude_linked)

    total_income = Money(realized_income + planned_income)
    # Summed from the category fold so the breakdown adds up to it exactly.
    total_expense = Money(sum(category_expenses.values(), 0.0))

    return PeriodSummary(
        month=month,
        transactions=period_transactions,
        budget_items=period_items,
        realized_income=realized_income,
        realized_expense=realized_expense,
        planned_unpaid_income=planned_income,
        planned_unpaid_expense=planned_expense,
        total_income=total_income,
        total_expense=total_expense,
        balance=Money(total_income - total_expense),
        spend_ratio=calculate_spend_ratio(total_income, total_expense),
        category_expenses=category_expenses,
    )


def spending_feedback(spend_ratio: float | None) -> SpendingFeedback | None:
    """Pick the encouragement message for a spend ratio.

    Returns:
        SpendingFeedback, or None when there is no income to compare against.
    """
    if spend_ratio is None:
        return None
    if spend_ratio <= 80:
        return SpendingFeedback("great", "You're doing great!")
    if spend_ratio <= 90:
        return SpendingFeedback("attention", "Attention!")
    if spend_ratio <= 99:
        return SpendingFeedback("careful", "Be careful!")
    return SpendingFeedback("stop", "Stop spending now!")


def goal_progress_percent(goal: Goal) -> float:
    """Progress towards a goal, clamped to 0-100 for display."""
    if goal.target <= 0:
        return 100.0
    return max(0.0, min(goal.current / goal.target * 100, 100.0))


def is_goal_complete(goal: Goal) -> bool:
    return goal.current >= goal.target


def goal_series(goals: list[Goal]) -> list[GoalProgress]:
    """Build saved/remaining chart data for every goal.

    Goals are not tied to a period, so this ignores the selected month.
    """
    series: list[GoalProgress] = []

    for goal in goals:
        if goal.target > 0:
            saved_percent = max(goal.current / goal.target * 100, 0.0)
        else:
            saved_percent = 100.0
        series.append(
            GoalProgress(
                goal_id=goal.id,
                name=goal.name,
                saved_percent=saved_percent,
                remaining_percent=max(100 - saved_percent, 0.0),
                saved_value=goal.current,
                remaining_value=Money(max(goal.target - goal.current, 0.0)),
                target=goal.target,
            )
        )

    return series


def sort_breakdown(breakdown: dict[CategoryName, Money], sort_by: str = "value") -> list[tuple[CategoryName, Money]]:
    """Sort a category breakdown by value (largest first) or alphabetically."""
    if sort_by == "alpha":
        return sorted(breakdown.items(), key=lambda x: x[0])
    return sorted(breakdown.items(), key=lambda x: x[1], reverse=True)


def calculate_histogram_bar_length(amount: float, max_amount: float, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
