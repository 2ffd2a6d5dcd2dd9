"""Pure functions for expanding budget items into monthly installments.

An obligation split into N installments becomes N sibling budget items, one
per month, sharing a parent identifier. The total is divided with plain float
division; 100 in 3 installments gives three shares of 33.333..., and no share
is adjusted to absorb rounding.
"""

from datetime import date
from uuid import uuid4

from duet.dates import add_months, last_day_of
from duet.domain.models import (
    BudgetItem,
    BudgetType,
    CategoryName,
    Description,
    Installments,
    Money,
    Month,
    PaidBy,
)


def default_due_date(month: Month) -> date:
    """Due date used when none is given: the last day of the selected period."""
    return last_day_of(month)


def expand_installments(
    description: Description,
    category: CategoryName,
    budget_type: BudgetType,
    total_amount: Money,
    count: int | None,
    first_due_date: date,
    paid_by: PaidBy | None = None,
) -> list[BudgetItem]:
    """Create the budget items for a new planned entry.

    Args:
        description: Item description, shared by every installment.
        category: Category label.
        budget_type: Kind and frequency of the item.
        total_amount: Full amount of the obligation.
        count: Number of installments. Below 2 (or None) yields one plain item.
        first_due_date: Due date of the first installment.
        paid_by: Optional partner attribution.

    Returns:
        List of new budget items, in installment order.
    """
    if count is None or count <= 1:
        return [
            BudgetItem(
                id=uuid4().hex,
                description=description,
                category=category,
                amount=total_amount,
                budget_type=budget_type,
                due_date=first_due_date,
                paid_by=paid_by,
            )
        ]

    parent_id = uuid4().hex
    share = Money(total_amount / count)

    return [
        BudgetItem(
            id=f"{parent_id}-{index}",
            description=description,
            category=category,
            amount=share,
            budget_type=budget_type,
            due_date=add_months(first_due_date, index),
            paid_by=paid_by,
            installments=Installments(total=count, current=index + 1, parent_id=parent_id),
        )
        for index in range(count)
    ]
