"""Pure functions for copying a budget plan into a later month.

Installment items are never copied: each installment already has its own
due date in the month it belongs to.
"""

from dataclasses import dataclass, replace
from uuid import uuid4

from duet.dates import period_key_of, with_day_clamped
from duet.domain.models import BudgetItem, BudgetType, Month


@dataclass(frozen=True)
class CopyFlags:
    """Which budget items to carry forward, by type and paid state."""

    fixed_expense_unpaid: bool = True
    fixed_expense_paid: bool = False
    variable_expense_unpaid: bool = True
    variable_expense_paid: bool = False
    fixed_income_unpaid: bool = True
    fixed_income_paid: bool = True
    variable_income_unpaid: bool = True
    variable_income_paid: bool = True

    def includes(self, item: BudgetItem) -> bool:
        """Check whether an item's type and paid state are selected."""
        selected = {
            BudgetType.EXPENSE_FIXED: (self.fixed_expense_unpaid, self.fixed_expense_paid),
            BudgetType.EXPENSE_VARIABLE: (self.variable_expense_unpaid, self.variable_expense_paid),
            BudgetType.INCOME_FIXED: (self.fixed_income_unpaid, self.fixed_income_paid),
            BudgetType.INCOME_VARIABLE: (self.variable_income_unpaid, self.variable_income_paid),
        }
        unpaid, paid = selected[item.budget_type]
        return paid if item.is_paid else unpaid


def available_source_periods(budget_items: list[BudgetItem], before: Month) -> set[Month]:
    """Periods earlier than the target that have at least one budget item."""
    return {
        period_key_of(b.due_date)
        for b in budget_items
        if b.due_date is not None and period_key_of(b.due_date) < before
    }


def copy_from_period(
    source: Month,
    target: Month,
    budget_items: list[BudgetItem],
    flags: CopyFlags,
) -> list[BudgetItem]:
    """Clone a period's budget items into another period.

    Args:
        source: Period to copy from.
        target: Period to copy into.
        budget_items: Every budget item.
        flags: Type/paid selection.

    Returns:
        New unpaid items due on the same day of month in the target period,
        clamped to the target month's last day.
    """
    copies: list[BudgetItem] = []

    for item in budget_items:
        if item.due_date is None or period_key_of(item.due_date) != source:
            continue
        if item.installments is not None or not flags.includes(item):
            continue

        copies.append(
            replace(
                item,
                id=uuid4().hex,
                is_paid=False,
                due_date=with_day_clamped(target, item.due_date.day),
            )
        )

    return copies
