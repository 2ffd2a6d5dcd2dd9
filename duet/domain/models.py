"""Domain type definitions for duet.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in major currency units (reais), rounded to cents for display
- Month: Period key in YYYY-MM format
- CategoryName: Name of an income or expense category
- Description: Transaction or budget item description text

The entity dataclasses are immutable; changes go through dataclasses.replace.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import NewType

# Money amounts are floats in major units; installment splits divide them freely
Money = NewType("Money", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

# Category name for income and expense categories
CategoryName = NewType("CategoryName", str)

# Transaction description text
Description = NewType("Description", str)


class EntryKind(str, Enum):
    """Direction of a money movement."""

    EXPENSE = "expense"
    INCOME = "income"


class Frequency(str, Enum):
    """Whether an entry recurs with a fixed or variable amount."""

    FIXED = "fixed"
    VARIABLE = "variable"


class BudgetType(str, Enum):
    """Kind and frequency of a budget item, decomposed once at the boundary."""

    EXPENSE_FIXED = "expense-fixed"
    EXPENSE_VARIABLE = "expense-variable"
    INCOME_FIXED = "income-fixed"
    INCOME_VARIABLE = "income-variable"

    @property
    def kind(self) -> EntryKind:
        return EntryKind.INCOME if self in (BudgetType.INCOME_FIXED, BudgetType.INCOME_VARIABLE) else EntryKind.EXPENSE

    @property
    def frequency(self) -> Frequency:
        if self in (BudgetType.EXPENSE_FIXED, BudgetType.INCOME_FIXED):
            return Frequency.FIXED
        return Frequency.VARIABLE


class PaidBy(str, Enum):
    """Which partner a movement is attributed to."""

    SPOUSE_A = "spouse_a"
    SPOUSE_B = "spouse_b"
    JOINT = "joint"


class Priority(str, Enum):
    """Savings goal priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Transaction:
    """Immutable realized money movement."""

    id: str
    date: date
    description: Description
    category: CategoryName
    amount: Money
    kind: EntryKind
    frequency: Frequency | None = None
    paid_by: PaidBy | None = None
    budget_item_id: str | None = None
    movement_type_id: int | None = None
    category_id: int | None = None


@dataclass(frozen=True)
class Installments:
    """Links sibling budget items that split one obligation across months."""

    total: int
    current: int  # 1-based
    parent_id: str


@dataclass(frozen=True)
class BudgetItem:
    """Immutable planned income or expense entry."""

    id: str
    description: Description
    category: CategoryName
    amount: Money  # Estimated amount
    budget_type: BudgetType
    due_date: date | None = None
    is_paid: bool = False
    paid_by: PaidBy | None = None
    installments: Installments | None = None


@dataclass(frozen=True)
class Goal:
    """Immutable savings target."""

    id: str
    name: str
    target: Money
    current: Money = Money(0.0)
    deadline: date | None = None
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class CustomCategory:
    """User-defined category label."""

    id: str
    name: CategoryName
    kind: EntryKind


@dataclass(frozen=True)
class LookupOption:
    """Reference row from the remote movement type or category lookups."""

    id: int
    label: str
    kind: EntryKind


@dataclass(frozen=True)
class PlannerSettings:
    """Display names for the planner and both partners."""

    planner_name: str = "Our Financial Planner"
    spouse_a: str = "Partner A"
    spouse_b: str = "Partner B"

    def paid_by_label(self, paid_by: PaidBy | None) -> str:
        """Human label for a paid-by attribution."""
        if paid_by is PaidBy.SPOUSE_A:
            return self.spouse_a
        if paid_by is PaidBy.SPOUSE_B:
            return self.spouse_b
        if paid_by is PaidBy.JOINT:
            return "Joint"
        return ""
