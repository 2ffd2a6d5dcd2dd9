"""Domain models and types for duet.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from duet.domain.models import (
    BudgetItem,
    BudgetType,
    CategoryName,
    CustomCategory,
    Description,
    EntryKind,
    Frequency,
    Goal,
    Installments,
    Money,
    Month,
    PaidBy,
    Priority,
    Transaction,
)

__all__ = [
    "BudgetItem",
    "BudgetType",
    "CategoryName",
    "CustomCategory",
    "Description",
    "EntryKind",
    "Frequency",
    "Goal",
    "Installments",
    "Money",
    "Month",
    "PaidBy",
    "Priority",
    "Transaction",
]
