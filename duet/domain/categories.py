"""Pure functions for the category registry.

Predefined categories come first in a fixed order, followed by the couple's
custom categories in creation order. Names are not deduplicated: a custom
category that reuses a predefined name is listed twice.
"""

from uuid import uuid4

from duet.domain.models import CategoryName, CustomCategory, EntryKind

UNCATEGORIZED = CategoryName("Uncategorized")

PREDEFINED_CATEGORIES: dict[EntryKind, list[CategoryName]] = {
    EntryKind.EXPENSE: [
        CategoryName(name)
        for name in (
            "Housing",
            "Food",
            "Transport",
            "Health",
            "Education",
            "Leisure",
            "Clothing",
            "Fixed Bills",
            "Other",
        )
    ],
    EntryKind.INCOME: [
        CategoryName(name) for name in ("Salary", "Freelance", "Investments", "Gifts", "Other")
    ],
}


def all_categories(kind: EntryKind, custom_categories: list[CustomCategory]) -> list[CategoryName]:
    """List every category label available for a kind.

    Args:
        kind: Expense or income.
        custom_categories: User-defined categories in creation order.

    Returns:
        Predefined labels followed by custom labels of the same kind.
    """
    predefined = PREDEFINED_CATEGORIES.get(kind, [])
    custom = [c.name for c in custom_categories if c.kind == kind]
    return [*predefined, *custom]


def resolve_category(label: str | None) -> CategoryName:
    """Return the label, or the uncategorized sentinel when it is missing."""
    if label is None or not label.strip():
        return UNCATEGORIZED
    return CategoryName(label)


def create_custom_category(name: str, kind: EntryKind) -> tuple[CustomCategory | None, str | None]:
    """Create a custom category.

    Args:
        name: Category name as typed.
        kind: Expense or income.

    Returns:
        Tuple of (category, error_message).
    """
    if not name.strip():
        return None, "Category name is required"
    return CustomCategory(id=uuid4().hex, name=CategoryName(name.strip()), kind=kind), None
