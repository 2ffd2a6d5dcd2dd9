"""Tests for entity to JSON conversion."""

from datetime import date

from duet.domain.models import (
    BudgetItem,
    BudgetType,
    CategoryName,
    Description,
    EntryKind,
    Frequency,
    Goal,
    Installments,
    Money,
    PaidBy,
    PlannerSettings,
    Priority,
    Transaction,
)
from duet.store.codec import (
    budget_item_from_dict,
    budget_item_to_dict,
    goal_from_dict,
    goal_to_dict,
    settings_from_dict,
    transaction_from_dict,
    transaction_to_dict,
)


class TestTransactionCodec:
    """Tests for transaction conversion."""

    def test_full_transaction(self) -> None:
        """Should keep every optional field."""
        txn = Transaction(
            id="t1",
            date=date(2025, 4, 10),
            description=Description("Rent"),
            category=CategoryName("Housing"),
            amount=Money(1500.0),
            kind=EntryKind.EXPENSE,
            frequency=Frequency.FIXED,
            paid_by=PaidBy.JOINT,
            budget_item_id="b1",
        )

        data = transaction_to_dict(txn)

        assert data["date"] == "2025-04-10"
        assert data["kind"] == "expense"
        assert data["paid_by"] == "joint"
        assert transaction_from_dict(data) == txn

    def test_missing_category(self) -> None:
        """Should load a transaction without category as uncategorized."""
        txn = transaction_from_dict({"id": 7, "date": "2025-04-01", "amount": "12.5", "kind": "income"})

        assert txn.id == "7"
        assert txn.category == "Uncategorized"
        assert txn.amount == 12.5
        assert txn.frequency is None


class TestBudgetItemCodec:
    """Tests for budget item conversion."""

    def test_installments(self) -> None:
        """Should store the budget type and installment descriptor."""
        item = BudgetItem(
            id="p-1",
            description=Description("Sofa"),
            category=CategoryName("Housing"),
            amount=Money(400.0),
            budget_type=BudgetType.EXPENSE_VARIABLE,
            due_date=date(2025, 4, 1),
            installments=Installments(total=3, current=2, parent_id="p"),
        )

        data = budget_item_to_dict(item)

        assert data["type"] == "expense-variable"
        assert data["installments"] == {"total": 3, "current": 2, "parent_id": "p"}
        assert budget_item_from_dict(data) == item

    def test_no_due_date(self) -> None:
        """Should allow items without a due date."""
        data = {"id": "b", "description": "x", "category": "Food", "amount": 10, "type": "income-fixed"}

        item = budget_item_from_dict(data)

        assert item.due_date is None
        assert not item.is_paid
        assert item.budget_type == BudgetType.INCOME_FIXED


class TestGoalCodec:
    """Tests for goal conversion."""

    def test_round_trip(self) -> None:
        """Should keep deadline and priority."""
        goal = Goal(
            id="g",
            name="Trip",
            target=Money(5000.0),
            current=Money(100.0),
            deadline=date(2025, 12, 1),
            priority=Priority.HIGH,
        )

        assert goal_from_dict(goal_to_dict(goal)) == goal

    def test_defaults(self) -> None:
        """Should default progress and priority."""
        goal = goal_from_dict({"id": "g", "name": "Car", "target": 100})

        assert goal.current == 0.0
        assert goal.priority == Priority.MEDIUM


class TestSettingsCodec:
    """Tests for settings conversion."""

    def test_missing_keys_use_defaults(self) -> None:
        """Should fill missing names from the defaults."""
        defaults = PlannerSettings(planner_name="Home", spouse_a="Ana", spouse_b="Bia")

        settings = settings_from_dict({"spouse_a": "Alex"}, defaults)

        assert settings == PlannerSettings(planner_name="Home", spouse_a="Alex", spouse_b="Bia")
