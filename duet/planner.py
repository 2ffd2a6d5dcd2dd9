"""Planner state and the operations that change it.

PlannerState holds every collection for one session. Planner is its only
writer: each operation validates its input, replaces the affected collection
with a new list, and then notifies listeners with the names of the changed
collections. Persistence is one such listener.
"""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date as Date
from typing import Protocol
from uuid import uuid4

from duet.dates import advance, first_day_of, parse_month, period_key_of
from duet.domain.alerts import AlertBoard, Bill, collect_bills, pending_alerts
from duet.domain.carry_forward import CopyFlags, available_source_periods, copy_from_period
from duet.domain.categories import all_categories, create_custom_category, resolve_category
from duet.domain.currency import parse_currency
from duet.domain.models import (
    BudgetItem,
    BudgetType,
    CategoryName,
    CustomCategory,
    Description,
    EntryKind,
    Frequency,
    Goal,
    LookupOption,
    Money,
    Month,
    PaidBy,
    PlannerSettings,
    Priority,
    Transaction,
)
from duet.domain.recurrence import default_due_date, expand_installments
from duet.domain.summary import GoalProgress, PeriodSummary, compute_period_summary, goal_series
from duet.errors import NotFoundError, ValidationError

TRANSACTIONS = "transactions"
BUDGET_ITEMS = "budget_items"
GOALS = "goals"
CUSTOM_CATEGORIES = "custom_categories"
SETTINGS = "settings"


class Ledger(Protocol):
    """Remote store of transactions and their reference lookups."""

    def fetch_movement_types(self) -> list[LookupOption]: ...

    def fetch_financial_categories(self) -> list[LookupOption]: ...

    def fetch_transactions(self) -> list[Transaction]: ...

    def insert_transaction(
        self,
        entry_date: Date,
        description: str,
        amount: Money,
        movement_type_id: int,
        category_id: int,
    ) -> Transaction: ...

    def delete_transaction(self, txn_id: str) -> None: ...


@dataclass
class PlannerState:
    """Every collection owned by the current session."""

    selected_month: Month
    transactions: list[Transaction] = field(default_factory=list)
    budget_items: list[BudgetItem] = field(default_factory=list)
    goals: list[Goal] = field(default_factory=list)
    custom_categories: list[CustomCategory] = field(default_factory=list)
    settings: PlannerSettings = field(default_factory=PlannerSettings)
    movement_types: list[LookupOption] = field(default_factory=list)
    financial_categories: list[LookupOption] = field(default_factory=list)


@dataclass(frozen=True)
class TransactionDraft:
    """Transaction fields as entered; the amount is a display string."""

    description: str
    amount: str
    kind: EntryKind = EntryKind.EXPENSE
    category: str | None = None
    date: Date | None = None
    frequency: Frequency | None = None
    paid_by: PaidBy | None = None
    budget_item_id: str | None = None
    movement_type_id: int | None = None
    category_id: int | None = None


@dataclass(frozen=True)
class BudgetItemDraft:
    """Budget item fields as entered; the amount is a display string."""

    description: str
    amount: str
    budget_type: BudgetType = BudgetType.EXPENSE_FIXED
    category: str | None = None
    due_date: Date | None = None
    installments: int | None = None
    paid_by: PaidBy | None = None


@dataclass(frozen=True)
class GoalDraft:
    """Goal fields as entered; amounts are display strings."""

    name: str
    target: str
    current: str = ""
    deadline: Date | None = None
    priority: Priority = Priority.MEDIUM


Listener = Callable[[PlannerState, frozenset[str]], None]


def validate_transaction_draft(draft: TransactionDraft, require_lookups: bool = False) -> str | None:
    """Check required transaction fields.

    Args:
        draft: Entered fields.
        require_lookups: Also require remote movement type and category ids.

    Returns:
        Error message, or None if the draft is complete.
    """
    if not draft.description.strip() or not draft.amount.strip():
        return "Fill in every field of the transaction."
    if require_lookups and (not draft.movement_type_id or not draft.category_id):
        return "Fill in every field of the transaction."
    if parse_currency(draft.amount) < 0:
        return "Amount cannot be negative."
    return None


def validate_budget_item_draft(draft: BudgetItemDraft) -> str | None:
    """Check required budget item fields; returns an error message or None."""
    if not draft.description.strip() or not draft.amount.strip():
        return "Description and estimated amount are required."
    if draft.installments is not None and draft.installments < 0:
        return "Installments cannot be negative."
    return None


def validate_goal_draft(draft: GoalDraft) -> str | None:
    """Check required goal fields; returns an error message or None."""
    if not draft.name.strip() or not draft.target.strip():
        return "Goal name and target are required."
    if parse_currency(draft.target) <= 0:
        return "Target must be positive."
    return None


class Planner:
    """Owns the planner state and every operation that mutates it."""

    def __init__(self, state: PlannerState, ledger: Ledger | None = None, exclude_linked: bool = False) -> None:
        self.state = state
        self.ledger = ledger
        self.exclude_linked = exclude_linked
        self._listeners: list[Listener] = []
        self._fetch_generation = 0

    def subscribe(self, listener: Listener) -> None:
        """Call listener after every successful mutation."""
        self._listeners.append(listener)

    def _commit(self, *names: str) -> None:
        changed = frozenset(names)
        for listener in self._listeners:
            listener(self.state, changed)

    # --- Period selection ---

    def select_period(self, month: Month) -> None:
        """Select the displayed period.

        Raises:
            ValidationError: If the month is not in YYYY-MM format.
        """
        try:
            year, month_num = parse_month(month)
        except ValueError as e:
            raise ValidationError(f"Invalid month '{month}'. Use YYYY-MM.") from e
        self.state.selected_month = Month(f"{year}-{month_num:02d}")

    def change_month(self, delta: int) -> Month:
        """Move the selected period by delta months and return the new key."""
        self.state.selected_month = advance(self.state.selected_month, delta)
        return self.state.selected_month

    # --- Reads ---

    def summary(self) -> PeriodSummary:
        return compute_period_summary(
            self.state.transactions,
            self.state.budget_items,
            self.state.selected_month,
            self.exclude_linked,
        )

    def goal_progress(self) -> list[GoalProgress]:
        return goal_series(self.state.goals)

    def bills(self, today: Date | None = None) -> list[Bill]:
        return collect_bills(
            self.state.transactions,
            self.state.budget_items,
            self.state.selected_month,
            today or Date.today(),
        )

    def alerts(self, today: Date | None = None) -> AlertBoard:
        today = today or Date.today()
        return pending_alerts(self.bills(today), today)

    def categories(self, kind: EntryKind) -> list[CategoryName]:
        return all_categories(kind, self.state.custom_categories)

    def lookup_categories(self, movement_type_id: int | None = None) -> list[LookupOption]:
        """Remote categories that fit a movement type.

        Every category is returned when no movement type is given or the id
        is not a known movement type.
        """
        movement_type = find_lookup(self.state.movement_types, movement_type_id)
        if movement_type is None:
            return list(self.state.financial_categories)
        return [c for c in self.state.financial_categories if c.kind == movement_type.kind]

    def source_periods(self) -> list[Month]:
        """Earlier periods with budget items, newest first."""
        return sorted(available_source_periods(self.state.budget_items, self.state.selected_month), reverse=True)

    # --- Transactions ---

    def add_transaction(self, draft: TransactionDraft) -> Transaction:
        """Record a realized transaction.

        With a remote ledger attached the row is inserted remotely first and
        only the returned row is appended locally.

        Raises:
            ValidationError: If required fields are missing, or the remote
                category does not fit the movement type.
            RemoteFailure: If the remote insert fails.
            SessionExpired: If the remote ledger has no session.
        """
        error = validate_transaction_draft(draft, require_lookups=self.ledger is not None)
        if error:
            raise ValidationError(error)

        amount = parse_currency(draft.amount)
        entry_date = draft.date or first_day_of(self.state.selected_month)

        if self.ledger is not None:
            movement_type, category = self._checked_lookups(draft.movement_type_id, draft.category_id)
            txn = self.ledger.insert_transaction(entry_date, draft.description, amount, movement_type.id, category.id)
        else:
            txn = Transaction(
                id=uuid4().hex,
                date=entry_date,
                description=Description(draft.description),
                category=resolve_category(draft.category),
                amount=amount,
                kind=draft.kind,
                frequency=draft.frequency,
                paid_by=draft.paid_by,
                budget_item_id=draft.budget_item_id,
            )

        self.state.transactions = [*self.state.transactions, txn]
        self._commit(TRANSACTIONS)
        return txn

    def _checked_lookups(
        self, movement_type_id: int | None, category_id: int | None
    ) -> tuple[LookupOption, LookupOption]:
        if not self.state.movement_types or not self.state.financial_categories:
            self.refresh_lookups()

        movement_type = find_lookup(self.state.movement_types, movement_type_id)
        if movement_type is None:
            raise ValidationError(f"Unknown movement type '{movement_type_id}'.")
        category = find_lookup(self.state.financial_categories, category_id)
        if category is None:
            raise ValidationError(f"Unknown category '{category_id}'.")
        if category.kind != movement_type.kind:
            raise ValidationError(
                f"Category '{category.label}' is for {category.kind.value}, "
                f"but '{movement_type.label}' is {movement_type.kind.value}."
            )
        return movement_type, category

    def delete_transaction(self, txn_id: str) -> bool:
        """Remove a transaction.

        Returns:
            True if a local transaction was removed.

        Raises:
            NotFoundError: If the remote ledger has no such row.
            RemoteFailure: If the remote delete fails.
        """
        if self.ledger is not None:
            self.ledger.delete_transaction(txn_id)

        remaining = [t for t in self.state.transactions if t.id != txn_id]
        if len(remaining) == len(self.state.transactions):
            return False

        self.state.transactions = remaining
        self._commit(TRANSACTIONS)
        return True

    def begin_fetch(self) -> int:
        """Start a ledger refresh and return its generation number."""
        self._fetch_generation += 1
        return self._fetch_generation

    def apply_fetch(
        self,
        generation: int,
        transactions: list[Transaction],
        movement_types: list[LookupOption] | None = None,
        financial_categories: list[LookupOption] | None = None,
    ) -> bool:
        """Replace fetched collections unless a newer refresh has started.

        Returns:
            True if the results were applied, False if they were stale.
        """
        if generation != self._fetch_generation:
            return False
        if movement_types is not None:
            self.state.movement_types = movement_types
        if financial_categories is not None:
            self.state.financial_categories = financial_categories
        self.state.transactions = transactions
        return True

    def refresh_transactions(self) -> bool:
        """Reload lookups and transactions from the remote ledger.

        Raises:
            RemoteFailure: If any fetch fails; state is left untouched.
            SessionExpired: If the remote ledger has no session.
        """
        if self.ledger is None:
            return False
        generation = self.begin_fetch()
        movement_types = self.ledger.fetch_movement_types()
        financial_categories = self.ledger.fetch_financial_categories()
        transactions = self.ledger.fetch_transactions()
        return self.apply_fetch(generation, transactions, movement_types, financial_categories)

    def refresh_lookups(self) -> bool:
        """Reload only the movement type and category lookups.

        Raises:
            RemoteFailure: If either fetch fails; state is left untouched.
            SessionExpired: If the remote ledger has no session.
        """
        if self.ledger is None:
            return False
        movement_types = self.ledger.fetch_movement_types()
        financial_categories = self.ledger.fetch_financial_categories()
        self.state.movement_types = movement_types
        self.state.financial_categories = financial_categories
        return True

    # --- Budget items ---

    def _find_budget_item(self, item_id: str) -> BudgetItem:
        for item in self.state.budget_items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"No budget item with id '{item_id}'.")

    def save_budget_item(self, draft: BudgetItemDraft, editing_id: str | None = None) -> list[BudgetItem]:
        """Create or edit budget items.

        Editing changes only the item with editing_id; installment siblings
        are left alone. Creating with more than one installment adds the
        whole batch of siblings.

        Returns:
            The created or updated items.

        Raises:
            ValidationError: If required fields are missing.
            NotFoundError: If editing_id does not exist.
        """
        error = validate_budget_item_draft(draft)
        if error:
            raise ValidationError(error)

        amount = parse_currency(draft.amount)
        category = resolve_category(draft.category)

        if editing_id is not None:
            existing = self._find_budget_item(editing_id)
            updated = replace(
                existing,
                description=Description(draft.description),
                category=category,
                amount=amount,
                budget_type=draft.budget_type,
                due_date=draft.due_date or existing.due_date,
                paid_by=draft.paid_by or existing.paid_by,
            )
            self.state.budget_items = [updated if b.id == editing_id else b for b in self.state.budget_items]
            self._commit(BUDGET_ITEMS)
            return [updated]

        new_items = expand_installments(
            Description(draft.description),
            category,
            draft.budget_type,
            amount,
            draft.installments,
            draft.due_date or default_due_date(self.state.selected_month),
            draft.paid_by,
        )
        self.state.budget_items = [*self.state.budget_items, *new_items]
        self._commit(BUDGET_ITEMS)
        return new_items

    def delete_budget_item(self, item_id: str) -> None:
        self._find_budget_item(item_id)
        self.state.budget_items = [b for b in self.state.budget_items if b.id != item_id]
        self._commit(BUDGET_ITEMS)

    def toggle_budget_item_paid(self, item_id: str) -> BudgetItem:
        """Flip the paid flag of exactly one budget item."""
        item = self._find_budget_item(item_id)
        toggled = replace(item, is_paid=not item.is_paid)
        self.state.budget_items = [toggled if b.id == item_id else b for b in self.state.budget_items]
        self._commit(BUDGET_ITEMS)
        return toggled

    def copy_budget_from(self, source: Month, flags: CopyFlags) -> list[BudgetItem]:
        """Carry a previous period's budget items into the selected period.

        Raises:
            ValidationError: If the source period is not earlier or has no items.
        """
        if source not in self.source_periods():
            raise ValidationError(f"No budget items to copy from {source}.")

        copies = copy_from_period(source, self.state.selected_month, self.state.budget_items, flags)
        if copies:
            self.state.budget_items = [*self.state.budget_items, *copies]
            self._commit(BUDGET_ITEMS)
        return copies

    # --- Goals ---

    def _find_goal(self, goal_id: str) -> Goal:
        for goal in self.state.goals:
            if goal.id == goal_id:
                return goal
        raise NotFoundError(f"No goal with id '{goal_id}'.")

    def add_goal(self, draft: GoalDraft) -> Goal:
        error = validate_goal_draft(draft)
        if error:
            raise ValidationError(error)

        goal = Goal(
            id=uuid4().hex,
            name=draft.name.strip(),
            target=parse_currency(draft.target),
            current=parse_currency(draft.current or "0"),
            deadline=draft.deadline,
            priority=draft.priority,
        )
        self.state.goals = [*self.state.goals, goal]
        self._commit(GOALS)
        return goal

    def update_goal_progress(self, goal_id: str, delta: Money) -> Goal:
        """Add savings to a goal. Progress only ever increases.

        Raises:
            ValidationError: If delta is not positive.
            NotFoundError: If the goal does not exist.
        """
        if delta <= 0:
            raise ValidationError("Progress amount must be positive.")
        goal = self._find_goal(goal_id)
        updated = replace(goal, current=Money(goal.current + delta))
        self.state.goals = [updated if g.id == goal_id else g for g in self.state.goals]
        self._commit(GOALS)
        return updated

    def delete_goal(self, goal_id: str) -> None:
        self._find_goal(goal_id)
        self.state.goals = [g for g in self.state.goals if g.id != goal_id]
        self._commit(GOALS)

    # --- Categories and settings ---

    def add_custom_category(self, name: str, kind: EntryKind) -> CustomCategory:
        category, error = create_custom_category(name, kind)
        if error or category is None:
            raise ValidationError(error or "Invalid category.")
        self.state.custom_categories = [*self.state.custom_categories, category]
        self._commit(CUSTOM_CATEGORIES)
        return category

    def update_settings(
        self,
        planner_name: str | None = None,
        spouse_a: str | None = None,
        spouse_b: str | None = None,
    ) -> PlannerSettings:
        """Rename the planner or either partner; blank values are ignored."""
        current = self.state.settings
        self.state.settings = PlannerSettings(
            planner_name=planner_name.strip() if planner_name and planner_name.strip() else current.planner_name,
            spouse_a=spouse_a.strip() if spouse_a and spouse_a.strip() else current.spouse_a,
            spouse_b=spouse_b.strip() if spouse_b and spouse_b.strip() else current.spouse_b,
        )
        self._commit(SETTINGS)
        return self.state.settings


def find_lookup(options: list[LookupOption], option_id: int | None) -> LookupOption | None:
    for option in options:
        if option.id == option_id:
            return option
    return None

def current_month(today: Date | None = None) -> Month:
    """Period key of today, used as the default selection."""
    return period_key_of(today or Date.today())
