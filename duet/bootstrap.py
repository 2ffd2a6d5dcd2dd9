"""Build a Planner from configuration, local store and session."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from duet.config import (
    get_backend,
    get_exclude_linked,
    get_planner_settings,
    get_remote_settings,
    load_config_or_default,
)
from duet.domain.models import Month
from duet.errors import DuetError
from duet.planner import (
    BUDGET_ITEMS,
    CUSTOM_CATEGORIES,
    GOALS,
    SETTINGS,
    TRANSACTIONS,
    Planner,
    PlannerState,
    current_month,
)
from duet.session import load_session
from duet.store.codec import (
    budget_item_from_dict,
    budget_item_to_dict,
    custom_category_from_dict,
    custom_category_to_dict,
    goal_from_dict,
    goal_to_dict,
    settings_from_dict,
    settings_to_dict,
    transaction_from_dict,
    transaction_to_dict,
)
from duet.store.local import LocalStore
from duet.store.remote import RemoteLedger

ENCODERS: dict[str, Callable[[PlannerState], Any]] = {
    TRANSACTIONS: lambda state: [transaction_to_dict(t) for t in state.transactions],
    BUDGET_ITEMS: lambda state: [budget_item_to_dict(b) for b in state.budget_items],
    GOALS: lambda state: [goal_to_dict(g) for g in state.goals],
    CUSTOM_CATEGORIES: lambda state: [custom_category_to_dict(c) for c in state.custom_categories],
    SETTINGS: lambda state: settings_to_dict(state.settings),
}


class PersistenceListener:
    """Saves changed collections to the store after each mutation."""

    def __init__(self, store: LocalStore, collections: set[str]) -> None:
        self.store = store
        self.collections = collections

    def __call__(self, state: PlannerState, changed: frozenset[str]) -> None:
        for name in sorted(changed & self.collections):
            self.store.save(name, ENCODERS[name](state))


def load_state(store: LocalStore, month: Month, config: dict[str, Any], include_transactions: bool) -> PlannerState:
    """Read every stored collection into a fresh state.

    Raises:
        json.JSONDecodeError: If a stored collection is malformed.
    """
    settings_data = store.load(SETTINGS)
    defaults = get_planner_settings(config)

    return PlannerState(
        selected_month=month,
        transactions=[transaction_from_dict(d) for d in (store.load(TRANSACTIONS) or [])]
        if include_transactions
        else [],
        budget_items=[budget_item_from_dict(d) for d in (store.load(BUDGET_ITEMS) or [])],
        goals=[goal_from_dict(d) for d in (store.load(GOALS) or [])],
        custom_categories=[custom_category_from_dict(d) for d in (store.load(CUSTOM_CATEGORIES) or [])],
        settings=settings_from_dict(settings_data, defaults) if settings_data else defaults,
    )


def load_planner(
    month: Month | None = None,
    db_path: Path | None = None,
    config_path: Path | None = None,
    refresh: bool = True,
) -> Planner:
    """Create the planner for one command.

    With the remote backend, transactions come from the remote ledger and
    only the other collections are kept locally.

    Args:
        month: Selected period. Defaults to the current month.
        db_path: Local database path. If None, uses default location.
        config_path: Config file path. If None, uses default location.
        refresh: Fetch transactions from the remote ledger right away.

    Raises:
        DuetError: If the remote backend is misconfigured or a fetch fails.
    """
    config = load_config_or_default(config_path)
    store = LocalStore(db_path)
    remote = get_backend(config) == "remote"

    state = load_state(store, current_month(), config, include_transactions=not remote)

    ledger = None
    if remote:
        url, api_key, timeout = get_remote_settings(config)
        if not url or not api_key:
            raise DuetError("Remote backend needs [remote] url and api_key in the config file.")
        ledger = RemoteLedger(url, api_key, load_session(), timeout)

    planner = Planner(state, ledger=ledger, exclude_linked=get_exclude_linked(config))
    if month:
        planner.select_period(month)

    persisted = {BUDGET_ITEMS, GOALS, CUSTOM_CATEGORIES, SETTINGS}
    if not remote:
        persisted.add(TRANSACTIONS)
    planner.subscribe(PersistenceListener(store, persisted))

    if remote and refresh:
        planner.refresh_transactions()

    return planner
