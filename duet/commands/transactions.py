"""Transaction commands (add, delete, list)."""

import sqlite3

import typer
from rich.table import Table

from duet.commands.common import console, fail, open_planner, parse_date_option, read_amount
from duet.dates import month_label
from duet.domain.currency import format_money_display
from duet.domain.models import EntryKind, Frequency, PaidBy
from duet.errors import DuetError
from duet.planner import Planner, TransactionDraft


def ensure_category(planner: Planner, category: str, kind: EntryKind) -> None:
    """Offer to create a custom category the registry does not know yet."""
    if category in planner.categories(kind):
        return

    console.print(f"\n[yellow]Category '{category}' doesn't exist yet[/yellow]")
    if typer.confirm("Create it?", default=True):
        planner.add_custom_category(category, kind)
        console.print(f"[green]✓[/green] Created category: {category}")


def add_command(
    description: str,
    amount: str,
    kind: EntryKind = EntryKind.EXPENSE,
    category: str | None = None,
    date: str | None = None,
    frequency: Frequency | None = None,
    paid_by: PaidBy | None = None,
    budget_item_id: str | None = None,
    movement_type_id: int | None = None,
    category_id: int | None = None,
    month: str | None = None,
    cents: bool = False,
) -> None:
    """Add a realized transaction.

    Args:
        description: Transaction description.
        amount: Amount as typed, in the 1.234,56 convention.
        kind: Expense or income.
        category: Category label (local backend).
        date: Transaction date; defaults to the 1st of the selected month.
        frequency: Fixed or variable.
        paid_by: Partner attribution.
        budget_item_id: Budget item this transaction pays.
        movement_type_id: Remote movement type id (remote backend).
        category_id: Remote category id (remote backend).
        month: Selected month (YYYY-MM).
        cents: Read the amount's digits as cents.
    """
    planner = open_planner(month)
    entry_date = parse_date_option(date)

    try:
        if category and planner.ledger is None:
            ensure_category(planner, category, kind)

        txn = planner.add_transaction(
            TransactionDraft(
                description=description,
                amount=read_amount(amount, cents),
                kind=kind,
                category=category,
                date=entry_date,
                frequency=frequency,
                paid_by=paid_by,
                budget_item_id=budget_item_id,
                movement_type_id=movement_type_id,
                category_id=category_id,
            )
        )
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print("[green]✓[/green] Transaction added:")
    console.print(f"  ID: {txn.id}")
    console.print(f"  Date: {txn.date.isoformat()}")
    console.print(f"  Description: {txn.description}")
    console.print(f"  Amount: {format_money_display(txn.amount)}")
    console.print(f"  Category: {txn.category}")
    if txn.paid_by:
        console.print(f"  Paid by: {planner.state.settings.paid_by_label(txn.paid_by)}")


def delete_command(transaction_id: str) -> None:
    """Delete a transaction by ID."""
    planner = open_planner(refresh=False)

    try:
        removed = planner.delete_transaction(transaction_id)
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if removed or planner.ledger is not None:
        console.print(f"[green]✓[/green] Deleted transaction {transaction_id}")
    else:
        console.print(f"[yellow]Transaction {transaction_id} not found[/yellow]")


def list_command(month: str | None = None, all: bool = False, shift: int = 0) -> None:
    """List transactions for the selected month, or all of them."""
    planner = open_planner(month, shift=shift)
    settings = planner.state.settings

    if all:
        transactions = sorted(planner.state.transactions, key=lambda t: t.date, reverse=True)
        title = f"Transactions (showing all {len(transactions)})"
    else:
        transactions = sorted(planner.summary().transactions, key=lambda t: t.date, reverse=True)
        title = f"Transactions - {month_label(planner.state.selected_month)}"

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Paid by", style="dim")

    for txn in transactions:
        if txn.kind == EntryKind.EXPENSE:
            amount_display = f"[red]-{format_money_display(txn.amount)}[/red]"
        else:
            amount_display = f"[green]+{format_money_display(txn.amount)}[/green]"

        paid_by = settings.paid_by_label(txn.paid_by) or "[dim]-[/dim]"
        table.add_row(txn.id, txn.date.isoformat(), txn.description, amount_display, txn.category, paid_by)

    console.print(table)
