"""Budget plan commands (list, add/edit, pay, delete, copy)."""

import sqlite3
from dataclasses import replace

from rich.table import Table

from duet.commands.common import console, fail, open_planner, parse_date_option, read_amount
from duet.config import get_copy_flags, load_config_or_default
from duet.dates import month_label
from duet.domain.currency import format_money_display
from duet.domain.models import BudgetItem, BudgetType, EntryKind, Month, PaidBy
from duet.errors import DuetError
from duet.planner import BudgetItemDraft


def format_installments(item: BudgetItem) -> str:
    if item.installments is None:
        return "[dim]-[/dim]"
    return f"{item.installments.current}/{item.installments.total}"


def format_budget_type(budget_type: BudgetType) -> str:
    """Frequency label colored by kind (green income, red expense)."""
    color = "green" if budget_type.kind == EntryKind.INCOME else "red"
    return f"[{color}]{budget_type.frequency.value.capitalize()}[/{color}]"


def plan_command(month: str | None = None, shift: int = 0) -> None:
    """Show the budget plan for a month with its totals."""
    planner = open_planner(month, shift=shift)
    summary = planner.summary()
    settings = planner.state.settings
    label = month_label(planner.state.selected_month)

    console.print(f"[bold cyan]{label} Budget[/bold cyan]\n")

    if not summary.budget_items:
        console.print(f"[yellow]No budget items for {label}[/yellow]")
        console.print("[dim]Use 'duet plan-add' to plan income and expenses[/dim]")
        sources = planner.source_periods()
        if sources:
            console.print(f"[dim]Or 'duet copy --from {sources[0]}' to reuse an earlier month[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Due", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Type")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Inst.", justify="center")
    table.add_column("Paid by", style="dim")
    table.add_column("Paid", justify="center")

    for item in sorted(summary.budget_items, key=lambda b: b.due_date.isoformat() if b.due_date else ""):
        color = "green" if item.budget_type.kind == EntryKind.INCOME else "red"
        table.add_row(
            item.id,
            item.due_date.isoformat() if item.due_date else "-",
            item.description,
            format_budget_type(item.budget_type),
            item.category,
            f"[{color}]{format_money_display(item.amount)}[/{color}]",
            format_installments(item),
            settings.paid_by_label(item.paid_by) or "[dim]-[/dim]",
            "✓" if item.is_paid else "○",
        )

    console.print(table)

    console.print(f"\n[bold]Income:[/bold]  [green]{format_money_display(summary.total_income)}[/green]")
    console.print(f"[bold]Expense:[/bold] [red]{format_money_display(summary.total_expense)}[/red]")
    balance_color = "green" if summary.balance >= 0 else "red"
    console.print(f"[bold]Balance:[/bold] [{balance_color}]{format_money_display(summary.balance)}[/{balance_color}]")
    console.print("\n[dim]Totals include realized transactions and unpaid planned items[/dim]")


def plan_add_command(
    description: str,
    amount: str,
    budget_type: BudgetType = BudgetType.EXPENSE_FIXED,
    category: str | None = None,
    due: str | None = None,
    installments: int | None = None,
    paid_by: PaidBy | None = None,
    edit: str | None = None,
    month: str | None = None,
    cents: bool = False,
) -> None:
    """Add a budget item, split it into installments, or edit an existing one.

    Args:
        description: Item description.
        amount: Estimated amount (total, when split into installments).
        budget_type: Kind and frequency.
        category: Category label.
        due: Due date; defaults to the last day of the selected month.
        installments: Number of monthly installments (2 or more splits the amount).
        paid_by: Partner attribution.
        edit: ID of an existing item to edit instead of creating one.
        month: Selected month (YYYY-MM).
        cents: Read the amount's digits as cents.
    """
    planner = open_planner(month, refresh=False)
    due_date = parse_date_option(due)

    if edit and installments:
        console.print("[yellow]Installments are ignored when editing a single item[/yellow]")

    try:
        items = planner.save_budget_item(
            BudgetItemDraft(
                description=description,
                amount=read_amount(amount, cents),
                budget_type=budget_type,
                category=category,
                due_date=due_date,
                installments=installments,
                paid_by=paid_by,
            ),
            editing_id=edit,
        )
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if edit:
        console.print(f"[green]✓ Updated {items[0].description}[/green]")
        return

    if len(items) > 1:
        console.print(f"[green]✓ Planned {description} in {len(items)} installments[/green]")
        for item in items:
            console.print(
                f"  {format_installments(item)}  {item.due_date.isoformat() if item.due_date else '-'}"
                f"  {format_money_display(item.amount)}"
            )
        return

    item = items[0]
    console.print(
        f"[green]✓ Planned {item.description}: {format_money_display(item.amount)}"
        f" due {item.due_date.isoformat() if item.due_date else '-'}[/green]"
    )


def pay_command(item_id: str) -> None:
    """Toggle the paid flag of one budget item."""
    planner = open_planner(refresh=False)

    try:
        item = planner.toggle_budget_item_paid(item_id)
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if item.is_paid:
        console.print(f"[green]✓ {item.description} marked as paid[/green]")
    else:
        console.print(f"[yellow]{item.description} marked as unpaid[/yellow]")


def plan_delete_command(item_id: str) -> None:
    """Delete one budget item (installment siblings are kept)."""
    planner = open_planner(refresh=False)

    try:
        planner.delete_budget_item(item_id)
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓ Deleted budget item {item_id}[/green]")


def copy_command(
    source: str | None = None,
    month: str | None = None,
    include_paid_expenses: bool = False,
    skip_income: bool = False,
) -> None:
    """Copy budget items from an earlier month into the selected month.

    Args:
        source: Month to copy from (YYYY-MM). Lists the candidates when omitted.
        month: Month to copy into (YYYY-MM).
        include_paid_expenses: Also copy expenses already marked as paid.
        skip_income: Leave income items out.
    """
    planner = open_planner(month, refresh=False)
    target_label = month_label(planner.state.selected_month)
    sources = planner.source_periods()

    if not source:
        if not sources:
            console.print(f"[yellow]No earlier months with budget items before {target_label}[/yellow]")
            return
        console.print(f"[bold]Months you can copy into {target_label}:[/bold]")
        for period in sources:
            console.print(f"  • {period} ({month_label(period)})")
        console.print("\n[dim]Use 'duet copy --from YYYY-MM'[/dim]")
        return

    flags = get_copy_flags(load_config_or_default())
    if include_paid_expenses:
        flags = replace(flags, fixed_expense_paid=True, variable_expense_paid=True)
    if skip_income:
        flags = replace(
            flags,
            fixed_income_paid=False,
            fixed_income_unpaid=False,
            variable_income_paid=False,
            variable_income_unpaid=False,
        )

    try:
        copies = planner.copy_budget_from(Month(source), flags)
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if not copies:
        console.print("[yellow]Nothing matched the copy settings[/yellow]")
        return

    console.print(f"[green]✓ Copied {len(copies)} items from {month_label(Month(source))} to {target_label}[/green]")
    for item in copies:
        console.print(f"  {item.description}: {format_money_display(item.amount)}")
