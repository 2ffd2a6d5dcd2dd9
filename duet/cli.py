"""CLI entry point for duet."""

import typer

from duet.commands.admin import backup_command, init_command, login_command, logout_command, settings_command
from duet.commands.budget import copy_command, pay_command, plan_add_command, plan_command, plan_delete_command
from duet.commands.categories import categories_command, category_add_command
from duet.commands.goals import goal_add_command, goal_delete_command, goal_progress_command, goals_command
from duet.commands.report import alerts_command, summary_command
from duet.commands.transactions import add_command, delete_command, list_command
from duet.domain.models import BudgetType, EntryKind, Frequency, PaidBy, Priority

app = typer.Typer(
    name="duet",
    help="Duet - A household budget planner for couples",
    add_completion=False,
)

MONTH_HELP = "Month to work on (YYYY-MM, default: current month)"
CENTS_HELP = "Read the amount's digits as cents (15075 is 150,75)"


def month_shift(prev: bool, next_: bool) -> int:
    """Months to step from --month for the --prev and --next flags."""
    return int(next_) - int(prev)


@app.callback()
def main() -> None:
    """Duet - A household budget planner for couples."""
    pass


# --- Admin ---


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
    migrate: bool = typer.Option(False, "--migrate", help="Update the database schema only"),
) -> None:
    """Initialize duet database and configuration."""
    init_command(force, migrate)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command()
def login(
    email: str = typer.Option(None, "--email", "-e", help="Account email (prompted if omitted)"),
) -> None:
    """Sign in to the remote ledger."""
    login_command(email)


@app.command()
def logout() -> None:
    """Forget the stored remote session."""
    logout_command()


@app.command()
def settings(
    name: str = typer.Option(None, "--name", help="Planner name"),
    spouse_a: str = typer.Option(None, "--spouse-a", help="First partner's name"),
    spouse_b: str = typer.Option(None, "--spouse-b", help="Second partner's name"),
) -> None:
    """Show or rename the planner and partners."""
    settings_command(name, spouse_a, spouse_b)


# --- Transactions ---


@app.command()
def summary(
    sort_by: str = typer.Option("value", help="Sort categories by 'value' or 'alpha'"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    prev: bool = typer.Option(False, "--prev", help="Show the month before"),
    next_: bool = typer.Option(False, "--next", help="Show the month after"),
) -> None:
    """Show the month's balance, spending by category and goals."""
    summary_command(month, histogram, sort_by, month_shift(prev, next_))


@app.command(name="list")
def list_transactions(
    all: bool = typer.Option(False, "--all", "-a", help="Show every month"),
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    prev: bool = typer.Option(False, "--prev", help="Show the month before"),
    next_: bool = typer.Option(False, "--next", help="Show the month after"),
) -> None:
    """List your transactions."""
    list_command(month, all, month_shift(prev, next_))


@app.command()
def add(
    description: str,
    amount: str = typer.Argument(..., help="Amount, e.g. 1.234,56"),
    kind: EntryKind = typer.Option(EntryKind.EXPENSE, "--kind", "-k", help="Expense or income"),
    category: str = typer.Option(None, "--category", "-c", help="Category name"),
    date: str = typer.Option(None, "--date", "-d", help="Date (default: 1st of the month)"),
    frequency: Frequency = typer.Option(None, "--frequency", help="Fixed or variable"),
    paid_by: PaidBy = typer.Option(None, "--paid-by", help="Who paid"),
    budget_item: str = typer.Option(None, "--budget-item", help="ID of the budget item this pays"),
    movement_type_id: int = typer.Option(None, "--movement-type-id", help="Remote movement type"),
    category_id: int = typer.Option(None, "--category-id", help="Remote category"),
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    cents: bool = typer.Option(False, "--cents", help=CENTS_HELP),
) -> None:
    """Record an income or expense."""
    add_command(
        description,
        amount,
        kind,
        category,
        date,
        frequency,
        paid_by,
        budget_item,
        movement_type_id,
        category_id,
        month,
        cents,
    )


@app.command()
def delete(transaction_id: str) -> None:
    """Delete a transaction."""
    delete_command(transaction_id)


# --- Budget plan ---


@app.command()
def plan(
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    prev: bool = typer.Option(False, "--prev", help="Show the month before"),
    next_: bool = typer.Option(False, "--next", help="Show the month after"),
) -> None:
    """Show the month's budget plan."""
    plan_command(month, month_shift(prev, next_))


@app.command(name="plan-add")
def plan_add(
    description: str,
    amount: str = typer.Argument(..., help="Estimated amount (total when split)"),
    budget_type: BudgetType = typer.Option(BudgetType.EXPENSE_FIXED, "--type", "-t", help="Kind and frequency"),
    category: str = typer.Option(None, "--category", "-c", help="Category name"),
    due: str = typer.Option(None, "--due", help="Due date (default: last day of the month)"),
    installments: int = typer.Option(None, "--installments", "-n", help="Split into monthly installments"),
    paid_by: PaidBy = typer.Option(None, "--paid-by", help="Who pays"),
    edit: str = typer.Option(None, "--edit", help="ID of a budget item to edit"),
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    cents: bool = typer.Option(False, "--cents", help=CENTS_HELP),
) -> None:
    """Plan an income or expense, optionally in installments."""
    plan_add_command(description, amount, budget_type, category, due, installments, paid_by, edit, month, cents)


@app.command(name="plan-delete")
def plan_delete(item_id: str) -> None:
    """Delete a budget item."""
    plan_delete_command(item_id)


@app.command()
def pay(item_id: str) -> None:
    """Mark a budget item as paid, or unpaid again."""
    pay_command(item_id)


@app.command()
def copy(
    source: str = typer.Option(None, "--from", help="Month to copy from (YYYY-MM)"),
    include_paid_expenses: bool = typer.Option(False, "--include-paid", help="Also copy paid expenses"),
    skip_income: bool = typer.Option(False, "--skip-income", help="Leave income items out"),
    month: str = typer.Option(None, "--month", help="Month to copy into (YYYY-MM)"),
) -> None:
    """Copy budget items from an earlier month."""
    copy_command(source, month, include_paid_expenses, skip_income)


@app.command()
def alerts(
    month: str = typer.Option(None, "--month", help=MONTH_HELP),
    prev: bool = typer.Option(False, "--prev", help="Show the month before"),
    next_: bool = typer.Option(False, "--next", help="Show the month after"),
) -> None:
    """Show overdue bills and bills due this week."""
    alerts_command(month, month_shift(prev, next_))


# --- Goals ---


@app.command()
def goals() -> None:
    """List your savings goals."""
    goals_command()


@app.command(name="goal-add")
def goal_add(
    name: str,
    target: str = typer.Argument(..., help="Target amount"),
    current: str = typer.Option("", "--saved", help="Amount already saved"),
    deadline: str = typer.Option(None, "--deadline", help="Deadline date"),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority", "-p", help="Goal priority"),
) -> None:
    """Create a savings goal."""
    goal_add_command(name, target, current, deadline, priority)


@app.command(name="goal-progress")
def goal_progress(
    goal_id: str,
    amount: str = typer.Argument(..., help="Amount saved"),
) -> None:
    """Add savings to a goal."""
    goal_progress_command(goal_id, amount)


@app.command(name="goal-delete")
def goal_delete(goal_id: str) -> None:
    """Delete a savings goal."""
    goal_delete_command(goal_id)


# --- Categories ---


@app.command()
def categories(
    kind: EntryKind = typer.Option(None, "--kind", "-k", help="Only expense or income categories"),
    movement_type_id: int = typer.Option(
        None, "--movement-type-id", help="Only remote categories for this movement type"
    ),
) -> None:
    """List categories, and the remote lookups when the remote backend is used."""
    categories_command(kind, movement_type_id)


@app.command(name="category-add")
def category_add(
    name: str,
    kind: EntryKind = typer.Option(EntryKind.EXPENSE, "--kind", "-k", help="Expense or income"),
) -> None:
    """Create a custom category."""
    category_add_command(name, kind)


if __name__ == "__main__":
    app()
