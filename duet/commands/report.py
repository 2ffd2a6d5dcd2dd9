"""Summary and alert commands for viewing a month at a glance."""

from datetime import date

from rich.table import Table

from duet.commands.common import console, open_planner
from duet.dates import is_current_period, month_label
from duet.domain.alerts import Bill, BillSource
from duet.domain.currency import format_money_display
from duet.domain.summary import (
    GoalProgress,
    calculate_histogram_bar_length,
    sort_breakdown,
    spending_feedback,
)

FEEDBACK_COLORS = {
    "great": "green",
    "attention": "yellow",
    "careful": "dark_orange",
    "stop": "red",
}


def format_ratio_display(ratio: float) -> str:
    """Color a spend ratio by how much of the income it takes."""
    text = f"{ratio:.0f}%"
    if ratio > 99:
        return f"[red]{text}[/red]"
    elif ratio > 80:
        return f"[yellow]{text}[/yellow]"
    else:
        return f"[green]{text}[/green]"


def render_goal_line(progress: GoalProgress, bar_width: int) -> None:
    """Render one goal as a saved/remaining bar."""
    saved_length = calculate_histogram_bar_length(min(progress.saved_percent, 100.0), 100.0, bar_width)
    bar = f"[green]{'█' * saved_length}[/green][dim]{'░' * (bar_width - saved_length)}[/dim]"
    console.print(
        f"  {progress.name:20} {bar} {progress.saved_percent:5.1f}%"
        f"  {format_money_display(progress.saved_value)} / {format_money_display(progress.target)}"
    )


def summary_command(
    month: str | None = None, histogram: bool = True, sort_by: str = "value", shift: int = 0
) -> None:
    """Show the month's income, expenses, balance, categories and goals."""
    planner = open_planner(month, shift=shift)
    summary = planner.summary()
    settings = planner.state.settings
    label = month_label(summary.month)

    current = " [dim](current month)[/dim]" if is_current_period(summary.month) else ""
    console.print(f"[bold magenta]{settings.planner_name}[/bold magenta]")
    console.print(f"[bold cyan]{label}[/bold cyan]{current}\n")

    console.print(
        f"[bold]Income:[/bold]  [green]{format_money_display(summary.total_income)}[/green]"
        f" [dim](realized {format_money_display(summary.realized_income)},"
        f" planned {format_money_display(summary.planned_unpaid_income)})[/dim]"
    )
    console.print(
        f"[bold]Expense:[/bold] [red]{format_money_display(summary.total_expense)}[/red]"
        f" [dim](realized {format_money_display(summary.realized_expense)},"
        f" planned {format_money_display(summary.planned_unpaid_expense)})[/dim]"
    )
    balance_color = "green" if summary.balance >= 0 else "red"
    console.print(f"[bold]Balance:[/bold] [{balance_color}]{format_money_display(summary.balance)}[/{balance_color}]")

    if summary.spend_ratio is not None:
        console.print(f"[bold]Spent:[/bold]   {format_ratio_display(summary.spend_ratio)} of income")
        feedback = spending_feedback(summary.spend_ratio)
        if feedback:
            color = FEEDBACK_COLORS[feedback.level]
            console.print(f"\n[bold {color}]{feedback.message}[/bold {color}]")

    if summary.category_expenses:
        console.print("\n[bold red]Expenses by category:[/bold red]\n")
        bar_width = 30
        max_amount = max(summary.category_expenses.values())

        for category, amount in sort_breakdown(summary.category_expenses, sort_by):
            amount_display = format_money_display(amount)
            if histogram:
                bar = "█" * calculate_histogram_bar_length(amount, max_amount, bar_width)
                console.print(f"  {category:20} {amount_display:>14} {bar}")
            else:
                console.print(f"  {category}: {amount_display}")
    else:
        console.print("\n[dim]No expenses this month[/dim]")

    goals = planner.goal_progress()
    if goals:
        console.print("\n[bold green]Goals:[/bold green]\n")
        for progress in goals:
            render_goal_line(progress, bar_width=20)


def render_bill_table(title: str, bills: list[Bill], style: str) -> None:
    table = Table(title=title, title_style=style, show_header=True, header_style="bold")
    table.add_column("Due", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Source", style="dim")
    table.add_column("Amount", justify="right")

    for bill in bills:
        source = "Budget" if bill.source == BillSource.BUDGET else "Recorded"
        table.add_row(
            bill.date.strftime("%d/%m/%Y"),
            bill.description,
            bill.category or "-",
            source,
            format_money_display(bill.amount),
        )

    console.print(table)


def alerts_command(month: str | None = None, shift: int = 0) -> None:
    """Show overdue bills and bills due in the next seven days."""
    planner = open_planner(month, shift=shift)
    today = date.today()
    bills = planner.bills(today)
    board = planner.alerts(today)

    if not bills:
        console.print("[yellow]No expenses found[/yellow]")
        console.print("[dim]Add expenses with 'duet add' or 'duet plan-add'[/dim]")
        return

    if board.overdue:
        render_bill_table(f"Overdue bills ({len(board.overdue)})", board.overdue, "bold red")
    if board.due_soon:
        if board.overdue:
            console.print()
        render_bill_table(f"Due in the next 7 days ({len(board.due_soon)})", board.due_soon, "bold yellow")

    if not board.overdue and not board.due_soon:
        console.print("[green]✓ All caught up! No overdue or upcoming bills[/green]")
