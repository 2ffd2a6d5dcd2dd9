"""Savings goal commands."""

import sqlite3

from rich.table import Table

from duet.commands.common import console, fail, open_planner, parse_date_option
from duet.domain.currency import format_money_display, parse_currency
from duet.domain.models import Priority
from duet.domain.summary import goal_progress_percent, is_goal_complete
from duet.errors import DuetError
from duet.planner import GoalDraft

PRIORITY_STYLES = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "dim",
}


def goals_command() -> None:
    """List savings goals with their progress."""
    planner = open_planner(refresh=False)
    goals = planner.state.goals

    if not goals:
        console.print("[yellow]No goals yet[/yellow]")
        console.print("[dim]Use 'duet goal-add' to set one[/dim]")
        return

    table = Table(title="Goals", show_header=True, header_style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Goal", style="white")
    table.add_column("Saved", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Deadline", style="cyan")
    table.add_column("Priority")

    for goal in goals:
        percent = goal_progress_percent(goal)
        progress = f"[green]✓ {percent:.0f}%[/green]" if is_goal_complete(goal) else f"{percent:.0f}%"
        style = PRIORITY_STYLES[goal.priority]
        table.add_row(
            goal.id,
            goal.name,
            format_money_display(goal.current),
            format_money_display(goal.target),
            progress,
            goal.deadline.strftime("%d/%m/%Y") if goal.deadline else "-",
            f"[{style}]{goal.priority.value}[/{style}]",
        )

    console.print(table)


def goal_add_command(
    name: str,
    target: str,
    current: str = "",
    deadline: str | None = None,
    priority: Priority = Priority.MEDIUM,
) -> None:
    """Create a savings goal."""
    planner = open_planner(refresh=False)

    try:
        goal = planner.add_goal(
            GoalDraft(
                name=name,
                target=target,
                current=current,
                deadline=parse_date_option(deadline),
                priority=priority,
            )
        )
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓ Goal '{goal.name}' created: {format_money_display(goal.target)}[/green]")
    if goal.current:
        console.print(f"[dim]Already saved: {format_money_display(goal.current)}[/dim]")


def goal_progress_command(goal_id: str, amount: str) -> None:
    """Add savings to a goal."""
    planner = open_planner(refresh=False)

    try:
        goal = planner.update_goal_progress(goal_id, parse_currency(amount))
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(
        f"[green]✓ {goal.name}: {format_money_display(goal.current)} of {format_money_display(goal.target)}"
        f" ({goal_progress_percent(goal):.0f}%)[/green]"
    )
    if is_goal_complete(goal):
        console.print("[bold green]Goal reached![/bold green]")


def goal_delete_command(goal_id: str) -> None:
    planner = open_planner(refresh=False)

    try:
        planner.delete_goal(goal_id)
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓ Deleted goal {goal_id}[/green]")
