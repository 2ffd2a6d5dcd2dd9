"""Category registry commands."""

import sqlite3

from rich.columns import Columns
from rich.table import Table

from duet.commands.common import console, fail, open_planner
from duet.domain.categories import PREDEFINED_CATEGORIES
from duet.domain.models import EntryKind, LookupOption
from duet.errors import DuetError
from duet.planner import Planner


def render_lookup_table(title: str, options: list[LookupOption]) -> None:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Label", style="white")
    table.add_column("Kind")

    for option in options:
        color = "green" if option.kind == EntryKind.INCOME else "red"
        table.add_row(str(option.id), option.label, f"[{color}]{option.kind.value}[/{color}]")

    console.print(table)


def show_remote_lookups(planner: Planner, movement_type_id: int | None = None) -> None:
    """List the remote movement types and the categories that fit them."""
    try:
        planner.refresh_lookups()
    except DuetError as e:
        fail(str(e))

    render_lookup_table("Movement types", planner.state.movement_types)
    console.print()

    categories = planner.lookup_categories(movement_type_id)
    title = "Financial categories"
    if movement_type_id is not None:
        title = f"Financial categories for movement type {movement_type_id}"
    render_lookup_table(title, categories)

    console.print("\n[dim]Use these IDs with 'duet add --movement-type-id ... --category-id ...'[/dim]")


def categories_command(kind: EntryKind | None = None, movement_type_id: int | None = None) -> None:
    """List categories, predefined first and then your own.

    With the remote backend, also list the remote lookups with their IDs.
    """
    planner = open_planner(refresh=False)
    kinds = [kind] if kind else [EntryKind.EXPENSE, EntryKind.INCOME]

    for entry_kind in kinds:
        predefined_count = len(PREDEFINED_CATEGORIES[entry_kind])
        labels = [
            name if index < predefined_count else f"[cyan]{name}[/cyan]"
            for index, name in enumerate(planner.categories(entry_kind))
        ]
        console.print(f"[bold]{entry_kind.value.capitalize()} categories:[/bold]")
        console.print(Columns(labels, padding=(0, 3)))
        console.print()

    console.print("[dim]Your own categories are shown in cyan[/dim]")

    if planner.ledger is not None:
        console.print()
        show_remote_lookups(planner, movement_type_id)
    elif movement_type_id is not None:
        console.print("[yellow]--movement-type-id only applies to the remote backend[/yellow]")


def category_add_command(name: str, kind: EntryKind = EntryKind.EXPENSE) -> None:
    """Create a custom category."""
    planner = open_planner(refresh=False)

    try:
        category = planner.add_custom_category(name, kind)
    except DuetError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Created {kind.value} category: {category.name}")
