"""Helpers shared by the command modules."""

import json
import sqlite3
import sys
from datetime import date
from typing import NoReturn

import pandas as pd
from rich.console import Console

from duet.bootstrap import load_planner
from duet.domain.currency import format_input_currency
from duet.domain.models import Month
from duet.errors import DuetError
from duet.planner import Planner
from duet.store.schema import database_exists, get_db_path

console = Console()


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def normalize_date_input(raw_date: str) -> date:
    """Parse a date typed by the user.

    Uses pandas.to_datetime so ISO dates and day-first dates (31/03/2025)
    are both accepted. ISO input is never read day-first.

    Raises:
        ValueError: If date cannot be parsed.
    """
    try:
        parsed = pd.to_datetime(raw_date, format="ISO8601")
    except ValueError:
        try:
            parsed = pd.to_datetime(raw_date, dayfirst=True)
        except (ValueError, pd.errors.ParserError) as e:
            raise ValueError(f"Could not parse date '{raw_date}': {e}") from e
    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed.date()


def parse_date_option(raw_date: str | None) -> date | None:
    """Parse an optional date option, exiting with a message if it is invalid."""
    if not raw_date:
        return None
    try:
        return normalize_date_input(raw_date)
    except ValueError as e:
        fail(str(e))


def read_amount(raw: str, cents: bool = False) -> str:
    """Amount as typed, or its digits read as cents (15075 -> 150,75)."""
    return format_input_currency(raw) if cents else raw


def open_planner(month: str | None = None, refresh: bool = True, shift: int = 0) -> Planner:
    """Load the planner for a command, exiting with a message on failure.

    Args:
        month: Selected month (YYYY-MM). Defaults to the current month.
        refresh: Fetch transactions when the remote backend is configured.
            Commands that only touch local collections pass False.
        shift: Months to move the selection by after loading.
    """
    if not database_exists():
        fail("Database not found. Run 'duet init' first.")

    try:
        planner = load_planner(Month(month) if month else None, get_db_path(), refresh=refresh)
        if shift:
            planner.change_month(shift)
        return planner
    except DuetError as e:
        fail(str(e))
    except (sqlite3.Error, json.JSONDecodeError) as e:
        fail(f"Could not read your data: {e}")
