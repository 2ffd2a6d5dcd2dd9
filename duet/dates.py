"""Date utilities for duet.

Pure functions for period keys, month arithmetic and month labels.
"""

import calendar
from datetime import date, datetime

from duet.domain.models import Month


def period_key_of(day: date) -> Month:
    """Truncate a date to its YYYY-MM period key."""
    return Month(f"{day.year}-{day.month:02d}")


def parse_month(month: Month) -> tuple[int, int]:
    """Split a period key into (year, month).

    Raises:
        ValueError: If the key is not a valid YYYY-MM month.
    """
    dt = datetime.strptime(month, "%Y-%m")
    return dt.year, dt.month


def advance(month: Month, delta: int) -> Month:
    """Return the period key delta calendar months away (negative allowed)."""
    year, month_num = parse_month(month)
    index = year * 12 + (month_num - 1) + delta
    return Month(f"{index // 12}-{index % 12 + 1:02d}")


def is_current_period(month: Month, today: date | None = None) -> bool:
    """Check whether a period key is the month containing today."""
    return month == period_key_of(today or date.today())


def first_day_of(month: Month) -> date:
    """First calendar day of a period."""
    year, month_num = parse_month(month)
    return date(year, month_num, 1)


def last_day_of(month: Month) -> date:
    """Last calendar day of a period."""
    year, month_num = parse_month(month)
    return date(year, month_num, calendar.monthrange(year, month_num)[1])


def with_day_clamped(month: Month, day: int) -> date:
    """Date on the given day of a period, clamped to the month's last day."""
    last = last_day_of(month)
    return last.replace(day=min(day, last.day))


def add_months(day: date, months: int) -> date:
    """Shift a date by whole calendar months.

    The day of month is kept where it exists and clamped to the last day of
    shorter months (Jan 31 + 1 month = Feb 28/29).
    """
    return with_day_clamped(advance(period_key_of(day), months), day.day)


def month_label(month: Month) -> str:
    """Human-readable month (e.g., "January 2025")."""
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")

