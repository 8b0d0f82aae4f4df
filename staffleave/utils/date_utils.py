"""
Calendar helpers used by the eligibility rules.

Notes:
- The engine works at calendar-date granularity; `today()` is the local
  calendar date and every rule accepts an explicit `today` for testing.
- Month arithmetic uses `dateutil.relativedelta` so month ends and year
  boundaries are handled without manual carry.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta

UTC = timezone.utc

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class DateUtilsError(Exception):
    """Custom exception for date utilities errors."""
    pass


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today() -> date:
    """Return the local calendar date."""
    return date.today()


def format_date(d: date, fmt: str = "%d/%m/%Y") -> str:
    """Format a date for display in rule messages."""
    if not isinstance(d, date):
        raise DateUtilsError("Input must be a date object")
    return d.strftime(fmt)


def add_days(d: date, days: int) -> date:
    """Return the date `days` calendar days after `d`."""
    return d + timedelta(days=days)


def first_of_month(year: int, month: int) -> date:
    """Return the first day of the given month."""
    if not (1 <= month <= 12):
        raise DateUtilsError("Month must be between 1 and 12")
    return date(year, month, 1)


def previous_month(month: int) -> int:
    """Return the month number preceding `month`; January wraps to December."""
    return (first_of_month(2000, month) - relativedelta(months=1)).month


def month_label(year: int, month: int) -> str:
    """Return a label such as 'March/2024'."""
    return f"{MONTH_NAMES[month - 1]}/{year}"


__all__ = [
    "DateUtilsError",
    "MONTH_NAMES",
    "now_utc",
    "today",
    "format_date",
    "add_days",
    "first_of_month",
    "previous_month",
    "month_label",
]
