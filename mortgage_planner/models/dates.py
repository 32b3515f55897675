"""
Calendar arithmetic for mortgage schedules.

Payment dates step month by month from the loan's start date. When the start
day does not exist in a target month (e.g. the 31st in February) the day is
clamped to the last day of that month. Clamping is applied relative to the
original date on every call, so stepping one month at a time is not the same
as jumping several months at once:

    add_months(date(2025, 1, 31), 1)                 -> 2025-02-28
    add_months(add_months(date(2025, 1, 31), 1), 1)  -> 2025-03-28
    add_months(date(2025, 1, 31), 2)                 -> 2025-03-31

This matches ordinary financial-calendar conventions and is intentional.
"""

import calendar
import re
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from .errors import InvalidInputError

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def add_months(value: date, offset: int) -> date:
    """
    Add a month offset to a date, clamping the day to the end of the target month.

    Args:
        value: Date to shift
        offset: Number of months to add (may be negative)

    Returns:
        Shifted date
    """
    return value + relativedelta(months=offset)


def add_days(value: date, days: int) -> date:
    """Add a number of days to a date."""
    return value + timedelta(days=days)


def clamp_day(year: int, month: int, day: int) -> date:
    """
    Build a date, rolling an overflowing day back to the last day of the month.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        day: Requested day of month (1-31)

    Returns:
        The requested date, or the last day of the month if ``day`` overflows
    """
    if not 1 <= month <= 12:
        raise InvalidInputError(f"Month must be between 1 and 12, got {month}")
    if day < 1:
        raise InvalidInputError(f"Day must be positive, got {day}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def parse_iso_date(text: str) -> date:
    """
    Parse a zero-padded ``YYYY-MM-DD`` string.

    Raises:
        InvalidInputError: If the text is not a valid ISO calendar date
    """
    if not isinstance(text, str) or not ISO_DATE_PATTERN.match(text):
        raise InvalidInputError(f"Invalid ISO date: {text!r}")
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise InvalidInputError(f"Invalid ISO date: {text!r}") from e


def format_iso_date(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return value.isoformat()


def compare_iso_dates(a: str, b: str) -> int:
    """
    Compare two ISO date strings.

    Zero-padded ``YYYY-MM-DD`` strings sort lexicographically in calendar
    order, so no parsing is needed.

    Returns:
        -1 if ``a`` is earlier, 0 if equal, 1 if ``a`` is later
    """
    if a == b:
        return 0
    return -1 if a < b else 1
