"""Date utilities for finwatch.

Pure functions for month windows and calendar arithmetic.
"""

from datetime import date, timedelta


def _check_month(month: int) -> None:
    """Raise ValueError unless month is in 1-12."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")


def is_leap_year(year: int) -> bool:
    """Gregorian rule: divisible by 4, except centuries not divisible by 400."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def month_window(year: int, month: int) -> tuple[date, date]:
    """Calculate the inclusive date window for a month.

    Args:
        year: Calendar year.
        month: Month number (1-12).

    Returns:
        Tuple of (first_day, last_day), both inclusive.

    Raises:
        ValueError: If month is outside 1-12.
    """
    _check_month(month)
    first_day = date(year, month, 1)
    next_month = (first_day.replace(day=28) + timedelta(days=4)).replace(day=1)
    last_day = next_month - timedelta(days=1)
    return first_day, last_day


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month (28/29/30/31)."""
    _check_month(month)
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def month_label(year: int, month: int) -> str:
    """Human-readable month (e.g., "October 2025")."""
    _check_month(month)
    return date(year, month, 1).strftime("%B %Y")
