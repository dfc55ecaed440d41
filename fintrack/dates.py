"""Date utilities for fintrack.

Pure functions for date range calculations and formatting.
"""

from datetime import date, datetime, timedelta

from fintrack.domain.models import Month


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def month_bounds(day: date, months_back: int = 0) -> tuple[date, date]:
    """Calculate the first and last calendar day of a month.

    Args:
        day: Any day in the reference month.
        months_back: How many months before the reference month to go.

    Returns:
        Tuple of (first_day, last_day), both inclusive.
    """
    first = day.replace(day=1)
    for _ in range(months_back):
        first = (first - timedelta(days=1)).replace(day=1)
    next_first = (first.replace(day=28) + timedelta(days=4)).replace(day=1)
    return first, next_first - timedelta(days=1)


def window_cutoff(today: date, window_days: int) -> date:
    """Return the inclusive lower bound of a trailing window of days.

    Windows reaching past the earliest representable date start at date.min.
    """
    return today - timedelta(days=min(window_days, (today - date.min).days))


def month_key(day: date) -> Month:
    """Return the YYYY-MM key for a date."""
    return Month(day.strftime("%Y-%m"))
