"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative expressions (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-year, last-month, last-year)
        today: Reference date (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, last-month, last-year"
        )


def get_report_range(report_type: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get the calendar range covered by a report type.

    monthly is the current month, quarterly the current calendar quarter and
    yearly the current calendar year. Both ends are inclusive.

    Raises:
        ValueError: If report type is not recognized
    """
    report_type = report_type.strip().lower()
    today = today or date.today()

    if report_type == "yearly":
        return (date(today.year, 1, 1), date(today.year, 12, 31))

    if report_type == "quarterly":
        first_month = (today.month - 1) // 3 * 3 + 1
        start_date = date(today.year, first_month, 1)
        end_date = start_date + relativedelta(months=3) - timedelta(days=1)
        return (start_date, end_date)

    if report_type == "monthly":
        start_date = today.replace(day=1)
        return (start_date, start_date + relativedelta(months=1) - timedelta(days=1))

    raise ValueError(
        f"Unknown report type: '{report_type}'. Supported types: monthly, quarterly, yearly"
    )


def coerce_date(value: Any, tz=None) -> Optional[date]:
    """Convert a stored date value into a calendar date.

    Accepts date, datetime and string values. Timezone-aware datetimes are
    converted to ``tz`` before the date is taken; naive values are assumed to
    already be local to it. Anything that cannot be interpreted returns None.
    """
    if value is None:
        return None

    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            try:
                value = date_parser.parse(value)
            except (ValueError, TypeError, OverflowError):
                return None

    if isinstance(value, datetime):
        if value.tzinfo is not None and tz is not None:
            value = value.astimezone(tz)
        return value.date()

    if isinstance(value, date):
        return value

    return None
