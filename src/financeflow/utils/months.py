"""Calendar month arithmetic and reference timezone helpers."""

from datetime import date, datetime, timedelta, tzinfo

from dateutil import tz as dateutil_tz
from dateutil.relativedelta import relativedelta

DEFAULT_TIMEZONE = "UTC"


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve a timezone name such as 'UTC' or 'Asia/Karachi'.

    Raises:
        ValueError: If the name is unknown
    """
    name = (name or DEFAULT_TIMEZONE).strip()
    zone = dateutil_tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown timezone '{name}'")
    return zone


def today_in(zone: tzinfo) -> date:
    """Return the current calendar date in the given timezone."""
    return datetime.now(zone).date()


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(day: date) -> date:
    return month_start(day) + relativedelta(months=1) - timedelta(days=1)


def shift_months(day: date, months: int) -> date:
    """Return the first day of the month ``months`` away from ``day``."""
    return month_start(day) + relativedelta(months=months)


def trailing_month_starts(today: date, count: int) -> list[date]:
    """First days of the ``count`` months ending at the month of ``today``, oldest first."""
    return [shift_months(today, -offset) for offset in range(count - 1, -1, -1)]
