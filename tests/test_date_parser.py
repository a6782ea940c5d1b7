"""Tests for date parsing and month arithmetic."""

import pytest
from datetime import date, datetime, timedelta, timezone
from dateutil import tz

from financeflow.utils.date_parser import (
    coerce_date,
    get_date_range,
    get_report_range,
    parse_date,
)
from financeflow.utils.months import (
    month_end,
    resolve_timezone,
    shift_months,
    trailing_month_starts,
)

TODAY = date(2024, 3, 13)  # a Wednesday


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("today", TODAY),
        ("Yesterday", TODAY - timedelta(days=1)),
        ("tomorrow", TODAY + timedelta(days=1)),
        ("last month", date(2024, 2, 1)),
        ("this month", date(2024, 3, 1)),
        ("last year", date(2023, 1, 1)),
        ("this year", date(2024, 1, 1)),
        ("this week", date(2024, 3, 11)),
        ("last week", date(2024, 3, 4)),
    ],
)
def test_parse_relative_dates(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_parse_today_defaults_to_current_date():
    assert parse_date("today") == date.today()


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")


@pytest.mark.parametrize(
    "period,expected",
    [
        ("this-month", (date(2024, 3, 1), TODAY)),
        ("this-year", (date(2024, 1, 1), TODAY)),
        ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=TODAY) == expected


def test_get_date_range_unknown_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade", today=TODAY)


@pytest.mark.parametrize(
    "report_type,today,expected",
    [
        ("monthly", TODAY, (date(2024, 3, 1), date(2024, 3, 31))),
        ("quarterly", TODAY, (date(2024, 1, 1), date(2024, 3, 31))),
        ("quarterly", date(2024, 11, 2), (date(2024, 10, 1), date(2024, 12, 31))),
        ("Yearly", TODAY, (date(2024, 1, 1), date(2024, 12, 31))),
    ],
)
def test_get_report_range(report_type, today, expected):
    assert get_report_range(report_type, today=today) == expected


class TestCoerceDate:
    def test_dates_and_strings(self):
        assert coerce_date(date(2024, 1, 31)) == date(2024, 1, 31)
        assert coerce_date("2024-01-31") == date(2024, 1, 31)
        assert coerce_date("Jan 31 2024") == date(2024, 1, 31)

    def test_unreadable_values(self):
        assert coerce_date(None) is None
        assert coerce_date("") is None
        assert coerce_date("garbage") is None
        assert coerce_date(12345) is None

    def test_aware_datetime_uses_reference_zone(self):
        late_utc = datetime(2024, 1, 31, 22, 30, tzinfo=timezone.utc)

        assert coerce_date(late_utc, tz.UTC) == date(2024, 1, 31)
        assert coerce_date(late_utc, tz.gettz("Asia/Karachi")) == date(2024, 2, 1)
        assert coerce_date("2024-01-31T22:30:00Z", tz.gettz("Asia/Karachi")) == date(2024, 2, 1)

    def test_naive_datetime_is_local(self):
        assert coerce_date(datetime(2024, 1, 31, 23, 59), tz.gettz("Asia/Karachi")) == date(2024, 1, 31)


class TestMonths:
    def test_month_end(self):
        assert month_end(date(2024, 2, 10)) == date(2024, 2, 29)
        assert month_end(date(2023, 12, 1)) == date(2023, 12, 31)

    def test_shift_months_crosses_years(self):
        assert shift_months(date(2024, 1, 31), -1) == date(2023, 12, 1)
        assert shift_months(date(2024, 11, 30), 2) == date(2025, 1, 1)

    def test_trailing_month_starts(self):
        assert trailing_month_starts(date(2024, 2, 15), 3) == [
            date(2023, 12, 1),
            date(2024, 1, 1),
            date(2024, 2, 1),
        ]

    def test_resolve_timezone(self):
        assert resolve_timezone(None) is not None
        assert resolve_timezone("Asia/Karachi") is not None
        with pytest.raises(ValueError, match="Unknown timezone"):
            resolve_timezone("Mars/Olympus_Mons")
