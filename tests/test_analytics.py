"""Tests for the analytics engine."""

from datetime import date
from decimal import Decimal

import pytest

from financeflow.domain.analytics import (
    CATEGORY_COLORS,
    NO_EXPENSES_LABEL,
    AnalyticsService,
    parse_period,
)
from financeflow.domain.entities import (
    AnalyticsPeriod,
    FundPosition,
    MonthlyPoint,
    Transaction,
    TransactionKind,
    ValuationEntry,
)
from financeflow.domain.errors import DataAccessError, ValidationError


def income(amount, on, category="salary"):
    return Transaction(
        id=None,
        kind=TransactionKind.INCOME,
        amount=Decimal(str(amount)) if amount is not None else None,
        category=category,
        occurred_on=on,
    )


def expense(amount, on, category="food"):
    return Transaction(
        id=None,
        kind=TransactionKind.EXPENSE,
        amount=Decimal(str(amount)) if amount is not None else None,
        category=category,
        occurred_on=on,
    )


def fund(initial, invested_on, history=(), current=None):
    return FundPosition(
        id=None,
        name="Test Fund",
        investment_kind="sip",
        category="equity",
        initial_investment=Decimal(str(initial)),
        current_value=Decimal(str(current)) if current is not None else None,
        invested_on=invested_on,
        valuation_history=history,
    )


@pytest.fixture
def engine(temp_db):
    return AnalyticsService(temp_db)


class TestParsePeriod:
    def test_known_periods(self):
        assert parse_period("monthly") is AnalyticsPeriod.MONTHLY
        assert parse_period(" Yearly ") is AnalyticsPeriod.YEARLY
        assert parse_period(AnalyticsPeriod.QUARTERLY) is AnalyticsPeriod.QUARTERLY

    def test_unknown_period(self):
        with pytest.raises(ValidationError, match="period"):
            parse_period("weekly")


class TestMonthlySeries:
    @pytest.mark.parametrize(
        "period,expected", [("monthly", 6), ("quarterly", 6), ("yearly", 12)]
    )
    def test_bucket_count_without_transactions(self, engine, today, period, expected):
        series = engine.build_monthly_series([], period, today)

        assert len(series) == expected
        assert all(point.income == 0 and point.expenses == 0 for point in series)

    def test_oldest_first_and_labels(self, engine, today):
        series = engine.build_monthly_series([], "monthly", today)

        assert [point.month_start for point in series] == [
            date(2023, 12, 1),
            date(2024, 1, 1),
            date(2024, 2, 1),
            date(2024, 3, 1),
            date(2024, 4, 1),
            date(2024, 5, 1),
        ]
        assert series[0].label == "Dec 23"
        assert series[-1].label == "May 24"

    def test_conservation(self, engine, today):
        transactions = [
            income(1000, date(2024, 5, 2)),
            income(500, date(2024, 5, 20)),
            expense(300, date(2024, 5, 3)),
            expense(200, date(2024, 4, 10)),
            income(700, date(2024, 2, 14)),
            income(9999, date(2023, 11, 30)),  # outside the window
        ]

        series = engine.build_monthly_series(transactions, "monthly", today)

        may = series[-1]
        assert may.income == Decimal("1500")
        assert may.expenses == Decimal("300")
        assert may.savings == may.income - may.expenses
        assert sum(point.income for point in series) == Decimal("2200")
        assert series[-2].expenses == Decimal("200")

    def test_boundary_days_are_included(self, engine, today):
        transactions = [
            income(100, date(2024, 3, 1)),
            income(200, date(2024, 3, 31)),
            expense(50, date(2024, 2, 29)),
        ]

        series = engine.build_monthly_series(transactions, "monthly", today)
        by_month = {point.month_start: point for point in series}

        assert by_month[date(2024, 3, 1)].income == Decimal("300")
        assert by_month[date(2024, 2, 1)].expenses == Decimal("50")
        assert by_month[date(2024, 4, 1)].income == 0

    def test_undated_and_missing_amounts(self, engine, today):
        transactions = [
            income(100, None),
            expense(None, date(2024, 5, 1)),
            income(250, date(2024, 5, 1)),
        ]

        series = engine.build_monthly_series(transactions, "monthly", today)

        assert series[-1].income == Decimal("250")
        assert series[-1].expenses == 0

    def test_yearly_window(self, engine, today):
        transactions = [income(100, date(2023, 6, 1)), income(100, date(2023, 5, 31))]

        series = engine.build_monthly_series(transactions, "yearly", today)

        assert series[0].month_start == date(2023, 6, 1)
        assert series[0].income == Decimal("100")
        assert sum(point.income for point in series) == Decimal("100")


class TestCategoryBreakdown:
    def test_groups_current_month_expenses_in_first_seen_order(self, engine, today):
        transactions = [
            expense(100, date(2024, 5, 1), "food"),
            expense(40, date(2024, 5, 2), "transport"),
            expense(60, date(2024, 5, 3), "food"),
            expense(999, date(2024, 4, 30), "rent"),
            income(5000, date(2024, 5, 1), "salary"),
        ]

        slices = engine.build_category_breakdown(transactions, today)

        assert [(s.name, s.value) for s in slices] == [
            ("Food", Decimal("160")),
            ("Transport", Decimal("40")),
        ]
        assert [s.color for s in slices] == list(CATEGORY_COLORS[:2])

    def test_missing_category_is_other(self, engine, today):
        slices = engine.build_category_breakdown([expense(25, date(2024, 5, 5), None)], today)

        assert [(s.name, s.value) for s in slices] == [("Other", Decimal("25"))]

    def test_zero_amounts_are_excluded(self, engine, today):
        slices = engine.build_category_breakdown([expense(0, date(2024, 5, 5))], today)

        assert len(slices) == 1
        assert slices[0].name == NO_EXPENSES_LABEL
        assert slices[0].value == 0

    def test_no_expenses(self, engine, today):
        slices = engine.build_category_breakdown([], today)

        assert [s.to_dict() for s in slices] == [
            {"name": "No Expenses", "value": 0.0, "color": CATEGORY_COLORS[0]}
        ]

    def test_colors_cycle(self, engine, today):
        transactions = [
            expense(10, date(2024, 5, 1), f"category {index}") for index in range(12)
        ]

        slices = engine.build_category_breakdown(transactions, today)

        assert len(slices) == 12
        assert slices[10].color_index == 0
        assert slices[11].color == CATEGORY_COLORS[1]


class TestFundValuation:
    def test_single_entry_before_and_after(self, engine):
        position = fund(
            50000,
            date(2023, 6, 1),
            history=(ValuationEntry(on=date(2023, 6, 1), value=Decimal("50000")),),
        )

        assert engine.value_fund_as_of(position, date(2023, 5, 1)) == 0
        assert engine.value_fund_as_of(position, date(2023, 7, 1)) == Decimal("50000")

    def test_latest_entry_wins_regardless_of_order(self, engine):
        position = fund(
            10000,
            date(2024, 1, 10),
            history=(
                ValuationEntry(on=date(2024, 3, 15), value=Decimal("12500")),
                ValuationEntry(on=date(2024, 1, 10), value=Decimal("10000")),
                ValuationEntry(on=date(2024, 2, 20), value=Decimal("11000")),
            ),
        )

        assert engine.value_fund_as_of(position, date(2024, 3, 1)) == Decimal("11000")
        assert engine.value_fund_as_of(position, date(2024, 4, 1)) == Decimal("12500")

    def test_invested_before_first_entry_uses_initial(self, engine):
        position = fund(
            8000,
            date(2024, 1, 5),
            history=(ValuationEntry(on=date(2024, 3, 10), value=Decimal("9000")),),
        )

        assert engine.value_fund_as_of(position, date(2024, 2, 1)) == Decimal("8000")
        assert engine.value_fund_as_of(position, date(2024, 1, 1)) == 0

    def test_empty_history(self, engine):
        position = fund(3000, date(2024, 1, 5), history=())

        assert engine.value_fund_as_of(position, date(2024, 2, 1)) == Decimal("3000")
        assert engine.value_fund_as_of(position, date(2024, 1, 1)) == 0

    def test_untracked_history_uses_current_value(self, engine):
        position = fund(3000, date(2024, 1, 5), history=None, current=4200)

        assert engine.value_fund_as_of(position, date(2024, 2, 1)) == Decimal("4200")
        assert engine.value_fund_as_of(position, date(2024, 1, 1)) == 0

    def test_untracked_history_without_current_value(self, engine):
        position = fund(3000, date(2024, 1, 5), history=None)

        assert engine.value_fund_as_of(position, date(2024, 2, 1)) == Decimal("3000")

    def test_undated_entries_are_skipped(self, engine):
        position = fund(
            1000,
            date(2024, 1, 1),
            history=(ValuationEntry(on=None, value=Decimal("99999")),),
        )

        assert engine.value_fund_as_of(position, date(2024, 2, 1)) == Decimal("1000")

    def test_fund_series_sums_positions(self, engine, today):
        funds = [
            fund(
                50000,
                date(2024, 2, 1),
                history=(ValuationEntry(on=date(2024, 2, 1), value=Decimal("50000")),),
            ),
            fund(
                20000,
                date(2024, 3, 15),
                history=(
                    ValuationEntry(on=date(2024, 3, 15), value=Decimal("20000")),
                    ValuationEntry(on=date(2024, 4, 20), value=Decimal("21000")),
                ),
            ),
        ]

        series = engine.build_fund_series(funds, today)

        assert [point.label for point in series] == ["Dec", "Jan", "Feb", "Mar", "Apr", "May"]
        assert [point.value for point in series] == [
            0,
            0,
            Decimal("50000"),
            Decimal("50000"),
            Decimal("70000"),
            Decimal("71000"),
        ]


class TestNetWorth:
    def test_negative_savings_contribute_no_cash(self, engine):
        monthly = [
            MonthlyPoint("Apr 24", date(2024, 4, 1), Decimal("1000"), Decimal("3000")),
            MonthlyPoint("May 24", date(2024, 5, 1), Decimal("5000"), Decimal("1000")),
        ]
        fund_series = engine.build_fund_series([], date(2024, 5, 15))[-2:]

        points = engine.build_net_worth_series(monthly, fund_series)

        assert points[0].cash == 0
        assert points[0].total == 0
        assert points[1].cash == Decimal("4000")

    def test_aligns_by_index(self, engine, today):
        transactions = [income(1000, date(2024, 5, 2)), expense(400, date(2024, 5, 3))]
        funds = [
            fund(
                5000,
                date(2024, 1, 1),
                history=(ValuationEntry(on=date(2024, 1, 1), value=Decimal("5000")),),
            )
        ]

        report = engine.build_report(transactions, funds, "monthly", today)

        last = report.net_worth[-1]
        assert last.label == "May 24"
        assert last.cash == Decimal("600")
        assert last.investments == Decimal("5000")
        assert last.total == Decimal("5600")
        assert report.net_worth[0].investments == 0

    def test_yearly_report_keeps_six_month_net_worth(self, engine, today):
        report = engine.build_report([], [], "yearly", today)

        assert len(report.monthly) == 12
        assert len(report.net_worth) == 6
        assert report.net_worth[0].label == "Dec 23"


class TestGetAnalytics:
    def test_reads_records_from_database(self, temp_db, transaction_service, today):
        transaction_service.create_transaction("income", Decimal("80000"), date(2024, 5, 1), "salary")
        transaction_service.create_transaction("expense", Decimal("2500"), date(2024, 5, 9), "food")

        report = AnalyticsService(temp_db).get_analytics("monthly", today)
        payload = report.to_dict()

        assert report.error is None
        assert payload["monthlyData"][-1] == {
            "month": "May 24",
            "income": 80000.0,
            "expenses": 2500.0,
            "savings": 77500.0,
        }
        assert payload["categoryData"][0]["name"] == "Food"
        assert len(payload["mutualFundData"]) == 6
        assert payload["healthData"]["month"] == "April 2024"

    def test_unknown_period(self, analytics_service, today):
        with pytest.raises(ValidationError):
            analytics_service.get_analytics("daily", today)

    def test_load_failure_returns_empty_shape(self, temp_db, today, monkeypatch):
        def fail(*args, **kwargs):
            raise DataAccessError("database is locked")

        monkeypatch.setattr(temp_db, "list_transactions", fail)

        report = AnalyticsService(temp_db).get_analytics("monthly", today)

        assert report.to_dict() == {
            "monthlyData": [],
            "categoryData": [],
            "mutualFundData": [],
            "netWorthData": [],
            "healthData": None,
            "error": "database is locked",
        }
