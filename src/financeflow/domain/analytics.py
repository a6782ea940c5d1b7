"""Analytics aggregation domain service.

Builds the monthly income/expense series, the current-month category
breakdown, the reconstructed fund valuation series and the net-worth
timeline. The ``build_*`` methods are pure: they take already-loaded records
and a reference ``today`` and never touch the database, so they can be
recomputed freely on every request.
"""

import logging
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Sequence

from financeflow.domain.entities import (
    AnalyticsPeriod,
    AnalyticsReport,
    CategorySlice,
    FundPoint,
    FundPosition,
    MonthlyPoint,
    NetWorthPoint,
    Transaction,
)
from financeflow.domain.errors import DataAccessError, ValidationError, invalid_choice
from financeflow.domain.health import HealthScoreService
from financeflow.utils.months import month_end, month_start, trailing_month_starts

if TYPE_CHECKING:
    from financeflow.database.base import Database

logger = logging.getLogger(__name__)

CATEGORY_COLORS = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#DDA0DD",
    "#98D8C8",
    "#F7DC6F",
    "#BB8FCE",
    "#85C1E9",
)
NO_EXPENSES_LABEL = "No Expenses"
NET_WORTH_MONTHS = 6
FUND_SERIES_MONTHS = 6


def parse_period(period: "str | AnalyticsPeriod") -> AnalyticsPeriod:
    """Resolve a period selector, rejecting unknown values."""
    if isinstance(period, AnalyticsPeriod):
        return period
    try:
        return AnalyticsPeriod(str(period).strip().lower())
    except ValueError:
        raise ValidationError(
            invalid_choice("period", period, [p.value for p in AnalyticsPeriod])
        )


def _display_name(category: str) -> str:
    return category[:1].upper() + category[1:]


class AnalyticsService:
    """Service for building dashboard analytics."""

    def __init__(self, db: "Database", health_service: Optional[HealthScoreService] = None):
        """Initialize analytics service.

        Args:
            db: Database instance
            health_service: Health score service (defaults to a new one)
        """
        self.db = db
        self.health_service = health_service or HealthScoreService(db)

    def get_analytics(
        self, period: "str | AnalyticsPeriod", today: date
    ) -> AnalyticsReport:
        """Load all records and build every analytics series for ``period``.

        A failure to load records yields ``AnalyticsReport.empty`` with the
        error message rather than a partially filled report.

        Raises:
            ValidationError: If period is unknown
        """
        selected = parse_period(period)
        try:
            transactions = self.db.list_transactions()
            funds = self.db.list_funds()
        except DataAccessError as e:
            logger.error("Failed to load records for analytics: %s", e)
            return AnalyticsReport.empty(selected, error=str(e))

        return self.build_report(transactions, funds, selected, today)

    def build_report(
        self,
        transactions: Sequence[Transaction],
        funds: Sequence[FundPosition],
        period: "str | AnalyticsPeriod",
        today: date,
    ) -> AnalyticsReport:
        """Build every analytics series from loaded records."""
        selected = parse_period(period)
        monthly = self.build_monthly_series(transactions, selected, today)
        if selected.months_back == NET_WORTH_MONTHS:
            recent_monthly = monthly
        else:
            recent_monthly = self.build_monthly_series(
                transactions, AnalyticsPeriod.MONTHLY, today
            )
        fund_series = self.build_fund_series(funds, today)

        return AnalyticsReport(
            period=selected,
            monthly=tuple(monthly),
            categories=tuple(self.build_category_breakdown(transactions, today)),
            funds=tuple(fund_series),
            net_worth=tuple(self.build_net_worth_series(recent_monthly, fund_series)),
            health=self.health_service.calculate(transactions, funds, today),
        )

    def build_monthly_series(
        self,
        transactions: Sequence[Transaction],
        period: "str | AnalyticsPeriod",
        today: date,
    ) -> list[MonthlyPoint]:
        """Bucket transactions into calendar months ending at the month of ``today``.

        Returns exactly ``period.months_back`` points, oldest first. Empty
        months are kept as zero points and undated transactions are skipped.
        """
        selected = parse_period(period)
        starts = trailing_month_starts(today, selected.months_back)
        buckets: dict[date, dict[str, Decimal]] = {
            start: {"income": Decimal("0"), "expenses": Decimal("0")} for start in starts
        }

        window_start, window_end = starts[0], month_end(starts[-1])
        for txn in transactions:
            if txn.occurred_on is None:
                continue
            if not window_start <= txn.occurred_on <= window_end:
                continue
            bucket = buckets[month_start(txn.occurred_on)]
            if txn.is_income:
                bucket["income"] += txn.amount_value
            elif txn.is_expense:
                bucket["expenses"] += txn.amount_value

        logger.debug(
            "Built %d monthly buckets from %s to %s", len(starts), window_start, window_end
        )
        return [
            MonthlyPoint(
                label=start.strftime("%b %y"),
                month_start=start,
                income=buckets[start]["income"],
                expenses=buckets[start]["expenses"],
            )
            for start in starts
        ]

    def build_category_breakdown(
        self, transactions: Sequence[Transaction], today: date
    ) -> list[CategorySlice]:
        """Sum positive current-month expenses per category.

        Categories keep the order in which they first appear, which fixes
        their colour. A month without qualifying expenses yields a single
        "No Expenses" slice.
        """
        first_day, last_day = month_start(today), month_end(today)
        totals: "OrderedDict[str, Decimal]" = OrderedDict()

        for txn in transactions:
            if not txn.is_expense or txn.occurred_on is None:
                continue
            if not first_day <= txn.occurred_on <= last_day:
                continue
            amount = txn.amount_value
            if amount <= 0:
                continue
            category = txn.category_label
            totals[category] = totals.get(category, Decimal("0")) + amount

        if not totals:
            totals[NO_EXPENSES_LABEL] = Decimal("0")

        return [
            CategorySlice(
                name=_display_name(category),
                value=amount,
                color_index=index % len(CATEGORY_COLORS),
                color=CATEGORY_COLORS[index % len(CATEGORY_COLORS)],
            )
            for index, (category, amount) in enumerate(totals.items())
        ]

    def value_fund_as_of(self, fund: FundPosition, target: date) -> Decimal:
        """Reconstruct a fund's value on ``target`` from its valuation history.

        The latest history entry dated on or before ``target`` wins. Without
        one, a position already invested counts at its initial investment,
        and a position not yet invested counts as zero. Positions that never
        tracked history fall back to their current value.
        """
        invested = fund.invested_on is not None and fund.invested_on <= target

        if fund.valuation_history is None:
            if not invested:
                return Decimal("0")
            if fund.current_value:
                return fund.current_value
            return fund.initial_amount

        latest = None
        for entry in fund.valuation_history:
            if entry.on is None or entry.on > target:
                continue
            if latest is None or entry.on >= latest.on:
                latest = entry

        if latest is not None:
            return latest.value_amount
        if invested:
            return fund.initial_amount
        return Decimal("0")

    def build_fund_series(
        self, funds: Sequence[FundPosition], today: date
    ) -> list[FundPoint]:
        """Total portfolio value on the first day of each of the last six months."""
        series = []
        for as_of in trailing_month_starts(today, FUND_SERIES_MONTHS):
            total = sum(
                (self.value_fund_as_of(fund, as_of) for fund in funds), Decimal("0")
            )
            series.append(FundPoint(label=as_of.strftime("%b"), as_of=as_of, value=total))
        return series

    def build_net_worth_series(
        self, monthly: Sequence[MonthlyPoint], fund_series: Sequence[FundPoint]
    ) -> list[NetWorthPoint]:
        """Combine monthly savings and fund values point by point.

        Negative savings contribute no cash; they never reduce net worth.
        """
        points = []
        for index, month in enumerate(monthly):
            investments = fund_series[index].value if index < len(fund_series) else Decimal("0")
            points.append(
                NetWorthPoint(
                    label=month.label,
                    cash=max(Decimal("0"), month.savings),
                    investments=investments,
                )
            )
        return points
