"""Financial health score domain service.

The score (0-100) is the sum of four independent sub-scores computed for the
calendar month before ``today``:

- expense ratio (25): expenses / income
- savings rate (30): savings / income, in percent
- investment ratio (25): one twelfth of the current fund value / income, in percent
- expense consistency (20): coefficient of variation of monthly expenses over
  the three months before the evaluated one

Ratio-based sub-scores contribute nothing when there is no income.
"""

import logging
import math
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Sequence

from financeflow.domain.entities import (
    FundPosition,
    HealthMetrics,
    HealthReport,
    Transaction,
)
from financeflow.domain.errors import DataAccessError
from financeflow.utils.months import shift_months

if TYPE_CHECKING:
    from financeflow.database.base import Database

logger = logging.getLogger(__name__)

# (lower bound, grade, status, color), checked top to bottom
GRADES = (
    (90, "A+", "Excellent", "#22c55e"),
    (80, "A", "Very Good", "#16a34a"),
    (70, "B", "Good", "#65a30d"),
    (60, "C", "Fair", "#ca8a04"),
    (50, "D", "Poor", "#ea580c"),
)
FAILING_GRADE = ("F", "Critical", "#ef4444")

CONSISTENCY_MONTHS = 3
MIN_CONSISTENCY_MONTHS = 2


def _ratio_points(value: float, thresholds: Sequence[tuple[float, int]], floor: int) -> int:
    """Points for the first threshold ``value`` does not exceed."""
    for limit, points in thresholds:
        if value <= limit:
            return points
    return floor


def _rate_points(value: float, thresholds: Sequence[tuple[float, int]], floor: int) -> int:
    """Points for the first threshold ``value`` reaches."""
    for limit, points in thresholds:
        if value >= limit:
            return points
    return floor


def score_expense_ratio(ratio: float) -> int:
    return _ratio_points(ratio, ((0.5, 25), (0.7, 20), (0.9, 15), (1.0, 10)), 0)


def score_savings_rate(rate: float) -> int:
    return _rate_points(rate, ((20, 30), (15, 25), (10, 20), (5, 15), (0, 10)), 0)


def score_investment_ratio(ratio: float) -> int:
    return _rate_points(ratio, ((15, 25), (10, 20), (5, 15), (1, 10)), 5)


def score_expense_consistency(variation: float) -> int:
    return _ratio_points(variation, ((10, 20), (20, 15), (30, 10), (50, 5)), 0)


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population standard deviation over mean, in percent; 100 when the mean is 0."""
    mean = sum(values) / len(values)
    if mean <= 0:
        return 100.0
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return math.sqrt(variance) / mean * 100


def grade_for(score: int) -> tuple[str, str, str]:
    """Return (grade, status, color) for a score."""
    for lower_bound, grade, status, color in GRADES:
        if score >= lower_bound:
            return grade, status, color
    return FAILING_GRADE


def recommendations_for(score: int, metrics: HealthMetrics) -> list[str]:
    """Advice triggered by independent threshold checks."""
    recommendations = []

    if metrics.savings_rate < 10:
        recommendations.append("Try to save at least 10% of your income each month")

    if metrics.income_to_expense_ratio > 0.8:
        recommendations.append(
            "Consider reducing unnecessary expenses to improve your financial cushion"
        )

    if metrics.investment_ratio < 5:
        recommendations.append(
            "Consider investing in mutual funds or other investment vehicles for long-term growth"
        )

    if score < 60:
        recommendations.append("Create a detailed budget to track and control your spending")
        recommendations.append("Set specific financial goals to improve your financial health")

    if score >= 80:
        recommendations.append("Great job! Keep maintaining your excellent financial habits")
        recommendations.append("Consider exploring advanced investment strategies")

    return recommendations


class HealthScoreService:
    """Service for scoring monthly financial health."""

    def __init__(self, db: "Database"):
        """Initialize health score service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_report(self, today: date) -> Optional[HealthReport]:
        """Load records and score the month before ``today``.

        Returns None when the records could not be loaded.
        """
        try:
            transactions = self.db.list_transactions()
            funds = self.db.list_funds()
        except DataAccessError as e:
            logger.error("Failed to load records for health score: %s", e)
            return None
        return self.calculate(transactions, funds, today)

    def month_totals(
        self, transactions: Sequence[Transaction], first_day: date
    ) -> tuple[Decimal, Decimal, int]:
        """Income, expenses and expense-transaction count of one calendar month."""
        next_month = shift_months(first_day, 1)
        income = Decimal("0")
        expenses = Decimal("0")
        expense_count = 0
        for txn in transactions:
            if txn.occurred_on is None or not first_day <= txn.occurred_on < next_month:
                continue
            if txn.is_income:
                income += txn.amount_value
            elif txn.is_expense:
                expenses += txn.amount_value
                expense_count += 1
        return income, expenses, expense_count

    def expense_variability(
        self, transactions: Sequence[Transaction], evaluated_month: date
    ) -> Optional[float]:
        """Coefficient of variation of expenses over the months before ``evaluated_month``.

        Only months with at least one expense count; None when fewer than two do.
        """
        monthly_expenses = []
        for offset in range(1, CONSISTENCY_MONTHS + 1):
            _, expenses, count = self.month_totals(
                transactions, shift_months(evaluated_month, -offset)
            )
            if count:
                monthly_expenses.append(float(expenses))

        if len(monthly_expenses) < MIN_CONSISTENCY_MONTHS:
            return None
        return coefficient_of_variation(monthly_expenses)

    def calculate(
        self,
        transactions: Sequence[Transaction],
        funds: Sequence[FundPosition],
        today: date,
    ) -> HealthReport:
        """Score the calendar month before ``today``."""
        evaluated_month = shift_months(today, -1)
        income, expenses, _ = self.month_totals(transactions, evaluated_month)
        total_investments = sum((fund.current_amount for fund in funds), Decimal("0"))

        score = 0
        expense_ratio = 0.0
        savings_rate = 0.0
        investment_ratio = 0.0

        if income > 0:
            expense_ratio = float(expenses / income)
            savings_rate = float((income - expenses) / income * 100)
            investment_ratio = float(total_investments / 12 / income * 100)
            score += score_expense_ratio(expense_ratio)
            score += score_savings_rate(savings_rate)
            score += score_investment_ratio(investment_ratio)

        variability = self.expense_variability(transactions, evaluated_month)
        if variability is not None:
            score += score_expense_consistency(variability)

        score = max(0, min(100, score))
        metrics = HealthMetrics(
            income=income,
            expenses=expenses,
            total_investments=total_investments,
            income_to_expense_ratio=expense_ratio,
            savings_rate=savings_rate,
            investment_ratio=investment_ratio,
            expense_variability=variability,
        )
        grade, status, color = grade_for(score)
        logger.debug("Health score for %s: %d (%s)", evaluated_month, score, grade)

        return HealthReport(
            score=score,
            grade=grade,
            status=status,
            color=color,
            month=evaluated_month.strftime("%B %Y"),
            metrics=metrics,
            recommendations=tuple(recommendations_for(score, metrics)),
        )
