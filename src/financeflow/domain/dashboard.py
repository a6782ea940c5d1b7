"""Dashboard summary domain service."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from financeflow.domain.entities import DashboardSummary
from financeflow.domain.profile import ProfileService
from financeflow.utils.months import month_end, month_start

if TYPE_CHECKING:
    from financeflow.database.base import Database


class DashboardService:
    """Service for the current-month overview."""

    def __init__(self, db: "Database"):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db
        self.profile_service = ProfileService(db)

    def get_summary(self, today: date) -> DashboardSummary:
        """Summarize the calendar month containing ``today``."""
        transactions = self.db.list_transactions(
            start_date=month_start(today), end_date=month_end(today)
        )
        income = sum((t.amount_value for t in transactions if t.is_income), Decimal("0"))
        expenses = sum((t.amount_value for t in transactions if t.is_expense), Decimal("0"))
        fund_value = sum(
            (fund.current_amount for fund in self.db.list_funds()), Decimal("0")
        )
        profile = self.profile_service.get_profile()

        return DashboardSummary(
            monthly_income=income,
            monthly_expenses=expenses,
            mutual_fund_value=fund_value,
            savings_goal=profile.savings_target,
            total_transactions=self.db.count_transactions(),
            total_funds=self.db.count_funds(),
        )
