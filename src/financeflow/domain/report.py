"""Period report domain service."""

from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from financeflow.domain.entities import PeriodReport
from financeflow.domain.errors import ValidationError, invalid_date_range
from financeflow.utils.date_parser import get_report_range

if TYPE_CHECKING:
    from financeflow.database.base import Database

CUSTOM_REPORT = "custom"


class ReportService:
    """Service for totals over a report period."""

    def __init__(self, db: "Database"):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def resolve_range(
        self,
        report_type: str,
        start_date: Optional[date],
        end_date: Optional[date],
        today: date,
    ) -> tuple[date, date]:
        """Explicit dates win over the report type; both must be given together.

        Raises:
            ValidationError: If only one bound is given, the range is inverted,
                or the report type is unknown
        """
        if (start_date is None) != (end_date is None):
            raise ValidationError("Both start and end dates are required for a custom range")
        if start_date is not None and end_date is not None:
            if start_date > end_date:
                raise ValidationError(invalid_date_range(start_date, end_date))
            return start_date, end_date
        try:
            return get_report_range(report_type, today)
        except ValueError as e:
            raise ValidationError(str(e))

    def build_report(
        self,
        report_type: str = "monthly",
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> PeriodReport:
        """Build totals and the expense breakdown for a period.

        Args:
            report_type: monthly, quarterly or yearly (ignored with explicit dates)
            start_date: Optional explicit inclusive start
            end_date: Optional explicit inclusive end
            today: Reference date for the report type

        Returns:
            PeriodReport with transactions newest first
        """
        start, end = self.resolve_range(report_type, start_date, end_date, today or date.today())
        transactions = self.db.list_transactions(start_date=start, end_date=end)

        income = Decimal("0")
        expenses = Decimal("0")
        breakdown: "OrderedDict[str, Decimal]" = OrderedDict()
        for txn in transactions:
            if txn.is_income:
                income += txn.amount_value
            elif txn.is_expense:
                expenses += txn.amount_value
                label = txn.category_label
                breakdown[label] = breakdown.get(label, Decimal("0")) + txn.amount_value

        fund_value = sum((fund.current_amount for fund in self.db.list_funds()), Decimal("0"))
        ranked = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)

        return PeriodReport(
            report_type=CUSTOM_REPORT if start_date is not None else report_type.strip().lower(),
            start_date=start,
            end_date=end,
            total_income=income,
            total_expenses=expenses,
            total_fund_value=fund_value,
            category_breakdown=tuple(ranked),
            transactions=tuple(transactions),
        )
