"""Monthly savings rollover domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from financeflow.domain.entities import TransactionKind
from financeflow.domain.errors import ConflictError
from financeflow.utils.months import month_end, month_start, shift_months

if TYPE_CHECKING:
    from financeflow.database.base import Database

logger = logging.getLogger(__name__)

ROLLOVER_CATEGORY = "savings rollover"
ROLLOVER_SOURCE = "automatic rollover"


class RolloverService:
    """Carries last month's positive savings into the current month as income."""

    def __init__(self, db: "Database"):
        """Initialize rollover service.

        Args:
            db: Database instance
        """
        self.db = db

    def rollover_savings(self, today: date) -> Decimal:
        """Record last month's savings as income on the first of this month.

        Returns:
            The amount carried over (0 when last month saved nothing)

        Raises:
            ConflictError: If this month's rollover was already recorded
        """
        first_day = month_start(today)
        already_done = self.db.list_transactions(
            start_date=first_day, end_date=first_day, category=ROLLOVER_CATEGORY
        )
        if already_done:
            raise ConflictError(f"Savings rollover for {first_day:%B %Y} was already recorded")

        previous = shift_months(today, -1)
        transactions = self.db.list_transactions(
            start_date=previous, end_date=month_end(previous)
        )
        income = sum((t.amount_value for t in transactions if t.is_income), Decimal("0"))
        expenses = sum((t.amount_value for t in transactions if t.is_expense), Decimal("0"))
        savings = income - expenses

        if savings <= 0:
            logger.info("No positive savings to roll over from %s", f"{previous:%B %Y}")
            return Decimal("0")

        self.db.create_transaction(
            kind=TransactionKind.INCOME.value,
            amount=savings,
            occurred_on=first_day,
            category=ROLLOVER_CATEGORY,
            description=f"Previous month savings rollover from {previous:%B %Y}",
            payment_source=ROLLOVER_SOURCE,
        )
        logger.info("Rolled over %s savings from %s", savings, f"{previous:%B %Y}")
        return savings
