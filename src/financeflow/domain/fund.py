"""Mutual fund position domain service."""

import logging
from typing import TYPE_CHECKING, Optional, Sequence
from datetime import date
from decimal import Decimal

from financeflow.domain.entities import (
    FundCategory,
    FundPosition,
    InvestmentKind,
    ValuationEntry,
)
from financeflow.domain.errors import (
    NotFoundError,
    ValidationError,
    fund_not_found,
    invalid_choice,
    negative_amount,
)

if TYPE_CHECKING:
    from financeflow.database.base import Database

logger = logging.getLogger(__name__)

INITIAL_INVESTMENT_NOTE = "Initial investment"


def parse_investment_kind(value: str) -> InvestmentKind:
    """Resolve an investment kind such as 'SIP' or 'Lump Sum'."""
    try:
        return InvestmentKind(str(value).strip().lower())
    except ValueError:
        raise ValidationError(
            invalid_choice("investment type", value, [k.value for k in InvestmentKind])
        )


def parse_fund_category(value: str) -> FundCategory:
    """Resolve a fund category such as 'Equity' or 'ELSS'."""
    try:
        return FundCategory(str(value).strip().lower())
    except ValueError:
        raise ValidationError(
            invalid_choice("fund type", value, [c.value for c in FundCategory])
        )


def _require_non_negative(value: Optional[Decimal], field_name: str) -> None:
    if value is not None and value < 0:
        raise ValidationError(negative_amount(field_name))


class FundService:
    """Service for managing mutual fund positions and their valuation history."""

    def __init__(self, db: "Database"):
        """Initialize fund service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_fund(
        self,
        name: str,
        investment_kind: str,
        category: str,
        initial_investment: Decimal,
        invested_on: date,
        current_value: Optional[Decimal] = None,
        notes: Optional[str] = None,
        valuation_history: Optional[Sequence[ValuationEntry]] = None,
    ) -> int:
        """Create a fund position.

        Without an explicit history, the history starts with the initial
        investment on the investment date.

        Args:
            name: Fund name
            investment_kind: sip, lump sum or additional investment
            category: equity, debt, hybrid, index or elss
            initial_investment: Amount invested
            invested_on: Investment date
            current_value: Latest valuation (defaults to the initial investment)
            notes: Optional notes
            valuation_history: Optional explicit history

        Returns:
            Fund ID

        Raises:
            ValidationError: If name is empty, kind or category is unknown, or
                an amount is negative
        """
        if not name or not name.strip():
            raise ValidationError("Fund name must not be empty")
        kind = parse_investment_kind(investment_kind)
        fund_category = parse_fund_category(category)
        _require_non_negative(initial_investment, "Initial investment")
        _require_non_negative(current_value, "Current value")

        if current_value is None:
            current_value = initial_investment

        if valuation_history is None:
            history = [
                ValuationEntry(on=invested_on, value=initial_investment, note=INITIAL_INVESTMENT_NOTE)
            ]
        else:
            history = list(valuation_history)

        fund_id = self.db.create_fund(
            name=name.strip(),
            investment_kind=kind.value,
            category=fund_category.value,
            initial_investment=initial_investment,
            current_value=current_value,
            invested_on=invested_on,
            notes=notes,
            valuation_history=history,
        )
        logger.info("Created fund %d (%s)", fund_id, name.strip())
        return fund_id

    def get_fund(self, fund_id: int) -> Optional[FundPosition]:
        """Get fund position by ID, or None if not found."""
        return self.db.get_fund(fund_id)

    def require_fund(self, fund_id: int) -> FundPosition:
        """Get fund position by ID or raise NotFoundError."""
        fund = self.db.get_fund(fund_id)
        if fund is None:
            raise NotFoundError(fund_not_found(fund_id))
        return fund

    def list_funds(self) -> list[FundPosition]:
        """List fund positions, most recent investment first."""
        return self.db.list_funds()

    def update_fund(
        self,
        fund_id: int,
        name: Optional[str] = None,
        investment_kind: Optional[str] = None,
        category: Optional[str] = None,
        invested_on: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update descriptive fund fields.

        Valuations change only through record_value and add_investment so the
        history stays append-only.

        Raises:
            NotFoundError: If fund doesn't exist
            ValidationError: If kind or category is unknown
        """
        self.require_fund(fund_id)
        if name is not None and not name.strip():
            raise ValidationError("Fund name must not be empty")

        self.db.update_fund(
            fund_id=fund_id,
            name=name.strip() if name is not None else None,
            investment_kind=parse_investment_kind(investment_kind).value if investment_kind else None,
            category=parse_fund_category(category).value if category else None,
            invested_on=invested_on,
            notes=notes,
        )
        logger.info("Updated fund %d", fund_id)

    def record_value(
        self, fund_id: int, value: Decimal, on: date, note: Optional[str] = None
    ) -> FundPosition:
        """Record a new valuation: sets the current value and appends to history.

        Raises:
            NotFoundError: If fund doesn't exist
            ValidationError: If value is negative
        """
        self.require_fund(fund_id)
        _require_non_negative(value, "Value")

        self.db.update_fund(fund_id=fund_id, current_value=value)
        self.db.add_valuation_entry(fund_id, on=on, value=value, note=note or "")
        logger.info("Recorded value %s for fund %d on %s", value, fund_id, on)
        return self.require_fund(fund_id)

    def add_investment(self, fund_id: int, amount: Decimal, on: date) -> FundPosition:
        """Add money to a position.

        The amount raises both the invested total and the current value, and
        the new current value is appended to the history.

        Raises:
            NotFoundError: If fund doesn't exist
            ValidationError: If amount is not positive
        """
        fund = self.require_fund(fund_id)
        if amount <= 0:
            raise ValidationError("Additional investment must be positive")

        new_initial = fund.initial_amount + amount
        new_current = fund.current_amount + amount
        self.db.update_fund(
            fund_id=fund_id, initial_investment=new_initial, current_value=new_current
        )
        self.db.add_valuation_entry(
            fund_id,
            on=on,
            value=new_current,
            note=f"Additional investment of {amount:,.2f}",
        )
        logger.info("Added investment %s to fund %d", amount, fund_id)
        return self.require_fund(fund_id)

    def delete_fund(self, fund_id: int) -> None:
        """Delete a fund position.

        Raises:
            NotFoundError: If fund doesn't exist
        """
        self.require_fund(fund_id)
        self.db.delete_fund(fund_id)
        logger.info("Deleted fund %d", fund_id)

    def total_current_value(self) -> Decimal:
        """Sum of current values across all positions."""
        return sum((fund.current_amount for fund in self.db.list_funds()), Decimal("0"))
