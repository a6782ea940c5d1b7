"""Transaction domain service."""

import logging
from typing import TYPE_CHECKING, Optional
from datetime import date
from decimal import Decimal

from financeflow.domain.entities import Transaction as TransactionEntity, TransactionKind
from financeflow.domain.errors import (
    NotFoundError,
    ValidationError,
    invalid_choice,
    invalid_date_range,
    negative_amount,
    transaction_not_found,
)

if TYPE_CHECKING:
    from financeflow.database.base import Database

logger = logging.getLogger(__name__)


def parse_kind(kind: "str | TransactionKind") -> TransactionKind:
    """Resolve a transaction kind, rejecting anything but income or expense."""
    if isinstance(kind, TransactionKind):
        return kind
    try:
        return TransactionKind(str(kind).strip().lower())
    except ValueError:
        raise ValidationError(invalid_choice("type", kind, [k.value for k in TransactionKind]))


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: "Database"):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        kind: "str | TransactionKind",
        amount: Decimal,
        occurred_on: date,
        category: Optional[str] = None,
        description: Optional[str] = None,
        payment_source: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            kind: "income" or "expense"
            amount: Non-negative amount
            occurred_on: Transaction date
            category: Optional category label
            description: Optional description
            payment_source: Optional payment source (cash, card, bank, ...)

        Returns:
            Transaction ID

        Raises:
            ValidationError: If kind is unknown or amount is negative
        """
        resolved_kind = parse_kind(kind)
        if amount < 0:
            raise ValidationError(negative_amount("Amount"))

        transaction_id = self.db.create_transaction(
            kind=resolved_kind.value,
            amount=amount,
            occurred_on=occurred_on,
            category=_clean_text(category),
            description=_clean_text(description),
            payment_source=_clean_text(payment_source),
        )
        logger.info("Created %s transaction %d", resolved_kind.value, transaction_id)
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        kind: "str | TransactionKind | None" = None,
        amount: Optional[Decimal] = None,
        occurred_on: Optional[date] = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
        payment_source: Optional[str] = None,
    ) -> None:
        """Update transaction fields.

        Args:
            transaction_id: Transaction ID to update
            kind: Optional new kind
            amount: Optional new amount
            occurred_on: Optional new date
            category: Optional new category
            description: Optional new description
            payment_source: Optional new payment source

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If kind or amount is invalid
        """
        self.require_transaction(transaction_id)

        resolved_kind = parse_kind(kind).value if kind is not None else None
        if amount is not None and amount < 0:
            raise ValidationError(negative_amount("Amount"))

        self.db.update_transaction(
            transaction_id=transaction_id,
            kind=resolved_kind,
            amount=amount,
            occurred_on=occurred_on,
            category=_clean_text(category),
            description=_clean_text(description),
            payment_source=_clean_text(payment_source),
        )
        logger.info("Updated transaction %d", transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)
        logger.info("Deleted transaction %d", transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        kind: "str | TransactionKind | None" = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first.

        Raises:
            ValidationError: If the range is inverted or kind is unknown
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(invalid_date_range(start_date, end_date))
        resolved_kind = parse_kind(kind).value if kind is not None else None
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            category=category,
            kind=resolved_kind,
        )

    def list_by_range(self, start_date: date, end_date: date) -> list[TransactionEntity]:
        """List transactions dated within an inclusive range, newest first.

        Raises:
            ValidationError: If either bound is missing or the range is inverted
        """
        if start_date is None or end_date is None:
            raise ValidationError("Start and end dates are required")
        return self.list_transactions(start_date=start_date, end_date=end_date)

    def list_by_category(self, category: str) -> list[TransactionEntity]:
        """List transactions whose stored category matches exactly, newest first."""
        return self.db.list_transactions(category=category)
