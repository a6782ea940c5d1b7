"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from financeflow.domain.entities import (
    FundPosition,
    Transaction,
    UserProfile,
    ValuationEntry,
)


class Database(ABC):
    """Abstract database interface for financeflow.

    Implementations raise ``DataAccessError`` when records cannot be read.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        kind: str,
        amount: Optional[Decimal],
        occurred_on: Optional[date],
        category: Optional[str] = None,
        description: Optional[str] = None,
        payment_source: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions, newest first, with optional inclusive date range and filters."""
        pass

    @abstractmethod
    def count_transactions(self) -> int:
        """Count all transactions."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        kind: Optional[str] = None,
        amount: Optional[Decimal] = None,
        occurred_on: Optional[date] = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
        payment_source: Optional[str] = None,
    ) -> None:
        """Update the given transaction fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    # Fund operations
    @abstractmethod
    def create_fund(
        self,
        name: str,
        investment_kind: str,
        category: str,
        initial_investment: Optional[Decimal],
        current_value: Optional[Decimal],
        invested_on: Optional[date],
        notes: Optional[str] = None,
        valuation_history: Optional[list[ValuationEntry]] = None,
    ) -> int:
        """Create a fund position. Returns fund ID.

        A ``valuation_history`` of None stores a position without history.
        """
        pass

    @abstractmethod
    def get_fund(self, fund_id: int) -> Optional[FundPosition]:
        """Get fund position by ID."""
        pass

    @abstractmethod
    def list_funds(self) -> list[FundPosition]:
        """List fund positions, most recent investment first."""
        pass

    @abstractmethod
    def count_funds(self) -> int:
        """Count all fund positions."""
        pass

    @abstractmethod
    def update_fund(
        self,
        fund_id: int,
        name: Optional[str] = None,
        investment_kind: Optional[str] = None,
        category: Optional[str] = None,
        initial_investment: Optional[Decimal] = None,
        current_value: Optional[Decimal] = None,
        invested_on: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update the given fund fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def add_valuation_entry(
        self, fund_id: int, on: date, value: Decimal, note: Optional[str] = None
    ) -> None:
        """Append an entry to a fund's valuation history."""
        pass

    @abstractmethod
    def delete_fund(self, fund_id: int) -> None:
        """Delete a fund position and its history."""
        pass

    # User profile operations
    @abstractmethod
    def get_profile(self) -> Optional[UserProfile]:
        """Get the user profile, or None if none has been stored."""
        pass

    @abstractmethod
    def list_profiles(self) -> list[UserProfile]:
        """List stored profiles (normally zero or one)."""
        pass

    @abstractmethod
    def save_profile(
        self,
        monthly_income_goal: Optional[Decimal] = None,
        savings_target: Optional[Decimal] = None,
        preferred_currency: Optional[str] = None,
        motivational_quotes: Optional[bool] = None,
    ) -> UserProfile:
        """Create the profile or update the given fields of the existing one."""
        pass

    # Bulk operations
    @abstractmethod
    def replace_all(
        self,
        transactions: list[Transaction],
        funds: list[FundPosition],
        profiles: list[UserProfile],
    ) -> None:
        """Replace every stored record with the given ones."""
        pass
