"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from financeflow.database.models import (
    Fund as ORMFund,
    Transaction as ORMTransaction,
    UserProfile as ORMUserProfile,
    ValuationEntry as ORMValuationEntry,
)
from financeflow.database.mappers import (
    fund_to_domain,
    fund_to_orm,
    profile_to_domain,
    transaction_to_domain,
    transaction_to_orm,
)
from financeflow.domain.entities import (
    FundPosition,
    Transaction,
    TransactionKind,
    UserProfile,
    ValuationEntry,
)


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        created = datetime.now(UTC)
        orm_transaction = ORMTransaction(
            id=3,
            kind="expense",
            amount=Decimal("49.99"),
            category="food",
            occurred_on=date(2024, 1, 15),
            description="Lunch",
            payment_source="cash",
            created_at=created,
            updated_at=created,
        )

        txn = transaction_to_domain(orm_transaction)

        assert isinstance(txn, Transaction)
        assert txn.id == 3
        assert txn.kind is TransactionKind.EXPENSE
        assert txn.amount == Decimal("49.99")
        assert txn.occurred_on == date(2024, 1, 15)
        assert txn.payment_source == "cash"
        assert txn.created_at == created

    def test_transaction_to_orm_keeps_defaults_for_missing_timestamps(self):
        txn = Transaction(
            id=None,
            kind=TransactionKind.INCOME,
            amount=None,
            category=None,
            occurred_on=None,
        )

        orm_transaction = transaction_to_orm(txn)

        assert orm_transaction.kind == "income"
        assert orm_transaction.amount is None
        assert orm_transaction.created_at is None


class TestFundMapper:
    """Tests for Fund mapper."""

    def test_fund_with_history(self):
        orm_fund = ORMFund(
            id=1,
            name="Equity Fund",
            investment_kind="sip",
            category="equity",
            initial_investment=Decimal("1000"),
            current_value=Decimal("1100"),
            invested_on=date(2024, 1, 1),
            history_recorded=True,
        )
        orm_fund.valuation_entries.append(
            ORMValuationEntry(recorded_on=date(2024, 1, 1), value=Decimal("1000"), note="Initial investment")
        )
        orm_fund.valuation_entries.append(
            ORMValuationEntry(recorded_on=date(2024, 2, 1), value=Decimal("1100"), note="")
        )

        fund = fund_to_domain(orm_fund)

        assert isinstance(fund, FundPosition)
        assert fund.valuation_history == (
            ValuationEntry(on=date(2024, 1, 1), value=Decimal("1000"), note="Initial investment"),
            ValuationEntry(on=date(2024, 2, 1), value=Decimal("1100"), note=""),
        )

    def test_fund_without_history_tracking(self):
        orm_fund = ORMFund(
            id=2,
            name="Legacy",
            investment_kind="sip",
            category="debt",
            initial_investment=Decimal("500"),
            invested_on=date(2023, 1, 1),
            history_recorded=False,
        )

        assert fund_to_domain(orm_fund).valuation_history is None

    def test_fund_to_orm_round_trip(self):
        fund = FundPosition(
            id=None,
            name="Hybrid",
            investment_kind="lump sum",
            category="hybrid",
            initial_investment=Decimal("2000"),
            current_value=None,
            invested_on=date(2024, 3, 1),
            valuation_history=None,
        )

        orm_fund = fund_to_orm(fund)

        assert orm_fund.history_recorded is False
        assert list(orm_fund.valuation_entries) == []
        assert fund_to_domain(orm_fund).valuation_history is None


class TestProfileMapper:
    """Tests for UserProfile mapper."""

    def test_profile_to_domain(self):
        orm_profile = ORMUserProfile(
            id=1,
            monthly_income_goal=Decimal("120000"),
            savings_target=Decimal("40000"),
            preferred_currency="USD",
            motivational_quotes=False,
        )

        profile = profile_to_domain(orm_profile)

        assert isinstance(profile, UserProfile)
        assert profile.monthly_income_goal == Decimal("120000")
        assert profile.preferred_currency == "USD"
        assert profile.motivational_quotes is False
