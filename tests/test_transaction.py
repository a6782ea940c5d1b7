"""Tests for the transaction service."""

import pytest
from datetime import date
from decimal import Decimal

from financeflow.domain.entities import TransactionKind
from financeflow.domain.errors import NotFoundError, ValidationError


def test_create_and_get(transaction_service):
    transaction_id = transaction_service.create_transaction(
        "Expense",
        Decimal("2500.50"),
        date(2024, 3, 9),
        category=" food ",
        description="Groceries",
        payment_source="card",
    )

    txn = transaction_service.get_transaction(transaction_id)

    assert txn.kind is TransactionKind.EXPENSE
    assert txn.amount == Decimal("2500.50")
    assert txn.category == "food"
    assert txn.occurred_on == date(2024, 3, 9)
    assert txn.description == "Groceries"
    assert txn.payment_source == "card"
    assert txn.created_at is not None


def test_blank_category_reads_as_other(transaction_service):
    transaction_id = transaction_service.create_transaction(
        "expense", Decimal("10"), date(2024, 3, 9), category="   "
    )

    txn = transaction_service.get_transaction(transaction_id)

    assert txn.category is None
    assert txn.category_label == "Other"


def test_create_rejects_unknown_kind(transaction_service):
    with pytest.raises(ValidationError, match="Invalid type"):
        transaction_service.create_transaction("transfer", Decimal("10"), date(2024, 3, 9))


def test_create_rejects_negative_amount(transaction_service):
    with pytest.raises(ValidationError, match="must not be negative"):
        transaction_service.create_transaction("income", Decimal("-1"), date(2024, 3, 9))


def test_get_missing_transaction(transaction_service):
    assert transaction_service.get_transaction(999) is None
    with pytest.raises(NotFoundError, match="Transaction 999 not found"):
        transaction_service.require_transaction(999)


def test_update_only_given_fields(transaction_service):
    transaction_id = transaction_service.create_transaction(
        "expense", Decimal("100"), date(2024, 3, 9), category="food", description="Lunch"
    )

    transaction_service.update_transaction(transaction_id, amount=Decimal("120"), kind="income")

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.amount == Decimal("120")
    assert txn.kind is TransactionKind.INCOME
    assert txn.category == "food"
    assert txn.description == "Lunch"


def test_update_missing_transaction(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.update_transaction(42, amount=Decimal("1"))


def test_update_rejects_negative_amount(transaction_service):
    transaction_id = transaction_service.create_transaction("income", Decimal("1"), date(2024, 1, 1))

    with pytest.raises(ValidationError):
        transaction_service.update_transaction(transaction_id, amount=Decimal("-5"))


def test_delete(transaction_service):
    transaction_id = transaction_service.create_transaction("income", Decimal("1"), date(2024, 1, 1))

    transaction_service.delete_transaction(transaction_id)

    assert transaction_service.get_transaction(transaction_id) is None
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction(transaction_id)


class TestListing:
    @pytest.fixture(autouse=True)
    def seed(self, transaction_service):
        transaction_service.create_transaction("income", Decimal("90000"), date(2024, 2, 1), "salary")
        transaction_service.create_transaction("expense", Decimal("300"), date(2024, 2, 29), "food")
        transaction_service.create_transaction("expense", Decimal("1500"), date(2024, 3, 1), "rent")
        transaction_service.create_transaction("expense", Decimal("200"), date(2024, 3, 15), "food")

    def test_newest_first(self, transaction_service):
        transactions = transaction_service.list_transactions()

        assert [t.occurred_on for t in transactions] == [
            date(2024, 3, 15),
            date(2024, 3, 1),
            date(2024, 2, 29),
            date(2024, 2, 1),
        ]

    def test_inclusive_range(self, transaction_service):
        transactions = transaction_service.list_by_range(date(2024, 2, 29), date(2024, 3, 1))

        assert [t.amount for t in transactions] == [Decimal("1500"), Decimal("300")]

    def test_range_requires_both_bounds(self, transaction_service):
        with pytest.raises(ValidationError):
            transaction_service.list_by_range(date(2024, 2, 1), None)

    def test_inverted_range(self, transaction_service):
        with pytest.raises(ValidationError, match="after end date"):
            transaction_service.list_by_range(date(2024, 3, 1), date(2024, 2, 1))

    def test_by_category(self, transaction_service):
        transactions = transaction_service.list_by_category("food")

        assert len(transactions) == 2
        assert all(t.category == "food" for t in transactions)

    def test_filter_by_kind(self, transaction_service):
        transactions = transaction_service.list_transactions(kind="income")

        assert len(transactions) == 1
        assert transactions[0].category == "salary"

    def test_filter_by_unknown_kind(self, transaction_service):
        with pytest.raises(ValidationError):
            transaction_service.list_transactions(kind="refund")
