"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the analytics code only ever
sees frozen domain entities.
"""

from financeflow.domain import entities as domain
from financeflow.database.models import (
    Fund as ORMFund,
    Transaction as ORMTransaction,
    UserProfile as ORMUserProfile,
    ValuationEntry as ORMValuationEntry,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        kind=domain.TransactionKind(orm_transaction.kind),
        amount=orm_transaction.amount,
        category=orm_transaction.category,
        occurred_on=orm_transaction.occurred_on,
        description=orm_transaction.description,
        payment_source=orm_transaction.payment_source,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def valuation_entry_to_domain(orm_entry: ORMValuationEntry) -> domain.ValuationEntry:
    """Convert SQLAlchemy ValuationEntry model to domain ValuationEntry entity."""
    return domain.ValuationEntry(
        on=orm_entry.recorded_on,
        value=orm_entry.value,
        note=orm_entry.note,
    )


def fund_to_domain(orm_fund: ORMFund) -> domain.FundPosition:
    """Convert SQLAlchemy Fund model to domain FundPosition entity."""
    history = None
    if orm_fund.history_recorded is not False:
        history = tuple(valuation_entry_to_domain(e) for e in orm_fund.valuation_entries)
    return domain.FundPosition(
        id=orm_fund.id,
        name=orm_fund.name,
        investment_kind=orm_fund.investment_kind,
        category=orm_fund.category,
        initial_investment=orm_fund.initial_investment,
        current_value=orm_fund.current_value,
        invested_on=orm_fund.invested_on,
        valuation_history=history,
        notes=orm_fund.notes,
        created_at=orm_fund.created_at,
        updated_at=orm_fund.updated_at,
    )


def profile_to_domain(orm_profile: ORMUserProfile) -> domain.UserProfile:
    """Convert SQLAlchemy UserProfile model to domain UserProfile entity."""
    return domain.UserProfile(
        id=orm_profile.id,
        monthly_income_goal=orm_profile.monthly_income_goal,
        savings_target=orm_profile.savings_target,
        preferred_currency=orm_profile.preferred_currency,
        motivational_quotes=orm_profile.motivational_quotes,
        created_at=orm_profile.created_at,
        updated_at=orm_profile.updated_at,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Build an unsaved SQLAlchemy Transaction from a domain entity."""
    orm_transaction = ORMTransaction(
        kind=transaction.kind.value,
        amount=transaction.amount,
        category=transaction.category,
        occurred_on=transaction.occurred_on,
        description=transaction.description,
        payment_source=transaction.payment_source,
    )
    if transaction.created_at is not None:
        orm_transaction.created_at = transaction.created_at
    if transaction.updated_at is not None:
        orm_transaction.updated_at = transaction.updated_at
    return orm_transaction


def fund_to_orm(fund: domain.FundPosition) -> ORMFund:
    """Build an unsaved SQLAlchemy Fund (with history entries) from a domain entity."""
    orm_fund = ORMFund(
        name=fund.name,
        investment_kind=fund.investment_kind,
        category=fund.category,
        initial_investment=fund.initial_investment,
        current_value=fund.current_value,
        invested_on=fund.invested_on,
        notes=fund.notes,
        history_recorded=fund.valuation_history is not None,
    )
    for entry in fund.valuation_history or ():
        orm_fund.valuation_entries.append(
            ORMValuationEntry(recorded_on=entry.on, value=entry.value, note=entry.note)
        )
    if fund.created_at is not None:
        orm_fund.created_at = fund.created_at
    if fund.updated_at is not None:
        orm_fund.updated_at = fund.updated_at
    return orm_fund


def profile_to_orm(profile: domain.UserProfile) -> ORMUserProfile:
    """Build an unsaved SQLAlchemy UserProfile from a domain entity."""
    orm_profile = ORMUserProfile(
        monthly_income_goal=profile.monthly_income_goal,
        savings_target=profile.savings_target,
        preferred_currency=profile.preferred_currency,
        motivational_quotes=profile.motivational_quotes,
    )
    if profile.created_at is not None:
        orm_profile.created_at = profile.created_at
    if profile.updated_at is not None:
        orm_profile.updated_at = profile.updated_at
    return orm_profile
