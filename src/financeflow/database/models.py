"""SQLAlchemy models for financeflow database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Transaction(Base):
    """Income or expense transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=True)
    category = Column(String, nullable=True)
    occurred_on = Column(Date, nullable=True, index=True)
    description = Column(String, nullable=True)
    payment_source = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)


class Fund(Base):
    """Mutual fund position model."""

    __tablename__ = "funds"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    investment_kind = Column(String, nullable=False)
    category = Column(String, nullable=False)
    initial_investment = Column(Numeric(14, 2), nullable=True)
    current_value = Column(Numeric(14, 2), nullable=True)
    invested_on = Column(Date, nullable=True)
    notes = Column(String, nullable=True)
    # False for positions restored without any valuation history
    history_recorded = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    valuation_entries = relationship(
        "ValuationEntry",
        back_populates="fund",
        cascade="all, delete-orphan",
        order_by="ValuationEntry.id",
    )


class ValuationEntry(Base):
    """Valuation history entry model."""

    __tablename__ = "valuation_entries"

    id = Column(Integer, primary_key=True)
    fund_id = Column(Integer, ForeignKey("funds.id"), nullable=False)
    recorded_on = Column(Date, nullable=True)
    value = Column(Numeric(14, 2), nullable=True)
    note = Column(String, nullable=True)

    # Relationships
    fund = relationship("Fund", back_populates="valuation_entries")


class UserProfile(Base):
    """User profile model."""

    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True)
    monthly_income_goal = Column(Numeric(14, 2), nullable=False)
    savings_target = Column(Numeric(14, 2), nullable=False)
    preferred_currency = Column(String, nullable=False)
    motivational_quotes = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
