"""Domain model entities for financeflow.

These are pure data classes representing business concepts, independent of
database schema. Stored records and derived analytics both live here; the
derived ones know how to render themselves into the JSON shapes consumed by
the presentation layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

DEFAULT_CATEGORY = "Other"


class TransactionKind(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class InvestmentKind(str, Enum):
    """How money went into a fund position."""

    SIP = "sip"
    LUMP_SUM = "lump sum"
    ADDITIONAL = "additional investment"


class FundCategory(str, Enum):
    """Asset class of a fund position."""

    EQUITY = "equity"
    DEBT = "debt"
    HYBRID = "hybrid"
    INDEX = "index"
    ELSS = "elss"


class AnalyticsPeriod(str, Enum):
    """Period selector for the monthly series."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def months_back(self) -> int:
        return 12 if self is AnalyticsPeriod.YEARLY else 6


def _number(value: Decimal) -> float:
    return float(value)


@dataclass(frozen=True)
class Transaction:
    """Income or expense transaction domain entity.

    ``occurred_on`` is None when the stored date could not be interpreted;
    such records are skipped by every date-bucketed aggregation.
    """

    id: Optional[int]
    kind: TransactionKind
    amount: Optional[Decimal]
    category: Optional[str]
    occurred_on: Optional[date]
    description: Optional[str] = None
    payment_source: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def amount_value(self) -> Decimal:
        """Amount with a missing value read as zero."""
        return self.amount if self.amount is not None else Decimal("0")

    @property
    def category_label(self) -> str:
        """Category with a missing or blank value read as 'Other'."""
        if self.category is None or not self.category.strip():
            return DEFAULT_CATEGORY
        return self.category

    @property
    def is_income(self) -> bool:
        return self.kind == TransactionKind.INCOME

    @property
    def is_expense(self) -> bool:
        return self.kind == TransactionKind.EXPENSE


@dataclass(frozen=True)
class ValuationEntry:
    """One point of a fund's valuation history."""

    on: Optional[date]
    value: Optional[Decimal]
    note: Optional[str] = None

    @property
    def value_amount(self) -> Decimal:
        return self.value if self.value is not None else Decimal("0")


@dataclass(frozen=True)
class FundPosition:
    """Mutual fund position domain entity.

    ``valuation_history`` is None for positions that never tracked history
    (as opposed to an empty tuple for positions that track it but have no
    entries yet).
    """

    id: Optional[int]
    name: str
    investment_kind: str
    category: str
    initial_investment: Optional[Decimal]
    current_value: Optional[Decimal]
    invested_on: Optional[date]
    valuation_history: Optional[tuple[ValuationEntry, ...]] = ()
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def initial_amount(self) -> Decimal:
        if self.initial_investment is None:
            return Decimal("0")
        return self.initial_investment

    @property
    def current_amount(self) -> Decimal:
        if self.current_value is None:
            return Decimal("0")
        return self.current_value


@dataclass(frozen=True)
class UserProfile:
    """User profile domain entity (a single instance per database)."""

    id: Optional[int]
    monthly_income_goal: Decimal = Decimal("100000")
    savings_target: Decimal = Decimal("50000")
    preferred_currency: str = "PKR"
    motivational_quotes: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Derived analytics


@dataclass(frozen=True)
class MonthlyPoint:
    """Income, expenses and savings of one calendar month."""

    label: str
    month_start: date
    income: Decimal
    expenses: Decimal

    @property
    def savings(self) -> Decimal:
        return self.income - self.expenses

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.label,
            "income": _number(self.income),
            "expenses": _number(self.expenses),
            "savings": _number(self.savings),
        }


@dataclass(frozen=True)
class CategorySlice:
    """Expense total of one category."""

    name: str
    value: Decimal
    color_index: int
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": _number(self.value), "color": self.color}


@dataclass(frozen=True)
class FundPoint:
    """Total portfolio value on the first day of a month."""

    label: str
    as_of: date
    value: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {"month": self.label, "value": _number(self.value)}


@dataclass(frozen=True)
class NetWorthPoint:
    """Cash plus investments for one month."""

    label: str
    cash: Decimal
    investments: Decimal

    @property
    def total(self) -> Decimal:
        return self.cash + self.investments

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.label,
            "cash": _number(self.cash),
            "investments": _number(self.investments),
            "total": _number(self.total),
        }


@dataclass(frozen=True)
class HealthMetrics:
    """Raw figures and ratios behind a health score."""

    income: Decimal
    expenses: Decimal
    total_investments: Decimal
    income_to_expense_ratio: float = 0.0
    savings_rate: float = 0.0
    investment_ratio: float = 0.0
    expense_variability: Optional[float] = None

    @property
    def savings(self) -> Decimal:
        return self.income - self.expenses

    def to_dict(self) -> dict[str, Any]:
        return {
            "income": _number(self.income),
            "expenses": _number(self.expenses),
            "savings": _number(self.savings),
            "totalInvestments": _number(self.total_investments),
            "incomeToExpenseRatio": self.income_to_expense_ratio,
            "savingsRate": self.savings_rate,
            "investmentRatio": self.investment_ratio,
            "expenseVariability": self.expense_variability,
        }


@dataclass(frozen=True)
class HealthReport:
    """Financial health score of one month."""

    score: int
    grade: str
    status: str
    color: str
    month: str
    metrics: HealthMetrics
    recommendations: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "grade": self.grade,
            "status": self.status,
            "color": self.color,
            "month": self.month,
            "metrics": self.metrics.to_dict(),
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class AnalyticsReport:
    """All derived analytics for one request."""

    period: AnalyticsPeriod
    monthly: tuple[MonthlyPoint, ...] = ()
    categories: tuple[CategorySlice, ...] = ()
    funds: tuple[FundPoint, ...] = ()
    net_worth: tuple[NetWorthPoint, ...] = ()
    health: Optional[HealthReport] = None
    error: Optional[str] = None

    @classmethod
    def empty(cls, period: AnalyticsPeriod, error: Optional[str] = None) -> "AnalyticsReport":
        """No-data shape returned when the records could not be loaded."""
        return cls(period=period, error=error)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "monthlyData": [point.to_dict() for point in self.monthly],
            "categoryData": [slice_.to_dict() for slice_ in self.categories],
            "mutualFundData": [point.to_dict() for point in self.funds],
            "netWorthData": [point.to_dict() for point in self.net_worth],
            "healthData": self.health.to_dict() if self.health is not None else None,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(frozen=True)
class DashboardSummary:
    """Current-month overview."""

    monthly_income: Decimal
    monthly_expenses: Decimal
    mutual_fund_value: Decimal
    savings_goal: Decimal
    total_transactions: int
    total_funds: int

    @property
    def net_savings(self) -> Decimal:
        return self.monthly_income - self.monthly_expenses

    @property
    def savings_progress(self) -> float:
        if self.savings_goal <= 0:
            return 0.0
        return min(float(self.net_savings / self.savings_goal) * 100, 100.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "monthlyIncome": _number(self.monthly_income),
            "monthlyExpenses": _number(self.monthly_expenses),
            "netSavings": _number(self.net_savings),
            "mutualFundValue": _number(self.mutual_fund_value),
            "savingsGoal": _number(self.savings_goal),
            "savingsProgress": self.savings_progress,
            "totalTransactions": self.total_transactions,
            "totalFunds": self.total_funds,
        }


@dataclass(frozen=True)
class PeriodReport:
    """Totals and expense breakdown for an explicit date range."""

    report_type: str
    start_date: date
    end_date: date
    total_income: Decimal
    total_expenses: Decimal
    total_fund_value: Decimal
    category_breakdown: tuple[tuple[str, Decimal], ...] = ()
    transactions: tuple[Transaction, ...] = field(default=(), repr=False)

    @property
    def net_savings(self) -> Decimal:
        return self.total_income - self.total_expenses

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.report_type,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "totalIncome": _number(self.total_income),
            "totalExpenses": _number(self.total_expenses),
            "netSavings": _number(self.net_savings),
            "totalMutualFundValue": _number(self.total_fund_value),
            "categoryBreakdown": [
                {"category": name, "amount": _number(amount)}
                for name, amount in self.category_breakdown
            ],
            "transactionCount": len(self.transactions),
        }
