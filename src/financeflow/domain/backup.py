"""Backup export and restore domain service.

Backups are JSON documents with camelCase record keys, matching the
FinanceFlow web app exports so those can be restored unchanged:

    {
        "timestamp": "...",
        "version": "1.0",
        "data": {"transactions": [...], "mutualFunds": [...], "userProfiles": [...]},
        "metadata": {"transactionCount": 0, "mutualFundCount": 0, "userProfileCount": 0}
    }

Restoring reads each record through the same lenient coercions the analytics
use: unreadable dates become missing dates and missing amounts become zero.
"""

import logging
from datetime import date, datetime, tzinfo
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from dateutil import parser as date_parser

from financeflow.domain.entities import (
    FundPosition,
    Transaction,
    UserProfile,
    ValuationEntry,
)
from financeflow.domain.errors import ValidationError
from financeflow.domain.transaction import parse_kind
from financeflow.utils.amount_parser import coerce_amount
from financeflow.utils.date_parser import coerce_date

if TYPE_CHECKING:
    from financeflow.database.base import Database

logger = logging.getLogger(__name__)

BACKUP_VERSION = "1.0"


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _number(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def _coerce_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date_parser.isoparse(value.strip())
    except (ValueError, OverflowError):
        return None


def _optional_amount(record: dict, key: str) -> Optional[Decimal]:
    if record.get(key) is None:
        return None
    return coerce_amount(record[key])


def _optional_text(record: dict, key: str) -> Optional[str]:
    value = record.get(key)
    if value is None:
        return None
    return str(value)


class BackupService:
    """Service for exporting and restoring every stored record."""

    def __init__(self, db: "Database", zone: Optional[tzinfo] = None):
        """Initialize backup service.

        Args:
            db: Database instance
            zone: Reference timezone used to read dates from restored records
        """
        self.db = db
        self.zone = zone

    # Export

    def transaction_to_record(self, txn: Transaction) -> dict[str, Any]:
        return {
            "_id": txn.id,
            "type": txn.kind.value,
            "amount": _number(txn.amount),
            "category": txn.category,
            "date": _iso(txn.occurred_on),
            "description": txn.description,
            "source": txn.payment_source,
            "createdAt": _iso(txn.created_at),
            "updatedAt": _iso(txn.updated_at),
        }

    def fund_to_record(self, fund: FundPosition) -> dict[str, Any]:
        record: dict[str, Any] = {
            "_id": fund.id,
            "fundName": fund.name,
            "investmentType": fund.investment_kind,
            "fundType": fund.category,
            "initialInvestment": _number(fund.initial_investment),
            "currentValue": _number(fund.current_value),
            "investmentDate": _iso(fund.invested_on),
            "notes": fund.notes,
            "createdAt": _iso(fund.created_at),
            "updatedAt": _iso(fund.updated_at),
        }
        if fund.valuation_history is not None:
            record["updateHistory"] = [
                {"date": _iso(entry.on), "value": _number(entry.value), "notes": entry.note or ""}
                for entry in fund.valuation_history
            ]
        return record

    def profile_to_record(self, profile: UserProfile) -> dict[str, Any]:
        return {
            "_id": profile.id,
            "monthlyIncomeGoal": _number(profile.monthly_income_goal),
            "savingsTarget": _number(profile.savings_target),
            "preferredCurrency": profile.preferred_currency,
            "motivationalQuotesPreference": profile.motivational_quotes,
            "createdAt": _iso(profile.created_at),
            "updatedAt": _iso(profile.updated_at),
        }

    def export_backup(self, now: datetime) -> dict[str, Any]:
        """Export every record as a JSON-serialisable backup document."""
        transactions = [self.transaction_to_record(t) for t in self.db.list_transactions()]
        funds = [self.fund_to_record(f) for f in self.db.list_funds()]
        profiles = [self.profile_to_record(p) for p in self.db.list_profiles()]

        logger.info(
            "Exported backup with %d transactions, %d funds, %d profiles",
            len(transactions),
            len(funds),
            len(profiles),
        )
        return {
            "timestamp": now.isoformat(),
            "version": BACKUP_VERSION,
            "data": {
                "transactions": transactions,
                "mutualFunds": funds,
                "userProfiles": profiles,
            },
            "metadata": {
                "transactionCount": len(transactions),
                "mutualFundCount": len(funds),
                "userProfileCount": len(profiles),
            },
        }

    # Restore

    def transaction_from_record(self, record: dict) -> Transaction:
        """Read a backup transaction record.

        Raises:
            ValidationError: If the record is not an object or its type is unknown
        """
        if not isinstance(record, dict):
            raise ValidationError("Transaction records must be objects")
        return Transaction(
            id=None,
            kind=parse_kind(record.get("type")),
            amount=coerce_amount(record.get("amount")),
            category=_optional_text(record, "category"),
            occurred_on=coerce_date(record.get("date"), self.zone),
            description=_optional_text(record, "description"),
            payment_source=_optional_text(record, "source"),
            created_at=_coerce_datetime(record.get("createdAt")),
            updated_at=_coerce_datetime(record.get("updatedAt")),
        )

    def fund_from_record(self, record: dict) -> FundPosition:
        """Read a backup fund record; a missing updateHistory means no history.

        Raises:
            ValidationError: If the record is not an object
        """
        if not isinstance(record, dict):
            raise ValidationError("Mutual fund records must be objects")

        history = None
        raw_history = record.get("updateHistory")
        if isinstance(raw_history, list):
            history = tuple(
                ValuationEntry(
                    on=coerce_date(entry.get("date"), self.zone),
                    value=coerce_amount(entry.get("value")),
                    note=_optional_text(entry, "notes"),
                )
                for entry in raw_history
                if isinstance(entry, dict)
            )

        return FundPosition(
            id=None,
            name=str(record.get("fundName") or "Unnamed fund"),
            investment_kind=str(record.get("investmentType") or "").lower(),
            category=str(record.get("fundType") or "").lower(),
            initial_investment=coerce_amount(record.get("initialInvestment")),
            current_value=_optional_amount(record, "currentValue"),
            invested_on=coerce_date(record.get("investmentDate"), self.zone),
            valuation_history=history,
            notes=_optional_text(record, "notes"),
            created_at=_coerce_datetime(record.get("createdAt")),
            updated_at=_coerce_datetime(record.get("updatedAt")),
        )

    def profile_from_record(self, record: dict) -> UserProfile:
        """Read a backup profile record, filling gaps with defaults.

        Raises:
            ValidationError: If the record is not an object
        """
        if not isinstance(record, dict):
            raise ValidationError("User profile records must be objects")
        defaults = UserProfile(id=None)
        goal = _optional_amount(record, "monthlyIncomeGoal")
        target = _optional_amount(record, "savingsTarget")
        quotes = record.get("motivationalQuotesPreference")
        return UserProfile(
            id=None,
            monthly_income_goal=goal if goal is not None else defaults.monthly_income_goal,
            savings_target=target if target is not None else defaults.savings_target,
            preferred_currency=str(record.get("preferredCurrency") or defaults.preferred_currency),
            motivational_quotes=bool(quotes) if quotes is not None else defaults.motivational_quotes,
            created_at=_coerce_datetime(record.get("createdAt")),
            updated_at=_coerce_datetime(record.get("updatedAt")),
        )

    def import_backup(self, payload: Any) -> dict[str, int]:
        """Replace all stored records with the contents of a backup document.

        Every record is read before anything is replaced, so an invalid backup
        leaves the store untouched. Only the first user profile is restored.

        Returns:
            Restored record counts keyed like the backup data sections

        Raises:
            ValidationError: If the document shape or a record is invalid
        """
        data = payload.get("data") if isinstance(payload, dict) else None
        if (
            not isinstance(data, dict)
            or not isinstance(data.get("transactions"), list)
            or not isinstance(data.get("mutualFunds"), list)
        ):
            raise ValidationError("Invalid backup data format")
        raw_profiles = data.get("userProfiles") or []
        if not isinstance(raw_profiles, list):
            raise ValidationError("Invalid backup data format")

        transactions = [self.transaction_from_record(r) for r in data["transactions"]]
        funds = [self.fund_from_record(r) for r in data["mutualFunds"]]
        profiles = [self.profile_from_record(r) for r in raw_profiles[:1]]
        if len(raw_profiles) > 1:
            logger.warning(
                "Backup holds %d user profiles, restoring only the first",
                len(raw_profiles),
            )

        self.db.replace_all(transactions, funds, profiles)
        logger.info(
            "Restored backup with %d transactions, %d funds, %d profiles",
            len(transactions),
            len(funds),
            len(profiles),
        )
        return {
            "transactions": len(transactions),
            "mutualFunds": len(funds),
            "userProfiles": len(profiles),
        }
