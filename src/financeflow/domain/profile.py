"""User profile domain service."""

import logging
from typing import TYPE_CHECKING, Optional
from decimal import Decimal

from financeflow.domain.entities import UserProfile
from financeflow.domain.errors import ValidationError, negative_amount

if TYPE_CHECKING:
    from financeflow.database.base import Database

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for the single user profile."""

    def __init__(self, db: "Database"):
        """Initialize profile service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_profile(self) -> UserProfile:
        """Get the profile, creating it with defaults on first read."""
        profile = self.db.get_profile()
        if profile is None:
            profile = self.db.save_profile()
            logger.info("Created default user profile")
        return profile

    def update_profile(
        self,
        monthly_income_goal: Optional[Decimal] = None,
        savings_target: Optional[Decimal] = None,
        preferred_currency: Optional[str] = None,
        motivational_quotes: Optional[bool] = None,
    ) -> UserProfile:
        """Update the given profile fields, creating the profile if needed.

        Raises:
            ValidationError: If an amount is negative or the currency is blank
        """
        if monthly_income_goal is not None and monthly_income_goal < 0:
            raise ValidationError(negative_amount("Monthly income goal"))
        if savings_target is not None and savings_target < 0:
            raise ValidationError(negative_amount("Savings target"))
        if preferred_currency is not None:
            preferred_currency = preferred_currency.strip().upper()
            if not preferred_currency:
                raise ValidationError("Currency must not be empty")

        return self.db.save_profile(
            monthly_income_goal=monthly_income_goal,
            savings_target=savings_target,
            preferred_currency=preferred_currency,
            motivational_quotes=motivational_quotes,
        )
