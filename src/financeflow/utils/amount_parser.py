"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Any
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "Rs 123.45", "$123.45", "₨123.45"
    - "1,234.56"

    Amounts are magnitudes: the transaction kind carries the direction, so a
    leading minus sign or parentheses are rejected.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    if amount_str.startswith("(") and amount_str.endswith(")"):
        raise ValueError(f"Amount must not be negative: '{amount_str}'")

    # Currency symbols and codes
    amount_str = re.sub(r"(?i)(pkr|rs\.?|[$€£¥₨₹])", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")
    return amount


def coerce_amount(value: Any) -> Decimal:
    """Convert a stored numeric value to Decimal, treating anything missing or invalid as 0."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")
