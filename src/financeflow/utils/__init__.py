"""Utility functions for financeflow."""

from financeflow.utils.date_parser import parse_date, coerce_date
from financeflow.utils.amount_parser import parse_amount, coerce_amount

__all__ = ["parse_date", "coerce_date", "parse_amount", "coerce_amount"]
