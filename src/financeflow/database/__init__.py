"""Database layer for financeflow application."""

from financeflow.database.base import Database
from financeflow.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
