"""Shared pytest fixtures for financeflow tests."""

import tempfile
import os
from datetime import date
import pytest

from financeflow.database.factories import create_sqlite_database
from financeflow.domain.analytics import AnalyticsService
from financeflow.domain.fund import FundService
from financeflow.domain.health import HealthScoreService
from financeflow.domain.profile import ProfileService
from financeflow.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def fund_service(temp_db):
    """Create a FundService with a temporary database."""
    return FundService(temp_db)


@pytest.fixture
def profile_service(temp_db):
    """Create a ProfileService with a temporary database."""
    return ProfileService(temp_db)


@pytest.fixture
def health_service(temp_db):
    """Create a HealthScoreService with a temporary database."""
    return HealthScoreService(temp_db)


@pytest.fixture
def analytics_service(temp_db):
    """Create an AnalyticsService with a temporary database."""
    return AnalyticsService(temp_db)


@pytest.fixture
def today():
    """Fixed reference date used by date-bucketed tests."""
    return date(2024, 5, 15)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
