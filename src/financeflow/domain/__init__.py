"""Domain layer for financeflow application."""

from financeflow.domain.transaction import TransactionService
from financeflow.domain.fund import FundService
from financeflow.domain.profile import ProfileService
from financeflow.domain.health import HealthScoreService
from financeflow.domain.analytics import AnalyticsService
from financeflow.domain.dashboard import DashboardService
from financeflow.domain.report import ReportService
from financeflow.domain.rollover import RolloverService
from financeflow.domain.backup import BackupService

__all__ = [
    "TransactionService",
    "FundService",
    "ProfileService",
    "HealthScoreService",
    "AnalyticsService",
    "DashboardService",
    "ReportService",
    "RolloverService",
    "BackupService",
]
