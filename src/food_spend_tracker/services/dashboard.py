"""Dashboard service wiring the ledger and settings into the metrics engine."""

from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from food_spend_tracker.domain.metrics import DashboardMetrics
from food_spend_tracker.services.calculations import (
    amount_due_as_of,
    calculate_dashboard_metrics,
)
from food_spend_tracker.services.ledger import LedgerRepository
from food_spend_tracker.services.settings import SettingsService


@dataclass
class DashboardService:
    """Computes dashboard metrics from the current ledger snapshot."""

    ledger_repository: LedgerRepository
    settings_service: SettingsService
    timezone_name: str = "UTC"

    def get_metrics(self) -> DashboardMetrics:
        """Return metrics for the whole ledger as of today."""
        records = self.ledger_repository.list_records()
        settings = self.settings_service.resolve()
        return calculate_dashboard_metrics(records, settings, today=self.today())

    def amount_due_as_of(self, cutoff: str) -> float:
        """Return what was owed counting records up to ``cutoff`` inclusive."""
        records = self.ledger_repository.list_records()
        settings = self.settings_service.resolve()
        return amount_due_as_of(records, settings, cutoff)

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()
