"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from food_spend_tracker.adapters.supabase_ledger_repository import (
    SupabaseLedgerRepository,
)
from food_spend_tracker.adapters.supabase_settings_repository import (
    SupabaseSettingsRepository,
)
from food_spend_tracker.config import AppConfig
from food_spend_tracker.services.dashboard import DashboardService
from food_spend_tracker.services.ledger import LedgerService
from food_spend_tracker.services.settings import SettingsService, settings_from_config


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    config: AppConfig
    settings_service: SettingsService
    ledger_service: LedgerService
    dashboard_service: DashboardService


def build_container(config: AppConfig | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_config = config or AppConfig()
    supabase_client = create_client(
        resolved_config.supabase_url, resolved_config.supabase_service_key
    )
    ledger_repository = SupabaseLedgerRepository(supabase_client)
    settings_service = SettingsService(
        repository=SupabaseSettingsRepository(supabase_client),
        fallback=settings_from_config(resolved_config),
    )
    ledger_service = LedgerService(
        repository=ledger_repository,
        settings_service=settings_service,
        timezone_name=resolved_config.timezone,
    )
    dashboard_service = DashboardService(
        ledger_repository=ledger_repository,
        settings_service=settings_service,
        timezone_name=resolved_config.timezone,
    )
    return AppContainer(
        config=resolved_config,
        settings_service=settings_service,
        ledger_service=ledger_service,
        dashboard_service=dashboard_service,
    )
