"""Supabase repository for the settings document."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from food_spend_tracker.domain.settings import SpendSettings
from food_spend_tracker.services.settings import SettingsRepository

SETTINGS_DOC_ID = "app_settings"


@dataclass
class SupabaseSettingsRepository(SettingsRepository):
    """Supabase implementation keeping settings in a single row."""

    client: Client

    def get_settings(self) -> SpendSettings | None:
        """Return the stored settings row, if present."""
        response = (
            self.client.table("settings")
            .select(
                "base_fee, baseline_daily_low, baseline_daily_high, "
                "baseline_daily_avg, tracking_start_date"
            )
            .eq("id", SETTINGS_DOC_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        defaults = SpendSettings()
        return SpendSettings(
            base_fee=_float_or(row, "base_fee", defaults.base_fee),
            baseline_daily_low=_float_or(
                row, "baseline_daily_low", defaults.baseline_daily_low
            ),
            baseline_daily_high=_float_or(
                row, "baseline_daily_high", defaults.baseline_daily_high
            ),
            baseline_daily_avg=_float_or(
                row, "baseline_daily_avg", defaults.baseline_daily_avg
            ),
            tracking_start_date=row.get("tracking_start_date") or None,
        )

    def save_settings(self, settings: SpendSettings) -> None:
        """Upsert the settings row."""
        self.client.table("settings").upsert(
            {
                "id": SETTINGS_DOC_ID,
                "base_fee": settings.base_fee,
                "baseline_daily_low": settings.baseline_daily_low,
                "baseline_daily_high": settings.baseline_daily_high,
                "baseline_daily_avg": settings.baseline_daily_avg,
                "tracking_start_date": settings.tracking_start_date,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()


def _float_or(row: dict[str, object], key: str, default: float) -> float:
    value = row.get(key)
    if value is None:
        return default
    return float(value)  # type: ignore[arg-type]
