"""Settings resolution and persistence."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from food_spend_tracker.config import AppConfig
from food_spend_tracker.domain.errors import SettingsValidationError
from food_spend_tracker.domain.settings import SpendSettings

_logger = logging.getLogger(__name__)


class SettingsRepository(Protocol):
    """Persistence interface for the single settings document."""

    def get_settings(self) -> SpendSettings | None:
        """Return the stored settings, if any."""

    def save_settings(self, settings: SpendSettings) -> None:
        """Insert or replace the settings document."""


def settings_from_config(config: AppConfig) -> SpendSettings:
    """Build settings from environment config, filling gaps with defaults."""
    defaults = SpendSettings()
    return SpendSettings(
        base_fee=_first(config.base_fee, defaults.base_fee),
        baseline_daily_low=_first(
            config.baseline_daily_low, defaults.baseline_daily_low
        ),
        baseline_daily_high=_first(
            config.baseline_daily_high, defaults.baseline_daily_high
        ),
        baseline_daily_avg=_first(
            config.baseline_daily_avg, defaults.baseline_daily_avg
        ),
        tracking_start_date=config.tracking_start_date or None,
    )


def validate_settings(settings: SpendSettings) -> None:
    """Raise SettingsValidationError when settings cannot be saved.

    The average baseline is only required to be non-negative; it is not
    checked against the low/high range.
    """
    if settings.base_fee < 0:
        raise SettingsValidationError("Base fee must be non-negative")
    if (
        settings.baseline_daily_low < 0
        or settings.baseline_daily_high < 0
        or settings.baseline_daily_avg < 0
    ):
        raise SettingsValidationError("Baseline values must be non-negative")
    if settings.baseline_daily_low > settings.baseline_daily_high:
        raise SettingsValidationError(
            "Baseline low must be less than or equal to baseline high"
        )
    if settings.tracking_start_date:
        try:
            date.fromisoformat(settings.tracking_start_date)
        except ValueError as exc:
            raise SettingsValidationError(
                "Invalid tracking start date format"
            ) from exc


@dataclass
class SettingsService:
    """Resolves settings from the store, then env config, then defaults."""

    repository: SettingsRepository
    fallback: SpendSettings = field(default_factory=SpendSettings)

    def resolve(self) -> SpendSettings:
        """Return fully populated settings for one calculation."""
        stored = self._load()
        if stored is not None:
            return stored
        return self.fallback

    def get_stored(self) -> SpendSettings:
        """Return the stored settings or the hardcoded defaults."""
        return self._load() or SpendSettings()

    def save(self, settings: SpendSettings) -> SpendSettings:
        """Validate and persist settings."""
        validate_settings(settings)
        self.repository.save_settings(settings)
        _logger.info(
            "Settings saved: base_fee=%s baseline=%s/%s/%s",
            settings.base_fee,
            settings.baseline_daily_low,
            settings.baseline_daily_avg,
            settings.baseline_daily_high,
        )
        return settings

    def _load(self) -> SpendSettings | None:
        try:
            return self.repository.get_settings()
        except Exception:
            _logger.warning("Failed to read stored settings", exc_info=True)
            return None


def _first(value: float | None, default: float) -> float:
    return default if value is None else value
