"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class AppConfig(BaseSettings):
    """Application configuration loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    timezone: str = "UTC"
    environment: str = _ENVIRONMENT

    # Second tier of settings resolution, used when no settings are stored.
    base_fee: float | None = None
    baseline_daily_low: float | None = None
    baseline_daily_high: float | None = None
    baseline_daily_avg: float | None = None
    tracking_start_date: str | None = None

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
