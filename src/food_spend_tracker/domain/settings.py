"""Domain model for calculation settings."""

from dataclasses import dataclass

DEFAULT_BASE_FEE = 0.0
DEFAULT_BASELINE_DAILY_LOW = 360.0
DEFAULT_BASELINE_DAILY_HIGH = 400.0
DEFAULT_BASELINE_DAILY_AVG = 380.0


@dataclass(frozen=True)
class SpendSettings:
    """Fully populated settings consumed by the metrics engine."""

    base_fee: float = DEFAULT_BASE_FEE
    baseline_daily_low: float = DEFAULT_BASELINE_DAILY_LOW
    baseline_daily_high: float = DEFAULT_BASELINE_DAILY_HIGH
    baseline_daily_avg: float = DEFAULT_BASELINE_DAILY_AVG
    tracking_start_date: str | None = None
