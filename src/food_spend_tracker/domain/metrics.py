"""Domain models for dashboard metrics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodSpendTotals:
    """Cook fees plus all groceries, for this month and all time."""

    this_month: float
    all_time: float


@dataclass(frozen=True)
class MonthlySpend:
    """Spend summary for one calendar month."""

    month: str
    year: int
    month_name: str
    total_spend: float
    cook_count: int
    grocery_count: int


@dataclass(frozen=True)
class BaselineCost:
    """Reference daily cost range."""

    low: float
    high: float
    avg: float


@dataclass(frozen=True)
class Savings:
    """Savings against the baseline; negative values mean overspend."""

    daily: float
    monthly: float
    vs_low: float
    vs_high: float


@dataclass(frozen=True)
class TrackingWindow:
    """Date span covered by the ledger."""

    start_date: str
    end_date: str
    days: int


@dataclass(frozen=True)
class LedgerStats:
    """Record counts per type."""

    total_cook_sessions: int
    total_groceries: int
    total_payments: int


@dataclass(frozen=True)
class DashboardMetrics:
    """Everything the dashboard shows, derived from the ledger."""

    amount_due: float
    total_food_spend: FoodSpendTotals
    monthly_breakdown: list[MonthlySpend]
    effective_daily_cost: float
    avg_cook_cost_per_day: float
    avg_groceries_cost_per_day: float
    baseline_cost: BaselineCost
    savings: Savings
    tracking_window: TrackingWindow
    stats: LedgerStats
