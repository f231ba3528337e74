"""Metrics engine: pure derivations from ledger records and settings.

Nothing in here performs I/O or mutates its inputs. Dates are ISO
``YYYY-MM-DD`` strings, so plain string comparison follows calendar order.
"""

import math
from collections.abc import Iterable, Sequence
from datetime import date

from food_spend_tracker.domain.metrics import (
    BaselineCost,
    DashboardMetrics,
    FoodSpendTotals,
    LedgerStats,
    MonthlySpend,
    Savings,
    TrackingWindow,
)
from food_spend_tracker.domain.records import (
    BoughtBy,
    CookLog,
    GroceryLog,
    LogEntry,
    PaymentLog,
    RecordType,
)
from food_spend_tracker.domain.settings import SpendSettings

MAX_GAP_DAYS = 4
LONG_GAP_DAYS = 5
DAYS_PER_MONTH = 30
TIP_MARKER = "tip"

_MONTH_NAMES = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def days_food_lasted(cook_date: str, previous_cook_date: str | None) -> int | None:
    """Return days since the previous cook, or None when not computable."""
    if not previous_cook_date:
        return None
    gap = _days_between(previous_cook_date, cook_date)
    return gap if gap > 0 else None


def previous_cook_log(records: Iterable[LogEntry], before_date: str) -> CookLog | None:
    """Return the latest cook log dated strictly before ``before_date``."""
    earlier = [log for log in _cook_logs(records) if log.date < before_date]
    if not earlier:
        return None
    return max(earlier, key=lambda log: log.date)


def is_tip(payment: PaymentLog) -> bool:
    """Return True when a payment is a tip rather than a settlement."""
    remarks = (payment.remarks or "").lower()
    notes = (payment.notes or "").lower()
    return TIP_MARKER in remarks or TIP_MARKER in notes or payment.is_tip is True


def cook_fee(log: CookLog, settings: SpendSettings) -> float:
    """Return the fee charged for a cook session."""
    if log.base_fee is None:
        return _number(settings.base_fee)
    return _number(log.base_fee)


def amount_due(records: Iterable[LogEntry], settings: SpendSettings) -> float:
    """Cook fees plus staff-bought groceries, minus non-tip payments."""
    records = list(records)
    cook_fees = sum(cook_fee(log, settings) for log in _cook_logs(records))
    staff_groceries = sum(
        _number(log.amount)
        for log in _grocery_logs(records)
        if log.bought_by == BoughtBy.STAFF
    )
    payments = sum(
        _number(log.amount_paid)
        for log in _payment_logs(records)
        if not is_tip(log)
    )
    return cook_fees + staff_groceries - payments


def amount_due_as_of(
    records: Iterable[LogEntry], settings: SpendSettings, cutoff: str
) -> float:
    """Amount due counting only records dated on or before ``cutoff``."""
    return amount_due((log for log in records if log.date <= cutoff), settings)


def total_food_spend(records: Iterable[LogEntry], settings: SpendSettings) -> float:
    """Cook fees plus every grocery purchase, whoever paid for it."""
    records = list(records)
    cook_fees = sum(cook_fee(log, settings) for log in _cook_logs(records))
    groceries = sum(_number(log.amount) for log in _grocery_logs(records))
    return cook_fees + groceries


def tracking_window(
    records: Iterable[LogEntry],
    settings: SpendSettings,
    record_type: RecordType | None = None,
    today: date | None = None,
) -> TrackingWindow:
    """Return the span of days covered by the (optionally filtered) ledger."""
    today_iso = (today or date.today()).isoformat()
    dates = sorted(
        log.date
        for log in records
        if record_type is None or log.record_type == record_type
    )
    if dates:
        start_date = settings.tracking_start_date or dates[0]
        end_date = dates[-1]
    else:
        start_date = settings.tracking_start_date or today_iso
        end_date = today_iso
    days = max(1, _days_between(start_date, end_date))
    return TrackingWindow(start_date=start_date, end_date=end_date, days=days)


def avg_cook_cost_per_day(
    records: Iterable[LogEntry], settings: SpendSettings
) -> float:
    """Mean of per-session daily rates, fee divided by days until the next cook.

    The latest session has no successor yet and contributes no rate. Gaps of
    five days or more count as four.
    """
    cooks = sorted(_cook_logs(records), key=lambda log: log.date)
    rates: list[float] = []
    for current, following in zip(cooks, cooks[1:]):
        fee = cook_fee(current, settings)
        gap = _days_between(current.date, following.date)
        if gap >= LONG_GAP_DAYS:
            gap = MAX_GAP_DAYS
        if gap > 0 and fee > 0:
            rates.append(fee / gap)
    if not rates:
        return 0.0
    return sum(rates) / len(rates)


def avg_groceries_cost_per_day(
    records: Iterable[LogEntry],
    settings: SpendSettings,
    today: date | None = None,
) -> float:
    """All grocery spend spread over the grocery tracking window."""
    records = list(records)
    groceries = _grocery_logs(records)
    if not groceries:
        return 0.0
    total = sum(_number(log.amount) for log in groceries)
    window = tracking_window(records, settings, RecordType.GROCERY, today)
    return total / window.days


def effective_daily_cost(
    records: Iterable[LogEntry],
    settings: SpendSettings,
    today: date | None = None,
) -> float:
    """Cook rate plus grocery rate."""
    records = list(records)
    return avg_cook_cost_per_day(records, settings) + avg_groceries_cost_per_day(
        records, settings, today
    )


def savings(daily_cost: float, settings: SpendSettings) -> Savings:
    """Compare a daily cost against the baseline range."""
    daily = settings.baseline_daily_avg - daily_cost
    return Savings(
        daily=daily,
        monthly=daily * DAYS_PER_MONTH,
        vs_low=settings.baseline_daily_low - daily_cost,
        vs_high=settings.baseline_daily_high - daily_cost,
    )


def monthly_breakdown(
    records: Iterable[LogEntry], settings: SpendSettings
) -> list[MonthlySpend]:
    """Spend and session counts per calendar month, oldest first."""
    grouped: dict[str, list[LogEntry]] = {}
    for log in records:
        grouped.setdefault(_month_key(log.date), []).append(log)

    breakdown = []
    for key in sorted(grouped):
        month_logs = grouped[key]
        year, month = key.split("-")
        month_name = _MONTH_NAMES[int(month) - 1]
        breakdown.append(
            MonthlySpend(
                month=f"{month_name} {year}",
                year=int(year),
                month_name=month_name,
                total_spend=total_food_spend(month_logs, settings),
                cook_count=len(_cook_logs(month_logs)),
                grocery_count=len(_grocery_logs(month_logs)),
            )
        )
    return breakdown


def calculate_dashboard_metrics(
    records: Sequence[LogEntry],
    settings: SpendSettings,
    today: date | None = None,
) -> DashboardMetrics:
    """Compute every dashboard metric from one snapshot of the ledger."""
    today = today or date.today()
    records = list(records)
    current_month = _month_key(today.isoformat())
    this_month = [log for log in records if _month_key(log.date) == current_month]

    cook_rate = avg_cook_cost_per_day(records, settings)
    grocery_rate = avg_groceries_cost_per_day(records, settings, today)
    daily_cost = cook_rate + grocery_rate

    return DashboardMetrics(
        amount_due=amount_due(records, settings),
        total_food_spend=FoodSpendTotals(
            this_month=total_food_spend(this_month, settings),
            all_time=total_food_spend(records, settings),
        ),
        monthly_breakdown=monthly_breakdown(records, settings),
        effective_daily_cost=daily_cost,
        avg_cook_cost_per_day=cook_rate,
        avg_groceries_cost_per_day=grocery_rate,
        baseline_cost=BaselineCost(
            low=settings.baseline_daily_low,
            high=settings.baseline_daily_high,
            avg=settings.baseline_daily_avg,
        ),
        savings=savings(daily_cost, settings),
        tracking_window=tracking_window(records, settings, today=today),
        stats=LedgerStats(
            total_cook_sessions=len(_cook_logs(records)),
            total_groceries=len(_grocery_logs(records)),
            total_payments=len(_payment_logs(records)),
        ),
    )


def _cook_logs(records: Iterable[LogEntry]) -> list[CookLog]:
    return [log for log in records if isinstance(log, CookLog)]


def _grocery_logs(records: Iterable[LogEntry]) -> list[GroceryLog]:
    return [log for log in records if isinstance(log, GroceryLog)]


def _payment_logs(records: Iterable[LogEntry]) -> list[PaymentLog]:
    return [log for log in records if isinstance(log, PaymentLog)]


def _days_between(start: str, end: str) -> int:
    return (date.fromisoformat(end) - date.fromisoformat(start)).days


def _month_key(iso_date: str) -> str:
    return iso_date[:7]


def _number(value: object) -> float:
    """Coerce a stored amount to float, treating junk as zero."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return float(value)
