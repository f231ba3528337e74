"""Tests for the metrics engine."""

import math
from datetime import date

import pytest

from food_spend_tracker.domain.records import (
    BoughtBy,
    CookLog,
    GroceryLog,
    PaymentLog,
    RecordType,
)
from food_spend_tracker.domain.settings import SpendSettings
from food_spend_tracker.services.calculations import (
    amount_due,
    amount_due_as_of,
    avg_cook_cost_per_day,
    avg_groceries_cost_per_day,
    calculate_dashboard_metrics,
    days_food_lasted,
    effective_daily_cost,
    is_tip,
    monthly_breakdown,
    previous_cook_log,
    savings,
    total_food_spend,
    tracking_window,
)

SETTINGS = SpendSettings(base_fee=625, baseline_daily_avg=380)


def cook(day: str, fee: float | None = None) -> CookLog:
    return CookLog(date=day, menu="dal rice", base_fee=fee)


def grocery(day: str, amount: float, bought_by: BoughtBy = BoughtBy.STAFF) -> GroceryLog:
    return GroceryLog(date=day, category="veg", amount=amount, bought_by=bought_by)


def payment(day: str, amount: float, **kwargs) -> PaymentLog:  # type: ignore[no-untyped-def]
    return PaymentLog(date=day, amount_paid=amount, **kwargs)


def test_amount_due_excludes_tip_payment_by_remarks() -> None:
    records = [
        cook("2025-11-01", 625),
        grocery("2025-11-02", 750),
        payment("2025-11-03", 380, remarks="Tip"),
    ]

    assert amount_due(records, SETTINGS) == 1375
    assert total_food_spend(records, SETTINGS) == 1375


def test_amount_due_subtracts_regular_payments() -> None:
    records = [cook("2025-11-01"), payment("2025-11-02", 500, method="cash")]

    assert amount_due(records, SETTINGS) == 125


@pytest.mark.parametrize(
    "kwargs",
    [
        {"is_tip": True},
        {"remarks": "festival TIP"},
        {"notes": "small tip for extra dish"},
        {"remarks": "multiple items"},
    ],
)
def test_is_tip_detects_flag_and_text(kwargs) -> None:  # type: ignore[no-untyped-def]
    assert is_tip(payment("2025-11-02", 100, **kwargs))


def test_is_tip_false_for_plain_payment() -> None:
    assert not is_tip(payment("2025-11-02", 100, remarks="November", is_tip=False))


def test_me_groceries_count_toward_spend_but_not_amount_due() -> None:
    records = [
        cook("2025-11-01", 500),
        grocery("2025-11-01", 300, BoughtBy.STAFF),
        grocery("2025-11-02", 200, BoughtBy.ME),
    ]

    assert amount_due(records, SETTINGS) == 800
    assert total_food_spend(records, SETTINGS) == 1000


def test_cook_fee_falls_back_to_settings_default() -> None:
    records = [cook("2025-11-01"), cook("2025-11-03", 400)]

    assert total_food_spend(records, SETTINGS) == 1025


def test_amount_due_as_of_is_inclusive() -> None:
    records = [
        cook("2025-11-01", 600),
        payment("2025-11-05", 600),
        cook("2025-11-05", 600),
        cook("2025-11-09", 600),
    ]

    assert amount_due_as_of(records, SETTINGS, "2025-11-04") == 600
    assert amount_due_as_of(records, SETTINGS, "2025-11-05") == 600
    assert amount_due_as_of(records, SETTINGS, "2025-11-09") == 1200


def test_tracking_window_empty_ledger_uses_today() -> None:
    today = date(2025, 11, 20)
    window = tracking_window([], SpendSettings(), today=today)

    assert window.start_date == "2025-11-20"
    assert window.end_date == "2025-11-20"
    assert window.days == 1


def test_tracking_window_empty_ledger_uses_override_start() -> None:
    settings = SpendSettings(tracking_start_date="2025-11-01")
    window = tracking_window([], settings, today=date(2025, 11, 11))

    assert window.start_date == "2025-11-01"
    assert window.days == 10


def test_tracking_window_spans_records_and_filters_by_type() -> None:
    records = [cook("2025-11-01"), grocery("2025-11-04", 100), cook("2025-11-15")]

    window = tracking_window(records, SETTINGS)
    groceries_only = tracking_window(records, SETTINGS, RecordType.GROCERY)

    assert (window.start_date, window.end_date, window.days) == (
        "2025-11-01",
        "2025-11-15",
        14,
    )
    assert groceries_only.days == 1


def test_tracking_window_never_below_one_day() -> None:
    settings = SpendSettings(tracking_start_date="2025-12-01")

    window = tracking_window([cook("2025-11-01")], settings)

    assert window.days == 1


def test_avg_cook_cost_caps_long_gaps() -> None:
    five_days = [cook("2025-11-01", 600), cook("2025-11-06", 600)]
    twenty_days = [cook("2025-11-01", 600), cook("2025-11-21", 600)]

    assert avg_cook_cost_per_day(five_days, SETTINGS) == 150
    assert avg_cook_cost_per_day(twenty_days, SETTINGS) == 150


def test_avg_cook_cost_single_session_is_zero() -> None:
    assert avg_cook_cost_per_day([cook("2025-11-01", 625)], SETTINGS) == 0


def test_avg_cook_cost_averages_rates_not_totals() -> None:
    records = [
        cook("2025-11-03", 600),
        cook("2025-11-01", 600),
        cook("2025-11-06", 900),
    ]

    # rates: 600 / 2 and 600 / 3
    assert avg_cook_cost_per_day(records, SETTINGS) == 250


def test_avg_cook_cost_skips_same_day_and_zero_fee_pairs() -> None:
    records = [
        cook("2025-11-01", 0),
        cook("2025-11-03", 600),
        cook("2025-11-03", 600),
        cook("2025-11-05", 600),
    ]

    assert avg_cook_cost_per_day(records, SpendSettings(base_fee=0)) == 300


def test_avg_groceries_cost_uses_grocery_window() -> None:
    records = [
        cook("2025-10-01"),
        grocery("2025-11-01", 500, BoughtBy.STAFF),
        grocery("2025-11-11", 500, BoughtBy.ME),
    ]

    assert avg_groceries_cost_per_day(records, SETTINGS) == 100
    assert avg_groceries_cost_per_day([cook("2025-11-01")], SETTINGS) == 0


def test_savings_can_be_negative() -> None:
    settings = SpendSettings(
        baseline_daily_low=360, baseline_daily_high=400, baseline_daily_avg=380
    )

    result = savings(420, settings)

    assert result.daily == -40
    assert result.monthly == -1200
    assert result.vs_low == -60
    assert result.vs_high == -20


def test_monthly_breakdown_groups_and_orders_months() -> None:
    records = [
        grocery("2025-11-02", 200, BoughtBy.ME),
        cook("2025-10-30", 500),
        payment("2025-11-03", 1000),
        cook("2025-11-01", 500),
        cook("2024-12-31", 500),
    ]

    breakdown = monthly_breakdown(records, SETTINGS)

    assert [entry.month for entry in breakdown] == ["Dec 2024", "Oct 2025", "Nov 2025"]
    november = breakdown[-1]
    assert november.year == 2025
    assert november.month_name == "Nov"
    assert november.total_spend == 700
    assert november.cook_count == 1
    assert november.grocery_count == 1


def test_days_food_lasted_and_previous_cook() -> None:
    records = [cook("2025-11-01"), cook("2025-11-04"), payment("2025-11-05", 10)]

    previous = previous_cook_log(records, "2025-11-06")

    assert previous is not None
    assert previous.date == "2025-11-04"
    assert previous_cook_log(records, "2025-11-01") is None
    assert days_food_lasted("2025-11-06", "2025-11-04") == 2
    assert days_food_lasted("2025-11-06", None) is None
    assert days_food_lasted("2025-11-04", "2025-11-04") is None


def test_dashboard_metrics_two_cook_scenario() -> None:
    records = [cook("2025-11-09", 625), cook("2025-11-01", 625)]

    metrics = calculate_dashboard_metrics(records, SETTINGS, today=date(2025, 11, 20))

    assert metrics.avg_cook_cost_per_day == 156.25
    assert metrics.avg_groceries_cost_per_day == 0
    assert metrics.effective_daily_cost == 156.25
    assert metrics.savings.daily == 223.75
    assert metrics.savings.monthly == 6712.5
    assert metrics.tracking_window.days == 8
    assert metrics.stats.total_cook_sessions == 2
    assert metrics.baseline_cost.avg == 380


def test_dashboard_metrics_this_month_uses_calendar_month() -> None:
    records = [
        cook("2025-10-31", 625),
        cook("2025-11-01", 625),
        grocery("2025-11-02", 750),
        payment("2025-11-03", 380, remarks="Tip"),
    ]

    metrics = calculate_dashboard_metrics(records, SETTINGS, today=date(2025, 11, 5))

    assert metrics.total_food_spend.this_month == 1375
    assert metrics.total_food_spend.all_time == 2000
    assert metrics.amount_due == 2000
    assert metrics.stats.total_payments == 1
    assert metrics.stats.total_groceries == 1


def test_dashboard_metrics_is_idempotent() -> None:
    records = [
        cook("2025-11-01", 625),
        cook("2025-11-04"),
        grocery("2025-11-02", 750),
        payment("2025-11-03", 1000),
    ]
    today = date(2025, 11, 10)

    first = calculate_dashboard_metrics(records, SETTINGS, today=today)
    second = calculate_dashboard_metrics(records, SETTINGS, today=today)

    assert first == second


def test_dashboard_metrics_empty_ledger() -> None:
    metrics = calculate_dashboard_metrics([], SpendSettings(), today=date(2025, 1, 1))

    assert metrics.amount_due == 0
    assert metrics.monthly_breakdown == []
    assert metrics.tracking_window.days == 1
    assert metrics.savings.daily == 380


def test_effective_daily_cost_sums_cook_and_grocery_rates() -> None:
    records = [
        cook("2025-11-01", 600),
        cook("2025-11-03", 600),
        grocery("2025-11-01", 200),
        grocery("2025-11-05", 200, BoughtBy.ME),
    ]

    assert effective_daily_cost(records, SETTINGS) == 400


def test_malformed_amounts_count_as_zero() -> None:
    records = [
        cook("2025-11-01", 600),
        cook("2025-11-02", float("nan")),
        grocery("2025-11-02", float("nan")),
        grocery("2025-11-03", float("inf")),
        grocery("2025-11-03", None),  # type: ignore[arg-type]
        grocery("2025-11-04", "750"),  # type: ignore[arg-type]
        grocery("2025-11-04", True),  # type: ignore[arg-type]
        payment("2025-11-05", "100"),  # type: ignore[arg-type]
        payment("2025-11-05", None),  # type: ignore[arg-type]
        payment("2025-11-05", float("inf")),
    ]

    metrics = calculate_dashboard_metrics(records, SETTINGS, today=date(2025, 11, 10))

    assert amount_due(records, SETTINGS) == 600
    assert total_food_spend(records, SETTINGS) == 600
    assert metrics.amount_due == 600
    assert metrics.total_food_spend.this_month == 600
    assert metrics.avg_groceries_cost_per_day == 0
    assert metrics.monthly_breakdown[0].total_spend == 600
    for value in (
        metrics.avg_cook_cost_per_day,
        metrics.effective_daily_cost,
        metrics.savings.daily,
        metrics.savings.monthly,
    ):
        assert math.isfinite(value)


def test_tip_payments_excluded_regardless_of_sign() -> None:
    records = [
        cook("2025-11-01", 600),
        payment("2025-11-02", -200, remarks="tip"),
        payment("2025-11-03", -50, is_tip=True),
        payment("2025-11-04", 300, notes="Tip for guests"),
    ]

    assert amount_due(records, SETTINGS) == 600
