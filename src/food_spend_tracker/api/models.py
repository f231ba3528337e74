"""Pydantic models for API request payloads."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from food_spend_tracker.domain.records import (
    BoughtBy,
    CookLog,
    GroceryLog,
    PaymentLog,
)
from food_spend_tracker.domain.settings import (
    DEFAULT_BASE_FEE,
    DEFAULT_BASELINE_DAILY_AVG,
    DEFAULT_BASELINE_DAILY_HIGH,
    DEFAULT_BASELINE_DAILY_LOW,
    SpendSettings,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CookLogPayload(_CamelModel):
    """Cook log payload."""

    record_type: Literal["COOK"]
    date: str
    menu: str
    base_fee: float | None = None
    notes: str | None = None

    def to_record(self) -> CookLog:
        return CookLog(
            date=self.date,
            menu=self.menu,
            base_fee=self.base_fee,
            notes=self.notes or None,
        )


class GroceryLogPayload(_CamelModel):
    """Grocery log payload."""

    record_type: Literal["GROCERY"]
    date: str
    category: str = ""
    amount: float
    bought_by: BoughtBy
    linked_cook_id: UUID | None = None
    notes: str | None = None

    def to_record(self) -> GroceryLog:
        return GroceryLog(
            date=self.date,
            category=self.category,
            amount=self.amount,
            bought_by=self.bought_by,
            linked_cook_id=self.linked_cook_id,
            notes=self.notes or None,
        )


class PaymentLogPayload(_CamelModel):
    """Payment log payload."""

    record_type: Literal["PAYMENT"]
    date: str
    amount_paid: float
    method: str | None = None
    remarks: str | None = None
    is_tip: bool | None = None
    notes: str | None = None

    def to_record(self) -> PaymentLog:
        return PaymentLog(
            date=self.date,
            amount_paid=self.amount_paid,
            method=self.method or None,
            remarks=self.remarks or None,
            is_tip=self.is_tip,
            notes=self.notes or None,
        )


LogPayload = CookLogPayload | GroceryLogPayload | PaymentLogPayload


class SettingsPayload(_CamelModel):
    """Settings document payload."""

    base_fee: float = DEFAULT_BASE_FEE
    baseline_daily_low: float = DEFAULT_BASELINE_DAILY_LOW
    baseline_daily_high: float = DEFAULT_BASELINE_DAILY_HIGH
    baseline_daily_avg: float = DEFAULT_BASELINE_DAILY_AVG
    tracking_start_date: str | None = None

    def to_settings(self) -> SpendSettings:
        return SpendSettings(
            base_fee=self.base_fee,
            baseline_daily_low=self.baseline_daily_low,
            baseline_daily_high=self.baseline_daily_high,
            baseline_daily_avg=self.baseline_daily_avg,
            tracking_start_date=self.tracking_start_date or None,
        )
