"""Domain models for ledger records."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class RecordType(StrEnum):
    """Tag that discriminates ledger record variants."""

    COOK = "COOK"
    GROCERY = "GROCERY"
    PAYMENT = "PAYMENT"


class BoughtBy(StrEnum):
    """Who paid for a grocery purchase."""

    STAFF = "STAFF"
    ME = "ME"


@dataclass(frozen=True, kw_only=True)
class CookLog:
    """A cooking session and the fee charged for it."""

    id: UUID | None = None
    date: str
    menu: str
    base_fee: float | None = None
    days_food_lasted: int | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def record_type(self) -> RecordType:
        return RecordType.COOK


@dataclass(frozen=True, kw_only=True)
class GroceryLog:
    """A grocery purchase, bought either by the staff or by the household."""

    id: UUID | None = None
    date: str
    category: str
    amount: float
    bought_by: BoughtBy
    reimbursable: bool = False
    linked_cook_id: UUID | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def record_type(self) -> RecordType:
        return RecordType.GROCERY


@dataclass(frozen=True, kw_only=True)
class PaymentLog:
    """Money handed to the cook."""

    id: UUID | None = None
    date: str
    amount_paid: float
    method: str | None = None
    remarks: str | None = None
    is_tip: bool | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def record_type(self) -> RecordType:
        return RecordType.PAYMENT


LogEntry = CookLog | GroceryLog | PaymentLog
