"""Supabase repository for ledger records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from food_spend_tracker.domain.records import (
    BoughtBy,
    CookLog,
    GroceryLog,
    LogEntry,
    PaymentLog,
    RecordType,
)
from food_spend_tracker.services.ledger import LedgerRepository

_TABLE = "logs"


@dataclass
class SupabaseLedgerRepository(LedgerRepository):
    """Supabase implementation storing every record type in one table."""

    client: Client

    def insert_record(self, record: LogEntry) -> LogEntry:
        """Insert a record row and return the stored record."""
        response = self.client.table(_TABLE).insert(_to_row(record)).execute()
        if not response.data:
            raise RuntimeError("Failed to create log entry")
        return _parse_row(response.data[0])

    def update_record(self, record_id: UUID, record: LogEntry) -> LogEntry | None:
        """Replace a record row by id."""
        response = (
            self.client.table(_TABLE)
            .update(_to_row(record))
            .eq("id", str(record_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_record(self, record_id: UUID) -> bool:
        """Delete a record row by id."""
        response = self.client.table(_TABLE).delete().eq("id", str(record_id)).execute()
        return bool(response.data)

    def get_record(self, record_id: UUID) -> LogEntry | None:
        """Return a record by id."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(record_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_records(
        self,
        record_type: RecordType | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> list[LogEntry]:
        """Return records newest first, optionally filtered."""
        query = self.client.table(_TABLE).select("*")
        if record_type is not None:
            query = query.eq("record_type", record_type.value)
        if date_from:
            query = query.gte("date", date_from)
        if date_to:
            query = query.lte("date", date_to)
        response = (
            query.order("date", desc=True).order("created_at", desc=True).execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _to_row(record: LogEntry) -> dict[str, object]:
    row: dict[str, object] = {
        "record_type": record.record_type.value,
        "date": record.date,
        "notes": record.notes,
        "created_at": _isoformat(record.created_at),
        "updated_at": _isoformat(record.updated_at),
    }
    if isinstance(record, CookLog):
        row.update(
            {
                "menu": record.menu,
                "base_fee": record.base_fee,
                "days_food_lasted": record.days_food_lasted,
            }
        )
    elif isinstance(record, GroceryLog):
        row.update(
            {
                "category": record.category,
                "amount": record.amount,
                "bought_by": record.bought_by.value,
                "reimbursable": record.reimbursable,
                "linked_cook_id": (
                    str(record.linked_cook_id) if record.linked_cook_id else None
                ),
            }
        )
    elif isinstance(record, PaymentLog):
        row.update(
            {
                "amount_paid": record.amount_paid,
                "method": record.method,
                "remarks": record.remarks,
                "is_tip": record.is_tip,
            }
        )
    return row


def _parse_row(row: dict[str, object]) -> LogEntry:
    common = {
        "id": UUID(str(row["id"])) if row.get("id") else None,
        "date": str(row.get("date", "")),
        "notes": row.get("notes"),
        "created_at": _parse_timestamp(row.get("created_at")),
        "updated_at": _parse_timestamp(row.get("updated_at")),
    }
    record_type = RecordType(str(row.get("record_type")))
    if record_type is RecordType.COOK:
        base_fee = row.get("base_fee")
        lasted = row.get("days_food_lasted")
        return CookLog(
            **common,
            menu=str(row.get("menu") or ""),
            base_fee=_as_float(base_fee) if base_fee is not None else None,
            days_food_lasted=int(lasted) if lasted is not None else None,
        )
    if record_type is RecordType.GROCERY:
        linked = row.get("linked_cook_id")
        return GroceryLog(
            **common,
            category=str(row.get("category") or ""),
            amount=_as_float(row.get("amount")),
            bought_by=BoughtBy(str(row.get("bought_by"))),
            reimbursable=bool(row.get("reimbursable", False)),
            linked_cook_id=UUID(str(linked)) if linked else None,
        )
    return PaymentLog(
        **common,
        amount_paid=_as_float(row.get("amount_paid")),
        method=row.get("method"),
        remarks=row.get("remarks"),
        is_tip=row.get("is_tip"),
    )


def _as_float(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
