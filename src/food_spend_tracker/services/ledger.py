"""Ledger service: validated writes and queries over log entries."""

import dataclasses
import logging
import math
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from food_spend_tracker.domain.errors import LedgerValidationError, LogNotFoundError
from food_spend_tracker.domain.records import (
    BoughtBy,
    CookLog,
    GroceryLog,
    LogEntry,
    PaymentLog,
    RecordType,
)
from food_spend_tracker.services.calculations import days_food_lasted, previous_cook_log
from food_spend_tracker.services.settings import SettingsService

_logger = logging.getLogger(__name__)


class LedgerRepository(Protocol):
    """Persistence interface for ledger records."""

    def insert_record(self, record: LogEntry) -> LogEntry:
        """Insert a record and return it with its assigned id."""

    def update_record(self, record_id: UUID, record: LogEntry) -> LogEntry | None:
        """Replace a record by id, returning None when it does not exist."""

    def delete_record(self, record_id: UUID) -> bool:
        """Delete a record by id, returning False when it does not exist."""

    def get_record(self, record_id: UUID) -> LogEntry | None:
        """Return a record by id, if present."""

    def list_records(
        self,
        record_type: RecordType | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> list[LogEntry]:
        """Return records, newest first, optionally filtered."""


@dataclass
class LedgerService:
    """Application service for adding, editing and removing log entries."""

    repository: LedgerRepository
    settings_service: SettingsService
    timezone_name: str = "UTC"

    def create_log(self, entry: LogEntry, today: date | None = None) -> LogEntry:
        """Validate a new entry, fill derived fields and store it."""
        _validate(entry, today or self._today())
        now = datetime.now(tz=UTC)
        if isinstance(entry, CookLog):
            base_fee = entry.base_fee
            if base_fee is None:
                base_fee = self.settings_service.resolve().base_fee
            previous = previous_cook_log(
                self.repository.list_records(RecordType.COOK), entry.date
            )
            entry = dataclasses.replace(
                entry,
                base_fee=base_fee,
                days_food_lasted=days_food_lasted(
                    entry.date, previous.date if previous else None
                ),
            )
        entry = dataclasses.replace(
            _with_reimbursable(entry), id=None, created_at=now, updated_at=now
        )
        created = self.repository.insert_record(entry)
        _logger.info(
            "Log created: id=%s type=%s date=%s",
            created.id,
            created.record_type,
            created.date,
        )
        return created

    def update_log(
        self, record_id: UUID, entry: LogEntry, today: date | None = None
    ) -> LogEntry:
        """Replace an existing entry.

        Days food lasted is recomputed only when a cook entry's date changes;
        neighbouring cook entries keep their stored value.
        """
        existing = self.repository.get_record(record_id)
        if existing is None:
            raise LogNotFoundError(str(record_id))
        _validate(entry, today or self._today())
        if isinstance(entry, CookLog):
            lasted = (
                existing.days_food_lasted if isinstance(existing, CookLog) else None
            )
            if entry.date != existing.date:
                others = [
                    log
                    for log in self.repository.list_records(RecordType.COOK)
                    if log.id != record_id
                ]
                previous = previous_cook_log(others, entry.date)
                lasted = days_food_lasted(
                    entry.date, previous.date if previous else None
                )
            entry = dataclasses.replace(entry, days_food_lasted=lasted)
        entry = dataclasses.replace(
            _with_reimbursable(entry),
            id=record_id,
            created_at=existing.created_at,
            updated_at=datetime.now(tz=UTC),
        )
        updated = self.repository.update_record(record_id, entry)
        if updated is None:
            raise LogNotFoundError(str(record_id))
        _logger.info("Log updated: id=%s type=%s", record_id, updated.record_type)
        return updated

    def delete_log(self, record_id: UUID) -> None:
        """Remove an entry from the ledger."""
        if not self.repository.delete_record(record_id):
            raise LogNotFoundError(str(record_id))
        _logger.info("Log deleted: id=%s", record_id)

    def get_log(self, record_id: UUID) -> LogEntry:
        """Return one entry by id."""
        record = self.repository.get_record(record_id)
        if record is None:
            raise LogNotFoundError(str(record_id))
        return record

    def list_logs(
        self,
        record_type: RecordType | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> list[LogEntry]:
        """Return entries newest first, optionally filtered by type and dates."""
        return self.repository.list_records(record_type, date_from, date_to)

    def _today(self) -> date:
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()


def _validate(entry: LogEntry, today: date) -> None:
    try:
        entry_date = date.fromisoformat(entry.date)
    except ValueError as exc:
        raise LedgerValidationError("Invalid date format") from exc
    if entry_date > today:
        raise LedgerValidationError("Date cannot be in the future")

    if isinstance(entry, CookLog):
        if not entry.menu or not entry.menu.strip():
            raise LedgerValidationError("Menu is required for cook log")
        if entry.base_fee is not None and not (
            math.isfinite(entry.base_fee) and entry.base_fee >= 0
        ):
            raise LedgerValidationError("Base fee must be non-negative")
    elif isinstance(entry, GroceryLog):
        if not _is_positive(entry.amount):
            raise LedgerValidationError("Amount must be a positive number")
    elif isinstance(entry, PaymentLog):
        if not _is_positive(entry.amount_paid):
            raise LedgerValidationError("amountPaid must be a positive number")


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _with_reimbursable(entry: LogEntry) -> LogEntry:
    if isinstance(entry, GroceryLog):
        return dataclasses.replace(
            entry, reimbursable=entry.bought_by == BoughtBy.STAFF
        )
    return entry
