"""Shared test fixtures."""

import dataclasses
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from food_spend_tracker.config import AppConfig
from food_spend_tracker.containers import AppContainer
from food_spend_tracker.domain.records import LogEntry, RecordType
from food_spend_tracker.domain.settings import SpendSettings
from food_spend_tracker.services.dashboard import DashboardService
from food_spend_tracker.services.ledger import LedgerRepository, LedgerService
from food_spend_tracker.services.settings import SettingsRepository, SettingsService

_EPOCH = datetime.min.replace(tzinfo=UTC)


@dataclass
class InMemoryLedgerRepository(LedgerRepository):
    """In-memory ledger repository for tests."""

    records: dict[UUID, LogEntry] = field(default_factory=dict)

    def insert_record(self, record: LogEntry) -> LogEntry:
        stored = dataclasses.replace(record, id=uuid4())
        self.records[stored.id] = stored
        return stored

    def update_record(self, record_id: UUID, record: LogEntry) -> LogEntry | None:
        if record_id not in self.records:
            return None
        stored = dataclasses.replace(record, id=record_id)
        self.records[record_id] = stored
        return stored

    def delete_record(self, record_id: UUID) -> bool:
        return self.records.pop(record_id, None) is not None

    def get_record(self, record_id: UUID) -> LogEntry | None:
        return self.records.get(record_id)

    def list_records(
        self,
        record_type: RecordType | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> list[LogEntry]:
        results = [
            record
            for record in self.records.values()
            if (record_type is None or record.record_type == record_type)
            and (date_from is None or record.date >= date_from)
            and (date_to is None or record.date <= date_to)
        ]
        return sorted(
            results,
            key=lambda record: (record.date, record.created_at or _EPOCH),
            reverse=True,
        )


@dataclass
class InMemorySettingsRepository(SettingsRepository):
    """In-memory settings repository for tests."""

    stored: SpendSettings | None = None
    saves: int = 0

    def get_settings(self) -> SpendSettings | None:
        return self.stored

    def save_settings(self, settings: SpendSettings) -> None:
        self.stored = settings
        self.saves += 1


@dataclass
class FailingSettingsRepository(SettingsRepository):
    """Settings repository whose reads always fail."""

    def get_settings(self) -> SpendSettings | None:
        raise ConnectionError("settings store unavailable")

    def save_settings(self, settings: SpendSettings) -> None:
        raise ConnectionError("settings store unavailable")


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def ledger_repository() -> InMemoryLedgerRepository:
    return InMemoryLedgerRepository()


@pytest.fixture
def settings_repository() -> InMemorySettingsRepository:
    return InMemorySettingsRepository()


@pytest.fixture
def settings_service(
    settings_repository: InMemorySettingsRepository,
) -> SettingsService:
    return SettingsService(settings_repository)


@pytest.fixture
def ledger_service(
    ledger_repository: InMemoryLedgerRepository, settings_service: SettingsService
) -> LedgerService:
    return LedgerService(ledger_repository, settings_service)


@pytest.fixture
def container(
    config: AppConfig,
    ledger_repository: InMemoryLedgerRepository,
    settings_service: SettingsService,
    ledger_service: LedgerService,
) -> AppContainer:
    return AppContainer(
        config=config,
        settings_service=settings_service,
        ledger_service=ledger_service,
        dashboard_service=DashboardService(
            ledger_repository=ledger_repository,
            settings_service=settings_service,
        ),
    )
