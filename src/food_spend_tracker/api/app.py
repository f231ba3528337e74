"""FastAPI application factory."""

import logging
from datetime import date
from uuid import UUID

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from food_spend_tracker.api.models import LogPayload, SettingsPayload
from food_spend_tracker.api.serializers import (
    serialize_log,
    serialize_metrics,
    serialize_settings,
)
from food_spend_tracker.app_logging import configure_logging
from food_spend_tracker.containers import AppContainer
from food_spend_tracker.domain.errors import (
    LedgerValidationError,
    LogNotFoundError,
    SettingsValidationError,
)
from food_spend_tracker.domain.records import RecordType


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(LedgerValidationError)
    @app.exception_handler(SettingsValidationError)
    async def validation_error(_request: Request, exc: ValueError) -> JSONResponse:
        logger.warning("Rejected write: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    @app.exception_handler(LogNotFoundError)
    async def not_found(_request: Request, _exc: LogNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": "Log not found"}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/dashboard")
    def dashboard(request: Request) -> dict[str, object]:
        """Return dashboard metrics for the whole ledger."""
        state_container: AppContainer = request.app.state.container
        metrics = state_container.dashboard_service.get_metrics()
        return {"metrics": serialize_metrics(metrics)}

    @app.get("/api/dashboard/amount-due")
    def amount_due(
        request: Request, cutoff: date = Query(alias="date")
    ) -> dict[str, object]:
        """Return the amount owed counting records up to a date."""
        state_container: AppContainer = request.app.state.container
        value = state_container.dashboard_service.amount_due_as_of(cutoff.isoformat())
        return {"date": cutoff.isoformat(), "amountDue": value}

    @app.get("/api/logs")
    def list_logs(
        request: Request,
        record_type: RecordType | None = Query(default=None, alias="type"),
        date_from: str | None = Query(default=None, alias="from"),
        date_to: str | None = Query(default=None, alias="to"),
    ) -> dict[str, object]:
        """Return ledger entries, newest first."""
        state_container: AppContainer = request.app.state.container
        logs = state_container.ledger_service.list_logs(
            record_type, date_from, date_to
        )
        return {"logs": [serialize_log(log) for log in logs]}

    @app.post("/api/logs", status_code=status.HTTP_201_CREATED)
    def create_log(payload: LogPayload, request: Request) -> dict[str, object]:
        """Add an entry to the ledger."""
        state_container: AppContainer = request.app.state.container
        created = state_container.ledger_service.create_log(payload.to_record())
        return {"log": serialize_log(created)}

    @app.get("/api/logs/{log_id}")
    def get_log(log_id: UUID, request: Request) -> dict[str, object]:
        """Return a single ledger entry."""
        state_container: AppContainer = request.app.state.container
        return {"log": serialize_log(state_container.ledger_service.get_log(log_id))}

    @app.put("/api/logs/{log_id}")
    def update_log(
        log_id: UUID, payload: LogPayload, request: Request
    ) -> dict[str, object]:
        """Replace a ledger entry."""
        state_container: AppContainer = request.app.state.container
        updated = state_container.ledger_service.update_log(
            log_id, payload.to_record()
        )
        return {"message": "Log updated successfully", "log": serialize_log(updated)}

    @app.delete("/api/logs/{log_id}")
    def delete_log(log_id: UUID, request: Request) -> dict[str, str]:
        """Remove a ledger entry."""
        state_container: AppContainer = request.app.state.container
        state_container.ledger_service.delete_log(log_id)
        return {"message": "Log deleted successfully"}

    @app.get("/api/settings")
    def get_settings(request: Request) -> dict[str, object]:
        """Return the stored settings, or defaults when none are stored."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.settings_service.get_stored()
        return {"settings": serialize_settings(settings)}

    @app.put("/api/settings")
    def save_settings(
        payload: SettingsPayload, request: Request
    ) -> dict[str, object]:
        """Validate and store the settings document."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.settings_service.save(payload.to_settings())
        return {"settings": serialize_settings(saved)}

    return app
