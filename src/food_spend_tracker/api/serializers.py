"""JSON serialization of domain objects with camelCase keys."""

from dataclasses import asdict

from fastapi.encoders import jsonable_encoder
from pydantic.alias_generators import to_camel

from food_spend_tracker.domain.metrics import DashboardMetrics
from food_spend_tracker.domain.records import LogEntry
from food_spend_tracker.domain.settings import SpendSettings


def serialize_log(record: LogEntry) -> dict[str, object]:
    """Return a record as a JSON-ready dict, tagged with its record type."""
    payload = {"record_type": record.record_type.value, **asdict(record)}
    return jsonable_encoder(_camelize(payload))


def serialize_metrics(metrics: DashboardMetrics) -> dict[str, object]:
    """Return dashboard metrics as a JSON-ready dict."""
    return jsonable_encoder(_camelize(asdict(metrics)))


def serialize_settings(settings: SpendSettings) -> dict[str, object]:
    """Return settings as a JSON-ready dict."""
    return jsonable_encoder(_camelize(asdict(settings)))


def _camelize(value: object) -> object:
    if isinstance(value, dict):
        return {to_camel(str(key)): _camelize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_camelize(item) for item in value]
    return value
