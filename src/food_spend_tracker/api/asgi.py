"""ASGI entrypoint for the food spend tracker API."""

from food_spend_tracker.api.app import create_app
from food_spend_tracker.containers import build_container

app = create_app(build_container())
