"""ASGI entrypoint for the FoodSafe API."""

from foodsafe.api.app import create_app
from foodsafe.containers import build_container

app = create_app(build_container())
