"""ASGI entrypoint for the coaching dashboard API."""

from coaching_dashboard.api.app import create_app
from coaching_dashboard.containers import build_container

app = create_app(build_container())
