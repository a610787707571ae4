"""ASGI entrypoint for the BiteBuddy API."""

from bitebuddy.api.app import create_app
from bitebuddy.containers import build_container

app = create_app(build_container())
