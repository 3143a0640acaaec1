"""Configuration module exports (constants and env names only)."""

from .secrets import ENV_ACCESS_TOKEN
from .websocket import CLIENT_EVENTS, WS_ENDPOINT_PATH, DEFAULT_WS_BASE_URL

__all__ = [
    "CLIENT_EVENTS",
    "DEFAULT_WS_BASE_URL",
    "ENV_ACCESS_TOKEN",
    "WS_ENDPOINT_PATH",
]
