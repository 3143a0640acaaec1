"""Environment parsing for client settings."""

from __future__ import annotations

import os
from typing import Any

from assistant_ws.state.settings import ConnectionConfig
from assistant_ws.client.endpoint import build_ws_url
from assistant_ws.config.websocket import (
    ENV_WS_URL,
    ENV_WS_DEBUG,
    DEFAULT_WS_DEBUG,
    DEFAULT_WS_BASE_URL,
    ENV_WS_MAX_MESSAGE_SIZE,
    ENV_WS_RECONNECT_BACKOFF,
    ENV_WS_RECONNECT_ATTEMPTS,
    ENV_WS_MAX_QUEUED_MESSAGES,
    DEFAULT_WS_MAX_MESSAGE_SIZE,
    ENV_WS_HEARTBEAT_INTERVAL_MS,
    ENV_WS_RECONNECT_INTERVAL_MS,
    DEFAULT_WS_RECONNECT_BACKOFF,
    DEFAULT_WS_RECONNECT_ATTEMPTS,
    DEFAULT_WS_MAX_QUEUED_MESSAGES,
    ENV_WS_MAX_RECONNECT_INTERVAL_MS,
    DEFAULT_WS_HEARTBEAT_INTERVAL_MS,
    DEFAULT_WS_RECONNECT_INTERVAL_MS,
    DEFAULT_WS_MAX_RECONNECT_INTERVAL_MS,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _validate_config(config: ConnectionConfig) -> ConnectionConfig:
    if config.max_reconnect_attempts < 0:
        raise ValueError(f"{ENV_WS_RECONNECT_ATTEMPTS} must be >= 0")
    if config.reconnect_interval_ms < 0:
        raise ValueError(f"{ENV_WS_RECONNECT_INTERVAL_MS} must be >= 0")
    if config.heartbeat_interval_ms < 0:
        raise ValueError(f"{ENV_WS_HEARTBEAT_INTERVAL_MS} must be >= 0")
    if config.max_message_size_bytes <= 0:
        raise ValueError(f"{ENV_WS_MAX_MESSAGE_SIZE} must be > 0")
    if config.max_queued_messages < 0:
        raise ValueError(f"{ENV_WS_MAX_QUEUED_MESSAGES} must be >= 0")
    if config.reconnect_backoff_multiplier < 1.0:
        raise ValueError(f"{ENV_WS_RECONNECT_BACKOFF} must be >= 1.0")
    if config.max_reconnect_interval_ms < 0:
        raise ValueError(f"{ENV_WS_MAX_RECONNECT_INTERVAL_MS} must be >= 0")
    return config


def load_config(**overrides: Any) -> ConnectionConfig:
    """Build a ConnectionConfig from the environment; keyword overrides win.

    Unparsable values fall back to defaults; out-of-range values raise ValueError.
    """
    values: dict[str, Any] = {
        "endpoint": build_ws_url(_str_env(ENV_WS_URL, DEFAULT_WS_BASE_URL)),
        "max_reconnect_attempts": _int_env(ENV_WS_RECONNECT_ATTEMPTS, DEFAULT_WS_RECONNECT_ATTEMPTS),
        "reconnect_interval_ms": _int_env(ENV_WS_RECONNECT_INTERVAL_MS, DEFAULT_WS_RECONNECT_INTERVAL_MS),
        "heartbeat_interval_ms": _int_env(ENV_WS_HEARTBEAT_INTERVAL_MS, DEFAULT_WS_HEARTBEAT_INTERVAL_MS),
        "max_message_size_bytes": _int_env(ENV_WS_MAX_MESSAGE_SIZE, DEFAULT_WS_MAX_MESSAGE_SIZE),
        "debug_logging": _bool_env(ENV_WS_DEBUG, DEFAULT_WS_DEBUG),
        "max_queued_messages": _int_env(ENV_WS_MAX_QUEUED_MESSAGES, DEFAULT_WS_MAX_QUEUED_MESSAGES),
        "reconnect_backoff_multiplier": _float_env(ENV_WS_RECONNECT_BACKOFF, DEFAULT_WS_RECONNECT_BACKOFF),
        "max_reconnect_interval_ms": _int_env(ENV_WS_MAX_RECONNECT_INTERVAL_MS, DEFAULT_WS_MAX_RECONNECT_INTERVAL_MS),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return _validate_config(ConnectionConfig(**values))


__all__ = ["load_config"]
