"""Client settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass

from assistant_ws.config.websocket import (
    DEFAULT_WS_DEBUG,
    DEFAULT_WS_MAX_MESSAGE_SIZE,
    DEFAULT_WS_RECONNECT_BACKOFF,
    DEFAULT_WS_RECONNECT_ATTEMPTS,
    DEFAULT_WS_MAX_QUEUED_MESSAGES,
    DEFAULT_WS_HEARTBEAT_INTERVAL_MS,
    DEFAULT_WS_RECONNECT_INTERVAL_MS,
    DEFAULT_WS_MAX_RECONNECT_INTERVAL_MS,
)


@dataclass(frozen=True, slots=True)
class ConnectionConfig:
    endpoint: str
    max_reconnect_attempts: int = DEFAULT_WS_RECONNECT_ATTEMPTS
    reconnect_interval_ms: int = DEFAULT_WS_RECONNECT_INTERVAL_MS
    heartbeat_interval_ms: int = DEFAULT_WS_HEARTBEAT_INTERVAL_MS
    max_message_size_bytes: int = DEFAULT_WS_MAX_MESSAGE_SIZE
    debug_logging: bool = DEFAULT_WS_DEBUG
    # 0 disables the bound.
    max_queued_messages: int = DEFAULT_WS_MAX_QUEUED_MESSAGES
    # 1.0 keeps a fixed reconnect delay.
    reconnect_backoff_multiplier: float = DEFAULT_WS_RECONNECT_BACKOFF
    max_reconnect_interval_ms: int = DEFAULT_WS_MAX_RECONNECT_INTERVAL_MS

    @property
    def reconnect_interval_s(self) -> float:
        return self.reconnect_interval_ms / 1000.0

    @property
    def max_reconnect_interval_s(self) -> float:
        return self.max_reconnect_interval_ms / 1000.0

    @property
    def heartbeat_interval_s(self) -> float:
        return self.heartbeat_interval_ms / 1000.0


__all__ = ["ConnectionConfig"]
