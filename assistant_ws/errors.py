"""Shared error types for the realtime client."""

from __future__ import annotations

from dataclasses import dataclass

from assistant_ws.config.websocket import WS_CLOSE_ABNORMAL_CODE


@dataclass(frozen=True, slots=True)
class TransportError(Exception):
    """Raised when the transport fails to open or drops the connection."""

    reason: str
    code: int = WS_CLOSE_ABNORMAL_CODE
    clean: bool = False

    def __str__(self) -> str:
        return f"{self.reason} (code={self.code})"


@dataclass(frozen=True, slots=True)
class ProtocolError(ValueError):
    """Raised for malformed inbound payloads and oversized outbound ones."""

    reason: str

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class ExhaustionError(Exception):
    """Raised by the reconnect scheduler once the attempt budget is spent."""

    attempts: int
    max_attempts: int

    def __str__(self) -> str:
        return f"reconnect attempts exhausted ({self.attempts}/{self.max_attempts})"


__all__ = ["ExhaustionError", "ProtocolError", "TransportError"]
