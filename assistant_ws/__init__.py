"""Realtime messaging client for the assistant's WebSocket endpoint."""

from .client import RealtimeClient
from .runtime import load_config, configure_logging
from .errors import ProtocolError, TransportError, ExhaustionError
from .state import (
    Envelope,
    ChatPayload,
    MessageType,
    ErrorPayload,
    ControlPayload,
    SessionContext,
    ConnectionState,
    ConnectionConfig,
    VoiceDataPayload,
    StatusUpdatePayload,
)

__all__ = [
    "ChatPayload",
    "ConnectionConfig",
    "ConnectionState",
    "ControlPayload",
    "Envelope",
    "ErrorPayload",
    "ExhaustionError",
    "MessageType",
    "ProtocolError",
    "RealtimeClient",
    "SessionContext",
    "StatusUpdatePayload",
    "TransportError",
    "VoiceDataPayload",
    "configure_logging",
    "load_config",
]
