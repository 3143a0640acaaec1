from .envelope import Envelope
from .session import SessionContext
from .settings import ConnectionConfig
from .message_type import MessageType
from .connection_state import ConnectionState
from .payloads import (
    Payload,
    ChatPayload,
    ErrorPayload,
    ControlPayload,
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
    "MessageType",
    "Payload",
    "SessionContext",
    "StatusUpdatePayload",
    "VoiceDataPayload",
]
