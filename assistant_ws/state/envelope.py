"""Wire envelope wrapping a typed payload (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass

from .payloads import Payload
from .message_type import MessageType


@dataclass(frozen=True, slots=True)
class Envelope:
    message_type: MessageType
    data: Payload
    session_id: str | None = None
    user_id: str | None = None
    # None until the client stamps it on send.
    timestamp: str | None = None


__all__ = ["Envelope"]
