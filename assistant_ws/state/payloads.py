"""Envelope payload variants, keyed by message type (dataclasses only).

Every variant keeps the decoded wire ``data`` in ``raw`` exactly as it
arrived; the typed fields are a convenience view and stay empty when ``data``
does not have the usual shape.
"""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass

from assistant_ws.config.websocket import DEFAULT_AUDIO_FORMAT


@dataclass(frozen=True, slots=True)
class ChatPayload:
    """Chat text going out, or the structured reply coming back.

    Outbound chat travels as a bare string. Replies from the service are
    objects (``response``, ``intent``, ``confidence``) and land in ``fields``.
    """

    text: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)
    raw: Any = None


@dataclass(frozen=True, slots=True)
class VoiceDataPayload:
    # Empty when inbound ``data.audio`` is missing or not base64; see ``raw``.
    audio: bytes = b""
    format: str = DEFAULT_AUDIO_FORMAT
    raw: Any = None


@dataclass(frozen=True, slots=True)
class StatusUpdatePayload:
    fields: dict[str, Any] = field(default_factory=dict)
    raw: Any = None

    @property
    def status(self) -> str | None:
        if isinstance(self.raw, str):
            return self.raw
        value = self.fields.get("status")
        return value if isinstance(value, str) else None


@dataclass(frozen=True, slots=True)
class ErrorPayload:
    fields: dict[str, Any] = field(default_factory=dict)
    raw: Any = None

    @property
    def code(self) -> str | None:
        value = self.fields.get("code")
        return value if isinstance(value, str) else None

    @property
    def message(self) -> str | None:
        value = self.fields.get("message") or self.fields.get("error")
        return value if isinstance(value, str) else None


@dataclass(frozen=True, slots=True)
class ControlPayload:
    """Ping/Pong body; empty in practice."""

    fields: dict[str, Any] = field(default_factory=dict)
    raw: Any = None


Payload = ChatPayload | VoiceDataPayload | StatusUpdatePayload | ErrorPayload | ControlPayload

__all__ = [
    "ChatPayload",
    "ControlPayload",
    "ErrorPayload",
    "Payload",
    "StatusUpdatePayload",
    "VoiceDataPayload",
]
