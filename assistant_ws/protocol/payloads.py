"""Conversion between wire ``data`` values and typed payload variants.

Inbound ``data`` is never rejected: whatever JSON value arrived is kept in
the variant's ``raw`` field and forwarded untouched.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

from assistant_ws.config.websocket import WS_KEY_AUDIO, WS_KEY_FORMAT, DEFAULT_AUDIO_FORMAT
from assistant_ws.state import (
    Payload,
    ChatPayload,
    MessageType,
    ErrorPayload,
    ControlPayload,
    VoiceDataPayload,
    StatusUpdatePayload,
)


def _object_fields(data: Any) -> dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _chat_from_wire(data: Any) -> ChatPayload:
    if isinstance(data, str):
        return ChatPayload(text=data, raw=data)
    fields = _object_fields(data)
    text = fields.get("text")
    if not isinstance(text, str):
        response = fields.get("response")
        text = response if isinstance(response, str) else None
    return ChatPayload(text=text, fields=fields, raw=data)


def _decode_audio(value: Any) -> bytes:
    if not isinstance(value, str):
        return b""
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return b""


def _voice_from_wire(data: Any) -> VoiceDataPayload:
    fields = _object_fields(data)
    audio_format = fields.get(WS_KEY_FORMAT)
    if not isinstance(audio_format, str) or not audio_format.strip():
        audio_format = DEFAULT_AUDIO_FORMAT
    return VoiceDataPayload(audio=_decode_audio(fields.get(WS_KEY_AUDIO)), format=audio_format.strip(), raw=data)


def _error_from_wire(data: Any) -> ErrorPayload:
    # Services commonly send a bare message string for errors.
    if isinstance(data, str):
        return ErrorPayload(fields={"message": data}, raw=data)
    return ErrorPayload(fields=_object_fields(data), raw=data)


def payload_from_wire(message_type: MessageType, data: Any) -> Payload:
    if message_type is MessageType.CHAT:
        return _chat_from_wire(data)
    if message_type is MessageType.VOICE_DATA:
        return _voice_from_wire(data)
    if message_type is MessageType.STATUS_UPDATE:
        return StatusUpdatePayload(fields=_object_fields(data), raw=data)
    if message_type is MessageType.ERROR:
        return _error_from_wire(data)
    return ControlPayload(fields=_object_fields(data), raw=data)


def payload_to_wire(payload: Payload) -> Any:
    # A received (non-null) wire value is echoed back unchanged.
    if payload.raw is not None:
        return payload.raw
    if isinstance(payload, ChatPayload):
        if payload.fields:
            return dict(payload.fields)
        return payload.text or ""
    if isinstance(payload, VoiceDataPayload):
        return {
            WS_KEY_AUDIO: base64.b64encode(payload.audio).decode("ascii"),
            WS_KEY_FORMAT: payload.format,
        }
    return dict(payload.fields)


def payload_matches(message_type: MessageType, payload: Payload) -> bool:
    expected = {
        MessageType.CHAT: ChatPayload,
        MessageType.VOICE_DATA: VoiceDataPayload,
        MessageType.STATUS_UPDATE: StatusUpdatePayload,
        MessageType.ERROR: ErrorPayload,
        MessageType.PING: ControlPayload,
        MessageType.PONG: ControlPayload,
    }[message_type]
    return isinstance(payload, expected)


__all__ = ["payload_from_wire", "payload_matches", "payload_to_wire"]
