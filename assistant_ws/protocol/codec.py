"""Envelope serialization and strict parsing for the wire format."""

from __future__ import annotations

import logging
from typing import Any
from datetime import datetime, timezone

import orjson

from assistant_ws.errors import ProtocolError
from assistant_ws.state import Envelope, MessageType
from assistant_ws.config.websocket import (
    WS_KEY_DATA,
    WS_KEY_USER_ID,
    WS_KEY_TIMESTAMP,
    WS_KEY_SESSION_ID,
    WS_KEY_MESSAGE_TYPE,
)

from .payloads import payload_to_wire, payload_matches, payload_from_wire

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """ISO-8601 UTC with millisecond precision, e.g. ``2024-01-01T00:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def envelope_to_wire(envelope: Envelope) -> dict[str, Any]:
    if not payload_matches(envelope.message_type, envelope.data):
        raise ProtocolError(
            f"{type(envelope.data).__name__} is not a valid payload for {envelope.message_type.value}"
        )
    msg: dict[str, Any] = {WS_KEY_MESSAGE_TYPE: envelope.message_type.value}
    # Absent ids are omitted rather than sent as null.
    if envelope.session_id:
        msg[WS_KEY_SESSION_ID] = envelope.session_id
    if envelope.user_id:
        msg[WS_KEY_USER_ID] = envelope.user_id
    msg[WS_KEY_DATA] = payload_to_wire(envelope.data)
    msg[WS_KEY_TIMESTAMP] = envelope.timestamp or utc_timestamp()
    return msg


def serialize_envelope(envelope: Envelope, *, max_size_bytes: int | None = None) -> str:
    try:
        encoded = orjson.dumps(envelope_to_wire(envelope))
    except orjson.JSONEncodeError as exc:
        raise ProtocolError(f"message is not JSON serializable: {exc}") from exc
    if max_size_bytes is not None and len(encoded) > max_size_bytes:
        raise ProtocolError(f"message too large: {len(encoded)} bytes (limit {max_size_bytes})")
    return encoded.decode("utf-8")


def _optional_id(msg: dict[str, Any], key: str) -> str | None:
    value = msg.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        logger.debug("Ignoring non-string '%s' on inbound message", key)
        return None
    return value.strip() or None


def decode_envelope(raw: str | bytes) -> Envelope:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ProtocolError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ProtocolError("message must be a JSON object")

    raw_type = msg.get(WS_KEY_MESSAGE_TYPE)
    if not isinstance(raw_type, str) or not raw_type.strip():
        raise ProtocolError(f"message missing non-empty '{WS_KEY_MESSAGE_TYPE}'")
    try:
        message_type = MessageType(raw_type.strip())
    except ValueError as exc:
        raise ProtocolError(f"unknown message type '{raw_type}'") from exc

    timestamp = msg.get(WS_KEY_TIMESTAMP)
    if not isinstance(timestamp, str) or not timestamp.strip():
        raise ProtocolError(f"message missing non-empty '{WS_KEY_TIMESTAMP}'")

    return Envelope(
        message_type=message_type,
        data=payload_from_wire(message_type, msg.get(WS_KEY_DATA)),
        session_id=_optional_id(msg, WS_KEY_SESSION_ID),
        user_id=_optional_id(msg, WS_KEY_USER_ID),
        timestamp=timestamp.strip(),
    )


__all__ = [
    "decode_envelope",
    "envelope_to_wire",
    "serialize_envelope",
    "utc_timestamp",
]
