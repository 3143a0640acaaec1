"""Inbound classification: protocol control frames vs application messages."""

from __future__ import annotations

import logging
from collections.abc import Callable, Awaitable

from assistant_ws.errors import ProtocolError
from assistant_ws.protocol import decode_envelope
from assistant_ws.state import Envelope, MessageType, ControlPayload

logger = logging.getLogger(__name__)

ReplyFn = Callable[[Envelope], Awaitable[bool]]
ForwardFn = Callable[[Envelope], None]
PongFn = Callable[[Envelope], None]


class MessageDispatcher:
    """Decode raw frames and route them.

    Ping gets exactly one Pong reply and Pong is acknowledged; neither reaches
    the application. Every other type is forwarded untouched. Malformed frames
    are logged and dropped.
    """

    def __init__(
        self,
        *,
        reply: ReplyFn,
        forward: ForwardFn,
        on_pong: PongFn,
        debug: bool = False,
    ) -> None:
        self._reply = reply
        self._forward = forward
        self._on_pong = on_pong
        self.debug = debug
        self.dropped = 0

    async def dispatch(self, raw: str | bytes) -> Envelope | None:
        try:
            envelope = decode_envelope(raw)
        except ProtocolError as exc:
            self.dropped += 1
            logger.warning("Dropping malformed inbound message: %s", exc)
            return None

        if self.debug:
            logger.debug("Received message: %s", envelope.message_type.value)

        if envelope.message_type is MessageType.PING:
            await self._reply(Envelope(message_type=MessageType.PONG, data=ControlPayload()))
            return envelope
        if envelope.message_type is MessageType.PONG:
            self._on_pong(envelope)
            return envelope

        self._forward(envelope)
        return envelope


__all__ = ["MessageDispatcher"]
