from __future__ import annotations

import orjson
import pytest

from assistant_ws.client import MessageDispatcher
from assistant_ws.state import Envelope, MessageType, ControlPayload


def _raw(message_type: str, data: object = None) -> str:
    return orjson.dumps({"message_type": message_type, "data": data, "timestamp": "2024-01-01T00:00:00.000Z"}).decode()


class _Recorder:
    def __init__(self) -> None:
        self.replies: list[Envelope] = []
        self.forwarded: list[Envelope] = []
        self.pongs: list[Envelope] = []

    async def reply(self, envelope: Envelope) -> bool:
        self.replies.append(envelope)
        return True

    def dispatcher(self) -> MessageDispatcher:
        return MessageDispatcher(reply=self.reply, forward=self.forwarded.append, on_pong=self.pongs.append)


@pytest.mark.asyncio
async def test_ping_gets_exactly_one_pong_and_is_not_forwarded() -> None:
    rec = _Recorder()
    await rec.dispatcher().dispatch(_raw("Ping", {}))
    assert rec.replies == [Envelope(message_type=MessageType.PONG, data=ControlPayload())]
    assert rec.forwarded == []


@pytest.mark.asyncio
async def test_pong_is_acknowledged_and_not_forwarded() -> None:
    rec = _Recorder()
    await rec.dispatcher().dispatch(_raw("Pong", {}))
    assert len(rec.pongs) == 1
    assert rec.forwarded == []
    assert rec.replies == []


@pytest.mark.asyncio
@pytest.mark.parametrize("message_type", ["Chat", "StatusUpdate", "Error"])
async def test_application_messages_are_forwarded(message_type: str) -> None:
    rec = _Recorder()
    env = await rec.dispatcher().dispatch(_raw(message_type, {"status": "ok"}))
    assert rec.forwarded == [env]
    assert rec.forwarded[0].message_type.value == message_type


@pytest.mark.asyncio
async def test_malformed_input_is_dropped_quietly() -> None:
    rec = _Recorder()
    dispatcher = rec.dispatcher()
    assert await dispatcher.dispatch("not-json") is None
    assert dispatcher.dropped == 1
    assert rec.forwarded == rec.pongs == rec.replies == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("message_type", "data"),
    [
        ("StatusUpdate", "ready"),
        ("Chat", [1, 2]),
        ("StatusUpdate", 5),
        ("VoiceData", {"audio": "not base64!", "format": "webm"}),
    ],
)
async def test_non_object_data_is_forwarded_verbatim(message_type: str, data: object) -> None:
    rec = _Recorder()
    dispatcher = rec.dispatcher()
    await dispatcher.dispatch(_raw(message_type, data))
    assert len(rec.forwarded) == 1
    assert rec.forwarded[0].data.raw == data
    assert dispatcher.dropped == 0
