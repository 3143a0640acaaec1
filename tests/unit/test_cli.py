from __future__ import annotations

import uuid
import asyncio

import orjson
import pytest

from assistant_ws import cli
from assistant_ws.errors import TransportError
from assistant_ws.client import RealtimeClient


class _EchoTransport:
    def __init__(self) -> None:
        self.is_open = True
        self._replies: asyncio.Queue[str] = asyncio.Queue()

    async def send_text(self, text: str) -> None:
        msg = orjson.loads(text)
        if msg["message_type"] == "Chat":
            reply = {"message_type": "Chat", "data": {"response": msg["data"]}, "timestamp": msg["timestamp"]}
            self._replies.put_nowait(orjson.dumps(reply).decode())

    async def recv(self) -> str:
        return await self._replies.get()

    async def close(self, *, code: int, reason: str) -> None:
        self.is_open = False


def test_parse_args_defaults() -> None:
    args = cli.parse_args([])
    assert args.message == []
    assert args.session_id is None
    assert args.listen == 5.0


@pytest.mark.asyncio
async def test_run_sends_messages_and_prints_replies(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    transports: list[_EchoTransport] = []
    clients: list[RealtimeClient] = []

    async def factory(url: str) -> _EchoTransport:
        transports.append(_EchoTransport())
        return transports[-1]

    def make_client(config):
        clients.append(RealtimeClient(config, credentials=None, transport_factory=factory))
        return clients[-1]

    monkeypatch.setattr(cli, "RealtimeClient", make_client)
    args = cli.parse_args(["--url", "localhost:9", "-m", "hello", "--listen", "0.05"])

    assert await cli.run(args) == 0
    assert clients[0].config.endpoint == "ws://localhost:9/ws"
    assert uuid.UUID(clients[0].session.session_id).version == 4
    out = capsys.readouterr().out
    assert '"response":"hello"' in out


@pytest.mark.asyncio
async def test_run_returns_error_code_when_connection_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    async def factory(url: str) -> _EchoTransport:
        raise TransportError(reason="refused")

    monkeypatch.setattr(
        cli, "RealtimeClient", lambda config: RealtimeClient(config, credentials=None, transport_factory=factory)
    )
    assert await cli.run(cli.parse_args(["--listen", "0"])) == 1
