"""Thin adapter over a ``websockets`` client connection."""

from __future__ import annotations

import logging
from collections.abc import Callable, Awaitable

import websockets
from websockets.protocol import State
from websockets.exceptions import InvalidURI, ConnectionClosed, InvalidHandshake, ConnectionClosedOK
from websockets.asyncio.client import ClientConnection

from assistant_ws.errors import TransportError
from assistant_ws.config.websocket import WS_CLOSE_ABNORMAL_CODE

logger = logging.getLogger(__name__)


def _closed_error(exc: ConnectionClosed) -> TransportError:
    frame = exc.rcvd
    if frame is None:
        return TransportError(reason="connection lost", code=WS_CLOSE_ABNORMAL_CODE, clean=False)
    return TransportError(
        reason=frame.reason or "connection closed",
        code=int(frame.code),
        clean=isinstance(exc, ConnectionClosedOK),
    )


class WebSocketTransport:
    """Expose only what the client needs: text send/recv, close and liveness."""

    def __init__(self, ws: ClientConnection) -> None:
        self._ws = ws

    @property
    def is_open(self) -> bool:
        return self._ws.state is State.OPEN

    async def send_text(self, text: str) -> None:
        try:
            await self._ws.send(text)
        except ConnectionClosed as exc:
            raise _closed_error(exc) from exc

    async def recv(self) -> str | bytes:
        try:
            return await self._ws.recv()
        except ConnectionClosed as exc:
            raise _closed_error(exc) from exc

    async def close(self, *, code: int, reason: str) -> None:
        await self._ws.close(code=code, reason=reason)


async def open_websocket(url: str) -> WebSocketTransport:
    """Open a text-frame WebSocket with library keepalive off (the client runs its own heartbeat)."""
    try:
        ws = await websockets.connect(url, ping_interval=None, ping_timeout=None, max_size=None)
    except (OSError, TimeoutError, InvalidURI, InvalidHandshake) as exc:
        raise TransportError(reason=f"failed to open connection: {exc}") from exc
    logger.debug("WebSocket handshake complete for %s", ws.remote_address)
    return WebSocketTransport(ws)


TransportFactory = Callable[[str], Awaitable[WebSocketTransport]]

__all__ = ["TransportFactory", "WebSocketTransport", "open_websocket"]
