"""Application-level keep-alive while the client is connected."""

from __future__ import annotations

import time
import asyncio
import logging
from collections.abc import Callable, Awaitable

from assistant_ws.state import Envelope

from .timers import TaskSlot

logger = logging.getLogger(__name__)


class HeartbeatMonitor:
    """Send a Ping every ``interval_s`` for as long as ``is_connected()`` holds.

    Pongs are recorded when they arrive but are not matched against the pings
    that were sent; a half-open socket is left for the transport to detect.
    """

    def __init__(
        self,
        *,
        send_ping: Callable[[], Awaitable[bool]],
        is_connected: Callable[[], bool],
        interval_s: float,
    ) -> None:
        self._send_ping = send_ping
        self._is_connected = is_connected
        self._interval_s = float(interval_s)
        self._slot = TaskSlot("heartbeat")
        self.pings_sent = 0
        self.last_pong_at: float | None = None

    @property
    def running(self) -> bool:
        return self._slot.active

    def start(self) -> None:
        if self._interval_s <= 0:
            return
        self._slot.start(self._loop())

    async def stop(self) -> None:
        await self._slot.cancel()

    def acknowledge_pong(self, envelope: Envelope) -> None:
        self.last_pong_at = time.monotonic()
        logger.debug("Heartbeat acknowledged (pong at %s)", envelope.timestamp)

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_s)
            if not self._is_connected():
                logger.debug("Heartbeat stopping; client is no longer connected")
                return
            try:
                await self._send_ping()
            except Exception:
                logger.warning("Heartbeat ping failed", exc_info=True)
                continue
            self.pings_sent += 1


__all__ = ["HeartbeatMonitor"]
