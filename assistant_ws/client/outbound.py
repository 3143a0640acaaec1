"""FIFO buffer for envelopes that could not be sent immediately."""

from __future__ import annotations

import logging
import collections
from collections.abc import Callable, Awaitable

from assistant_ws.state import Envelope

logger = logging.getLogger(__name__)


class OutboundQueue:
    """Ordered outbound buffer, drained head-first once a transport is available.

    Unbounded if max_size <= 0; otherwise the oldest envelope is evicted to
    make room for a new one.
    """

    def __init__(self, *, max_size: int = 0) -> None:
        self.max_size = max(0, int(max_size))
        self._items: collections.deque[Envelope] = collections.deque()
        self._draining = False

    def __len__(self) -> int:
        return len(self._items)

    def append(self, envelope: Envelope) -> Envelope | None:
        evicted: Envelope | None = None
        if self.max_size and len(self._items) >= self.max_size:
            evicted = self._items.popleft()
            logger.warning(
                "Outbound queue full (%s); dropping oldest %s message",
                self.max_size,
                evicted.message_type.value,
            )
        self._items.append(envelope)
        return evicted

    def peek(self) -> Envelope | None:
        return self._items[0] if self._items else None

    def popleft(self) -> Envelope:
        return self._items.popleft()

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> list[Envelope]:
        return list(self._items)

    async def drain(
        self,
        send: Callable[[Envelope], Awaitable[None]],
        can_send: Callable[[], bool],
    ) -> int:
        """Send queued envelopes in order; stop at the first failure.

        The envelope that failed stays at the head so the next drain starts
        from it. Returns the number of envelopes sent.
        """
        if self._draining:
            return 0
        self._draining = True
        sent = 0
        try:
            while self._items and can_send():
                envelope = self._items[0]
                try:
                    await send(envelope)
                except Exception:
                    logger.warning(
                        "Failed to send queued %s message; %s left in queue",
                        envelope.message_type.value,
                        len(self._items),
                        exc_info=True,
                    )
                    break
                # The head can only have been evicted if the queue overflowed mid-send.
                if self._items and self._items[0] is envelope:
                    self._items.popleft()
                sent += 1
        finally:
            self._draining = False
        return sent


__all__ = ["OutboundQueue"]
