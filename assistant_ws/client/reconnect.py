"""Retry policy and delayed reconnect scheduling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Awaitable

from assistant_ws.errors import ExhaustionError

from .timers import TaskSlot

logger = logging.getLogger(__name__)


class ReconnectScheduler:
    """Bound automatic reconnects by an attempt budget.

    The counter only moves forward through ``next_attempt()`` and goes back to
    zero through ``reset()`` (called on every successful open). The delay is
    fixed unless ``backoff_multiplier`` is above 1, in which case it grows
    geometrically up to ``max_interval_s``.
    """

    def __init__(
        self,
        *,
        max_attempts: int,
        interval_s: float,
        backoff_multiplier: float = 1.0,
        max_interval_s: float | None = None,
    ) -> None:
        self.max_attempts = max(0, int(max_attempts))
        self.interval_s = max(0.0, float(interval_s))
        self.backoff_multiplier = max(1.0, float(backoff_multiplier))
        self.max_interval_s = None if max_interval_s is None else max(self.interval_s, float(max_interval_s))
        self._attempt = 0
        self._slot = TaskSlot("reconnect")

    @property
    def attempt(self) -> int:
        return self._attempt

    @property
    def pending(self) -> bool:
        return self._slot.active

    def should_retry(self) -> bool:
        return self._attempt < self.max_attempts

    def reset(self) -> None:
        self._attempt = 0

    def next_attempt(self) -> int:
        if not self.should_retry():
            raise ExhaustionError(attempts=self._attempt, max_attempts=self.max_attempts)
        self._attempt += 1
        return self._attempt

    def delay_for(self, attempt: int) -> float:
        delay = self.interval_s * (self.backoff_multiplier ** max(0, attempt - 1))
        if self.max_interval_s is not None:
            delay = min(delay, self.max_interval_s)
        return delay

    def schedule(self, callback: Callable[[], Awaitable[None]]) -> None:
        self._slot.start(self._run(self.delay_for(self._attempt), callback))

    async def cancel(self) -> None:
        await self._slot.cancel()

    async def _run(self, delay_s: float, callback: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(delay_s)
        logger.info("Reconnect attempt %s/%s", self._attempt, self.max_attempts)
        await callback()


__all__ = ["ReconnectScheduler"]
