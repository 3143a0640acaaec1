"""Cancellable single-task slot used for every client timer."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Coroutine

logger = logging.getLogger(__name__)


class TaskSlot:
    """Own at most one background task; cancelling the slot cancels the task.

    Replacing or cancelling from inside the slot's own task only drops the
    reference, so a timer callback may reschedule itself.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        previous = self._task
        if previous is not None and not previous.done() and previous is not asyncio.current_task():
            previous.cancel()
        self._task = asyncio.create_task(coro, name=self._name)
        return self._task

    async def cancel(self) -> None:
        task = self._task
        if task is None:
            return
        self._task = None
        if task is asyncio.current_task():
            return
        if not task.done():
            task.cancel()
            # wait() never raises the task's outcome, so only our own cancellation propagates.
            await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None:
            logger.debug("%s task exited with an error", self._name, exc_info=task.exception())


__all__ = ["TaskSlot"]
