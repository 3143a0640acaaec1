"""Ordered multi-subscriber listener registry."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any
from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class EventEmitter:
    """Map each known event name to an ordered list of handlers.

    Registering a handler never evicts another one. Handler exceptions are
    logged and do not reach the emitter's caller; coroutine handlers run as
    background tasks.
    """

    def __init__(self, names: Iterable[str]) -> None:
        self._handlers: dict[str, list[Handler]] = {name: [] for name in names}
        self._tasks: set[asyncio.Task] = set()

    def _handlers_for(self, event: str) -> list[Handler]:
        try:
            return self._handlers[event]
        except KeyError:
            known = ", ".join(sorted(self._handlers))
            raise ValueError(f"unknown event '{event}' (expected one of: {known})") from None

    def on(self, event: str, handler: Handler | None = None) -> Any:
        """Register ``handler`` for ``event``; without a handler, return a decorator."""
        handlers = self._handlers_for(event)
        if handler is None:

            def decorator(fn: Handler) -> Handler:
                handlers.append(fn)
                return fn

            return decorator
        handlers.append(handler)
        return handler

    def off(self, event: str, handler: Handler) -> bool:
        handlers = self._handlers_for(event)
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def listener_count(self, event: str) -> int:
        return len(self._handlers_for(event))

    def emit(self, event: str, *args: Any) -> None:
        # Copy so handlers may (un)register while we iterate.
        for handler in list(self._handlers_for(event)):
            try:
                result = handler(*args)
            except Exception:
                logger.exception("Listener for '%s' raised", event)
                continue
            if inspect.isawaitable(result):
                self._spawn(event, result)

    def _spawn(self, event: str, awaitable: Any) -> None:
        task = asyncio.ensure_future(awaitable)
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._on_task_done(event, t))

    def _on_task_done(self, event: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Async listener for '%s' raised", event, exc_info=exc)


__all__ = ["EventEmitter", "Handler"]
