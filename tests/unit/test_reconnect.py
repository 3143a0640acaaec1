from __future__ import annotations

import asyncio

import pytest

from assistant_ws.errors import ExhaustionError
from assistant_ws.client import ReconnectScheduler


def test_attempt_counter_and_exhaustion() -> None:
    s = ReconnectScheduler(max_attempts=2, interval_s=0.0)
    assert s.should_retry()
    assert s.next_attempt() == 1
    assert s.next_attempt() == 2
    assert not s.should_retry()
    with pytest.raises(ExhaustionError) as excinfo:
        s.next_attempt()
    assert (excinfo.value.attempts, excinfo.value.max_attempts) == (2, 2)

    s.reset()
    assert s.attempt == 0
    assert s.should_retry()


def test_zero_attempts_never_retries() -> None:
    assert not ReconnectScheduler(max_attempts=0, interval_s=1.0).should_retry()


def test_delay_is_fixed_by_default() -> None:
    s = ReconnectScheduler(max_attempts=5, interval_s=3.0)
    assert [s.delay_for(n) for n in (1, 2, 5)] == [3.0, 3.0, 3.0]


def test_backoff_grows_and_is_capped() -> None:
    s = ReconnectScheduler(max_attempts=5, interval_s=1.0, backoff_multiplier=2.0, max_interval_s=3.0)
    assert [s.delay_for(n) for n in (1, 2, 3, 4)] == [1.0, 2.0, 3.0, 3.0]


@pytest.mark.asyncio
async def test_schedule_runs_callback_after_delay() -> None:
    s = ReconnectScheduler(max_attempts=3, interval_s=0.01)
    fired = asyncio.Event()

    async def callback() -> None:
        fired.set()

    s.next_attempt()
    s.schedule(callback)
    assert s.pending
    await asyncio.wait_for(fired.wait(), timeout=1.0)


@pytest.mark.asyncio
async def test_cancel_prevents_callback() -> None:
    s = ReconnectScheduler(max_attempts=3, interval_s=0.05)
    calls: list[int] = []

    async def callback() -> None:
        calls.append(1)

    s.next_attempt()
    s.schedule(callback)
    await s.cancel()
    await asyncio.sleep(0.1)
    assert calls == []
    assert not s.pending
