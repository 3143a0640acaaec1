from __future__ import annotations

import asyncio

import pytest

from assistant_ws.client import HeartbeatMonitor
from assistant_ws.state import Envelope, MessageType, ControlPayload


@pytest.mark.asyncio
async def test_heartbeat_pings_while_connected_and_stops_cleanly() -> None:
    two_pings = asyncio.Event()
    calls: list[int] = []

    async def send_ping() -> bool:
        calls.append(1)
        if len(calls) >= 2:
            two_pings.set()
        return True

    hb = HeartbeatMonitor(send_ping=send_ping, is_connected=lambda: True, interval_s=0.01)
    hb.start()
    await asyncio.wait_for(two_pings.wait(), timeout=1.0)
    await hb.stop()
    assert not hb.running

    seen = len(calls)
    await asyncio.sleep(0.05)
    assert len(calls) == seen


@pytest.mark.asyncio
async def test_heartbeat_exits_when_no_longer_connected() -> None:
    async def send_ping() -> bool:
        raise AssertionError("should not ping")

    hb = HeartbeatMonitor(send_ping=send_ping, is_connected=lambda: False, interval_s=0.01)
    hb.start()
    await asyncio.sleep(0.05)
    assert not hb.running
    assert hb.pings_sent == 0


@pytest.mark.asyncio
async def test_heartbeat_survives_a_failed_ping() -> None:
    calls: list[int] = []

    async def send_ping() -> bool:
        calls.append(1)
        if len(calls) == 1:
            raise ConnectionError("boom")
        return True

    hb = HeartbeatMonitor(send_ping=send_ping, is_connected=lambda: True, interval_s=0.01)
    hb.start()
    for _ in range(100):
        if hb.pings_sent >= 1:
            break
        await asyncio.sleep(0.01)
    await hb.stop()
    assert hb.pings_sent >= 1
    assert len(calls) >= 2


def test_zero_interval_disables_heartbeat() -> None:
    async def send_ping() -> bool:
        return True

    hb = HeartbeatMonitor(send_ping=send_ping, is_connected=lambda: True, interval_s=0)
    hb.start()
    assert not hb.running


def test_acknowledge_pong_records_time() -> None:
    async def send_ping() -> bool:
        return True

    hb = HeartbeatMonitor(send_ping=send_ping, is_connected=lambda: True, interval_s=1.0)
    assert hb.last_pong_at is None
    hb.acknowledge_pong(Envelope(message_type=MessageType.PONG, data=ControlPayload(), timestamp="t"))
    assert hb.last_pong_at is not None
