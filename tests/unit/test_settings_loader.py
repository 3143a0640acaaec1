from __future__ import annotations

import pytest

from assistant_ws.runtime import load_config
from assistant_ws.config.websocket import (
    ENV_WS_URL,
    ENV_WS_DEBUG,
    ENV_WS_MAX_MESSAGE_SIZE,
    ENV_WS_RECONNECT_BACKOFF,
    ENV_WS_RECONNECT_ATTEMPTS,
    ENV_WS_MAX_QUEUED_MESSAGES,
    ENV_WS_HEARTBEAT_INTERVAL_MS,
    ENV_WS_RECONNECT_INTERVAL_MS,
    ENV_WS_MAX_RECONNECT_INTERVAL_MS,
)

ALL_ENV = (
    ENV_WS_URL,
    ENV_WS_DEBUG,
    ENV_WS_MAX_MESSAGE_SIZE,
    ENV_WS_RECONNECT_BACKOFF,
    ENV_WS_RECONNECT_ATTEMPTS,
    ENV_WS_MAX_QUEUED_MESSAGES,
    ENV_WS_HEARTBEAT_INTERVAL_MS,
    ENV_WS_RECONNECT_INTERVAL_MS,
    ENV_WS_MAX_RECONNECT_INTERVAL_MS,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ALL_ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    cfg = load_config()
    assert cfg.endpoint == "ws://localhost:8081/ws"
    assert cfg.max_reconnect_attempts == 5
    assert cfg.reconnect_interval_ms == 3000
    assert cfg.heartbeat_interval_ms == 30000
    assert cfg.max_message_size_bytes == 1024 * 1024
    assert cfg.debug_logging is False
    assert cfg.max_queued_messages == 1000
    assert cfg.reconnect_backoff_multiplier == 1.0


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_WS_URL, "https://api.example.com")
    monkeypatch.setenv(ENV_WS_RECONNECT_ATTEMPTS, "3")
    monkeypatch.setenv(ENV_WS_HEARTBEAT_INTERVAL_MS, "0")
    monkeypatch.setenv(ENV_WS_DEBUG, "yes")
    cfg = load_config()
    assert cfg.endpoint == "wss://api.example.com/ws"
    assert cfg.max_reconnect_attempts == 3
    assert cfg.heartbeat_interval_s == 0
    assert cfg.debug_logging is True


def test_unparsable_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_WS_RECONNECT_ATTEMPTS, "many")
    monkeypatch.setenv(ENV_WS_RECONNECT_BACKOFF, "fast")
    cfg = load_config()
    assert cfg.max_reconnect_attempts == 5
    assert cfg.reconnect_backoff_multiplier == 1.0


def test_keyword_overrides_win_and_none_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_WS_RECONNECT_ATTEMPTS, "3")
    cfg = load_config(max_reconnect_attempts=1, endpoint=None)
    assert cfg.max_reconnect_attempts == 1
    assert cfg.endpoint == "ws://localhost:8081/ws"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        (ENV_WS_MAX_MESSAGE_SIZE, "0"),
        (ENV_WS_RECONNECT_INTERVAL_MS, "-1"),
        (ENV_WS_RECONNECT_ATTEMPTS, "-2"),
        (ENV_WS_MAX_QUEUED_MESSAGES, "-1"),
        (ENV_WS_RECONNECT_BACKOFF, "0.5"),
    ],
)
def test_out_of_range_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        load_config()
