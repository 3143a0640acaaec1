from __future__ import annotations

import pytest

from assistant_ws.client import build_ws_url, extract_token, resolve_endpoint, append_auth_query


@pytest.mark.parametrize(
    ("base", "expected"),
    [
        ("ws://localhost:8081", "ws://localhost:8081/ws"),
        ("ws://localhost:8081/", "ws://localhost:8081/ws"),
        ("localhost:8081", "ws://localhost:8081/ws"),
        ("https://api.example.com", "wss://api.example.com/ws"),
        ("http://api.example.com/assistant/", "ws://api.example.com/assistant/ws"),
        ("wss://api.example.com/ws", "wss://api.example.com/ws"),
    ],
)
def test_build_ws_url(base: str, expected: str) -> None:
    assert build_ws_url(base) == expected


def test_build_ws_url_rejects_empty_base() -> None:
    with pytest.raises(ValueError):
        build_ws_url("  ")


def test_extract_token_strips_bearer_prefix() -> None:
    assert extract_token("Bearer abc123") == "abc123"
    assert extract_token("abc123") == "abc123"
    assert extract_token("") is None
    assert extract_token(None) is None


def test_append_auth_query_keeps_existing_params_and_encodes() -> None:
    assert append_auth_query("ws://h/ws?x=1", "a b") == "ws://h/ws?x=1&token=a+b"
    assert append_auth_query("ws://h/ws?token=old", "new") == "ws://h/ws?token=new"


def test_resolve_endpoint_only_appends_when_a_token_exists() -> None:
    assert resolve_endpoint("ws://h/ws", None) == "ws://h/ws"
    assert resolve_endpoint("ws://h/ws", lambda: None) == "ws://h/ws"
    assert resolve_endpoint("ws://h/ws", lambda: "Bearer t0k") == "ws://h/ws?token=t0k"
