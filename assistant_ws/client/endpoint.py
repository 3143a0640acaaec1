"""Endpoint URL construction and query-string authentication."""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

from assistant_ws.config.websocket import WS_ENDPOINT_PATH, WS_BEARER_PREFIX, WS_AUTH_QUERY_PARAM

CredentialProvider = Callable[[], str | None]


def build_ws_url(base: str, path: str = WS_ENDPOINT_PATH) -> str:
    """Join a base URL and endpoint path into a ws(s):// URL."""
    base = (base or "").strip()
    if not base:
        raise ValueError("WebSocket base URL is empty")
    clean_path = path if path.startswith("/") else f"/{path}"

    if not base.startswith(("ws://", "wss://", "http://", "https://")):
        return f"ws://{base.rstrip('/')}{clean_path}"

    parsed = urlparse(base)
    scheme = {"http": "ws", "https": "wss"}.get(parsed.scheme, parsed.scheme)
    base_path = parsed.path.rstrip("/")
    if not base_path.endswith(clean_path):
        base_path = f"{base_path}{clean_path}"
    return urlunparse((scheme, parsed.netloc, base_path, parsed.params, parsed.query, parsed.fragment))


def extract_token(credential: str | None) -> str | None:
    """Return the bare token from an ``Authorization``-style credential."""
    value = (credential or "").strip()
    if value.startswith(WS_BEARER_PREFIX):
        value = value[len(WS_BEARER_PREFIX) :].strip()
    return value or None


def append_auth_query(url: str, token: str) -> str:
    """Set the auth query parameter, replacing any existing value."""
    parsed = urlparse(url)
    query_params = dict(parse_qsl(parsed.query, keep_blank_values=True))
    query_params[WS_AUTH_QUERY_PARAM] = token
    new_query = urlencode(query_params)
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path, parsed.params, new_query, parsed.fragment))


def resolve_endpoint(endpoint: str, credentials: CredentialProvider | None) -> str:
    # The handshake carries no custom headers, so the token rides in the query string.
    if credentials is None:
        return endpoint
    token = extract_token(credentials())
    if token is None:
        return endpoint
    return append_auth_query(endpoint, token)


__all__ = [
    "CredentialProvider",
    "append_auth_query",
    "build_ws_url",
    "extract_token",
    "resolve_endpoint",
]
