"""WebSocket protocol configuration and constants."""

from __future__ import annotations

# Envelope keys
WS_KEY_MESSAGE_TYPE = "message_type"
WS_KEY_SESSION_ID = "session_id"
WS_KEY_USER_ID = "user_id"
WS_KEY_DATA = "data"
WS_KEY_TIMESTAMP = "timestamp"

# VoiceData payload keys
WS_KEY_AUDIO = "audio"
WS_KEY_FORMAT = "format"
DEFAULT_AUDIO_FORMAT = "webm"

# Endpoint
WS_ENDPOINT_PATH = "/ws"
WS_AUTH_QUERY_PARAM = "token"
WS_BEARER_PREFIX = "Bearer "

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_GOING_AWAY_CODE = 1001
WS_CLOSE_ABNORMAL_CODE = 1006

WS_CLOSE_MANUAL_REASON = "Manual disconnect"

# Listener events
EVENT_OPEN = "open"
EVENT_CLOSE = "close"
EVENT_ERROR = "error"
EVENT_MESSAGE = "message"
EVENT_STATE_CHANGE = "state_change"
EVENT_RECONNECT_ATTEMPT = "reconnect_attempt"

CLIENT_EVENTS = (
    EVENT_OPEN,
    EVENT_CLOSE,
    EVENT_ERROR,
    EVENT_MESSAGE,
    EVENT_STATE_CHANGE,
    EVENT_RECONNECT_ATTEMPT,
)

# Environment variable names
ENV_WS_URL = "ASSISTANT_WS_URL"
ENV_WS_RECONNECT_ATTEMPTS = "ASSISTANT_WS_RECONNECT_ATTEMPTS"
ENV_WS_RECONNECT_INTERVAL_MS = "ASSISTANT_WS_RECONNECT_INTERVAL_MS"
ENV_WS_HEARTBEAT_INTERVAL_MS = "ASSISTANT_WS_HEARTBEAT_INTERVAL_MS"
ENV_WS_MAX_MESSAGE_SIZE = "ASSISTANT_WS_MAX_MESSAGE_SIZE"
ENV_WS_MAX_QUEUED_MESSAGES = "ASSISTANT_WS_MAX_QUEUED_MESSAGES"
ENV_WS_RECONNECT_BACKOFF = "ASSISTANT_WS_RECONNECT_BACKOFF"
ENV_WS_MAX_RECONNECT_INTERVAL_MS = "ASSISTANT_WS_MAX_RECONNECT_INTERVAL_MS"
ENV_WS_DEBUG = "ASSISTANT_WS_DEBUG"

# Defaults
DEFAULT_WS_BASE_URL = "ws://localhost:8081"
DEFAULT_WS_RECONNECT_ATTEMPTS = 5
DEFAULT_WS_RECONNECT_INTERVAL_MS = 3000
DEFAULT_WS_HEARTBEAT_INTERVAL_MS = 30000
DEFAULT_WS_MAX_MESSAGE_SIZE = 1024 * 1024
DEFAULT_WS_MAX_QUEUED_MESSAGES = 1000
DEFAULT_WS_RECONNECT_BACKOFF = 1.0
DEFAULT_WS_MAX_RECONNECT_INTERVAL_MS = 30000
DEFAULT_WS_DEBUG = False

__all__ = [
    "WS_KEY_MESSAGE_TYPE",
    "WS_KEY_SESSION_ID",
    "WS_KEY_USER_ID",
    "WS_KEY_DATA",
    "WS_KEY_TIMESTAMP",
    "WS_KEY_AUDIO",
    "WS_KEY_FORMAT",
    "DEFAULT_AUDIO_FORMAT",
    "WS_ENDPOINT_PATH",
    "WS_AUTH_QUERY_PARAM",
    "WS_BEARER_PREFIX",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_ABNORMAL_CODE",
    "WS_CLOSE_MANUAL_REASON",
    "EVENT_OPEN",
    "EVENT_CLOSE",
    "EVENT_ERROR",
    "EVENT_MESSAGE",
    "EVENT_STATE_CHANGE",
    "EVENT_RECONNECT_ATTEMPT",
    "CLIENT_EVENTS",
    "ENV_WS_URL",
    "ENV_WS_RECONNECT_ATTEMPTS",
    "ENV_WS_RECONNECT_INTERVAL_MS",
    "ENV_WS_HEARTBEAT_INTERVAL_MS",
    "ENV_WS_MAX_MESSAGE_SIZE",
    "ENV_WS_MAX_QUEUED_MESSAGES",
    "ENV_WS_RECONNECT_BACKOFF",
    "ENV_WS_MAX_RECONNECT_INTERVAL_MS",
    "ENV_WS_DEBUG",
    "DEFAULT_WS_BASE_URL",
    "DEFAULT_WS_RECONNECT_ATTEMPTS",
    "DEFAULT_WS_RECONNECT_INTERVAL_MS",
    "DEFAULT_WS_HEARTBEAT_INTERVAL_MS",
    "DEFAULT_WS_MAX_MESSAGE_SIZE",
    "DEFAULT_WS_MAX_QUEUED_MESSAGES",
    "DEFAULT_WS_RECONNECT_BACKOFF",
    "DEFAULT_WS_MAX_RECONNECT_INTERVAL_MS",
    "DEFAULT_WS_DEBUG",
]
