from .timers import TaskSlot
from .events import Handler, EventEmitter
from .outbound import OutboundQueue
from .dispatch import MessageDispatcher
from .reconnect import ReconnectScheduler
from .heartbeat import HeartbeatMonitor
from .connection import RealtimeClient
from .transport import TransportFactory, WebSocketTransport, open_websocket
from .endpoint import (
    CredentialProvider,
    build_ws_url,
    extract_token,
    resolve_endpoint,
    append_auth_query,
)

__all__ = [
    "CredentialProvider",
    "EventEmitter",
    "Handler",
    "HeartbeatMonitor",
    "MessageDispatcher",
    "OutboundQueue",
    "RealtimeClient",
    "ReconnectScheduler",
    "TaskSlot",
    "TransportFactory",
    "WebSocketTransport",
    "append_auth_query",
    "build_ws_url",
    "extract_token",
    "open_websocket",
    "resolve_endpoint",
]
