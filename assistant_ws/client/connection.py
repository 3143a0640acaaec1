"""Connection state machine for the realtime messaging client.

The client owns one transport at a time and is the only writer of its
state. Everything runs on one event loop: socket reads, the heartbeat and the
reconnect delay are tasks held in cancellable slots, and ``disconnect()``
cancels all three before closing the socket.
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
import dataclasses
from typing import Any

from assistant_ws.config.secrets import get_access_token
from assistant_ws.errors import ProtocolError, TransportError, ExhaustionError
from assistant_ws.protocol import utc_timestamp, serialize_envelope
from assistant_ws.state import (
    Envelope,
    ChatPayload,
    MessageType,
    ControlPayload,
    SessionContext,
    ConnectionState,
    ConnectionConfig,
    VoiceDataPayload,
)
from assistant_ws.config.websocket import (
    EVENT_OPEN,
    EVENT_CLOSE,
    EVENT_ERROR,
    CLIENT_EVENTS,
    EVENT_MESSAGE,
    EVENT_STATE_CHANGE,
    DEFAULT_AUDIO_FORMAT,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_ABNORMAL_CODE,
    WS_CLOSE_MANUAL_REASON,
    EVENT_RECONNECT_ATTEMPT,
)

from .timers import TaskSlot
from .events import Handler, EventEmitter
from .outbound import OutboundQueue
from .reconnect import ReconnectScheduler
from .heartbeat import HeartbeatMonitor
from .dispatch import MessageDispatcher
from .endpoint import CredentialProvider, resolve_endpoint
from .transport import TransportFactory, WebSocketTransport, open_websocket

logger = logging.getLogger(__name__)


class RealtimeClient:
    """Persistent, self-healing connection to the assistant's realtime endpoint.

    Args:
        config: Immutable connection settings.
        credentials: Returns the current access token (optionally prefixed
            with ``Bearer``); called on every connection attempt. Defaults to
            the ``ASSISTANT_ACCESS_TOKEN`` environment variable.
        transport_factory: Opens a transport for a URL. Defaults to
            :func:`open_websocket`.

    Example::

        client = RealtimeClient(load_config())
        client.on("message", lambda envelope: print(envelope.data))
        await client.connect(session_id="s-1")
        await client.send_chat("hello")
    """

    def __init__(
        self,
        config: ConnectionConfig,
        *,
        credentials: CredentialProvider | None = get_access_token,
        transport_factory: TransportFactory | None = None,
    ) -> None:
        self._config = config
        self._credentials = credentials
        self._transport_factory = transport_factory or open_websocket
        self._debug = bool(config.debug_logging)

        self._state = ConnectionState.DISCONNECTED
        self._session = SessionContext()
        self._transport: WebSocketTransport | None = None
        self._manually_disconnected = False
        # Bumped by disconnect(); an open that finishes under a stale value is discarded.
        self._generation = 0
        self._opening: asyncio.Future[bool] | None = None

        self._events = EventEmitter(CLIENT_EVENTS)
        self._queue = OutboundQueue(max_size=config.max_queued_messages)
        self._receiver = TaskSlot("receive-loop")
        self._reconnect = ReconnectScheduler(
            max_attempts=config.max_reconnect_attempts,
            interval_s=config.reconnect_interval_s,
            backoff_multiplier=config.reconnect_backoff_multiplier,
            max_interval_s=config.max_reconnect_interval_s,
        )
        self._heartbeat = HeartbeatMonitor(
            send_ping=self.ping,
            is_connected=self.is_connected,
            interval_s=config.heartbeat_interval_s,
        )
        self._dispatcher = MessageDispatcher(
            reply=self.send,
            forward=self._forward_message,
            on_pong=self._heartbeat.acknowledge_pong,
            debug=self._debug,
        )

        self._log_debug("Realtime client initialized with config: %s", config)

    # -- Introspection --------------------------------------------------------

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def queued_count(self) -> int:
        return len(self._queue)

    @property
    def reconnect_attempt(self) -> int:
        return self._reconnect.attempt

    def get_state(self) -> ConnectionState:
        return self._state

    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED and self._transport_open()

    # -- Listeners ------------------------------------------------------------

    def on(self, event: str, handler: Handler | None = None) -> Any:
        """Register a listener for ``open``, ``close``, ``error``, ``message``,
        ``state_change`` or ``reconnect_attempt``. Usable as a decorator."""
        return self._events.on(event, handler)

    def off(self, event: str, handler: Handler) -> bool:
        return self._events.off(event, handler)

    # -- Lifecycle ------------------------------------------------------------

    async def __aenter__(self) -> RealtimeClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.disconnect()

    async def connect(self, session_id: str | None = None, user_id: str | None = None) -> None:
        """Open the connection; returns once it is open, raises TransportError if opening fails."""
        if self.is_connected():
            self._log_debug("Already connected")
            return

        if self._opening is not None:
            # Join the attempt already in flight instead of opening a second socket.
            if not await asyncio.shield(self._opening):
                raise TransportError(reason="connection attempt failed")
            return

        # Claimed before the first await so concurrent callers join this attempt.
        opening: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
        self._opening = opening
        try:
            self._session = self._session.merged(session_id, user_id)
            self._manually_disconnected = False
            await self._reconnect.cancel()
            generation = self._generation

            self._set_state(ConnectionState.CONNECTING)
            transport = await self._open_transport(generation)
            await self._handle_open(transport, generation)
        except BaseException:
            opening.set_result(False)
            raise
        else:
            opening.set_result(True)
        finally:
            self._opening = None

    async def disconnect(self) -> None:
        """Close the connection on purpose; no reconnect follows. Safe to call repeatedly."""
        self._manually_disconnected = True
        self._generation += 1
        await self._heartbeat.stop()
        await self._reconnect.cancel()

        transport, self._transport = self._transport, None
        await self._receiver.cancel()
        if transport is not None:
            with contextlib.suppress(Exception):
                await transport.close(code=WS_CLOSE_NORMAL_CODE, reason=WS_CLOSE_MANUAL_REASON)

        self._set_state(ConnectionState.DISCONNECTED)
        if transport is not None:
            self._events.emit(EVENT_CLOSE, WS_CLOSE_NORMAL_CODE, WS_CLOSE_MANUAL_REASON)
            logger.info("Realtime connection manually disconnected")

    def update_session(self, session_id: str, user_id: str | None = None) -> None:
        self._session = self._session.merged(session_id, user_id)
        logger.info("Session updated: session_id=%s user_id=%s", self._session.session_id, self._session.user_id)

    # -- Sending --------------------------------------------------------------

    async def send(self, envelope: Envelope) -> bool:
        """Send now if connected (True); otherwise queue it (False).

        Oversized or unserializable envelopes are rejected (False) and never
        queued.
        """
        stamped = dataclasses.replace(
            envelope,
            session_id=envelope.session_id or self._session.session_id,
            user_id=envelope.user_id or self._session.user_id,
            timestamp=utc_timestamp(),
        )
        try:
            text = serialize_envelope(stamped, max_size_bytes=self._config.max_message_size_bytes)
        except ProtocolError as exc:
            logger.warning("Rejected outbound %s message: %s", stamped.message_type.value, exc)
            return False

        if self.is_connected() and self._transport is not None:
            try:
                await self._transport.send_text(text)
            except Exception as exc:
                logger.warning("Failed to send %s message, queueing it: %s", stamped.message_type.value, exc)
                self._queue.append(stamped)
                return False
            self._log_debug("Sent message: %s", stamped.message_type.value)
            return True

        self._queue.append(stamped)
        self._log_debug("Message queued (not connected): %s", stamped.message_type.value)
        return False

    async def send_chat(self, text: str, session_id: str | None = None) -> bool:
        return await self.send(
            Envelope(message_type=MessageType.CHAT, data=ChatPayload(text=text), session_id=session_id)
        )

    async def send_voice_data(
        self,
        audio: bytes,
        session_id: str | None = None,
        *,
        audio_format: str = DEFAULT_AUDIO_FORMAT,
    ) -> bool:
        payload = VoiceDataPayload(audio=bytes(audio), format=audio_format)
        return await self.send(Envelope(message_type=MessageType.VOICE_DATA, data=payload, session_id=session_id))

    async def ping(self) -> bool:
        return await self.send(Envelope(message_type=MessageType.PING, data=ControlPayload()))

    # -- Internals: state -----------------------------------------------------

    def _set_state(self, new_state: ConnectionState) -> None:
        if self._state is new_state:
            return
        self._state = new_state
        self._log_debug("State changed to: %s", new_state.value)
        self._events.emit(EVENT_STATE_CHANGE, new_state)

    def _transport_open(self) -> bool:
        return self._transport is not None and self._transport.is_open

    def _log_debug(self, msg: str, *args: Any) -> None:
        if self._debug:
            logger.debug(msg, *args)

    # -- Internals: opening ---------------------------------------------------

    async def _open_transport(self, generation: int) -> WebSocketTransport:
        try:
            url = resolve_endpoint(self._config.endpoint, self._credentials)
            transport = await self._transport_factory(url)
        except Exception as exc:
            error = exc if isinstance(exc, TransportError) else TransportError(reason=f"failed to open connection: {exc}")
            if generation == self._generation:
                self._handle_open_failure(error)
            raise error from exc

        if generation != self._generation:
            # disconnect() ran while the handshake was in flight.
            with contextlib.suppress(Exception):
                await transport.close(code=WS_CLOSE_NORMAL_CODE, reason=WS_CLOSE_MANUAL_REASON)
            raise TransportError(reason="connection attempt cancelled by disconnect", code=WS_CLOSE_NORMAL_CODE, clean=True)
        return transport

    async def _handle_open(self, transport: WebSocketTransport, generation: int) -> None:
        self._transport = transport
        self._reconnect.reset()
        flushed = await self._queue.drain(self._send_queued, self._transport_open)
        if flushed:
            self._log_debug("Flushed %s queued message(s)", flushed)
        if generation != self._generation:
            raise TransportError(reason="connection closed by disconnect", code=WS_CLOSE_NORMAL_CODE, clean=True)
        self._receiver.start(self._receive_loop(transport))
        self._set_state(ConnectionState.CONNECTED)
        self._heartbeat.start()
        logger.info("Realtime connection open: %s", self._config.endpoint)
        self._events.emit(EVENT_OPEN)

    def _handle_open_failure(self, error: TransportError) -> None:
        logger.warning("Realtime connection failed to open: %s", error)
        self._set_state(ConnectionState.ERROR)
        self._events.emit(EVENT_ERROR, error)
        self._handle_closed(WS_CLOSE_ABNORMAL_CODE, error.reason)

    async def _send_queued(self, envelope: Envelope) -> None:
        if self._transport is None:
            raise TransportError(reason="no transport")
        await self._transport.send_text(serialize_envelope(envelope))
        self._log_debug("Sent queued message: %s", envelope.message_type.value)

    # -- Internals: receiving and closing -------------------------------------

    async def _receive_loop(self, transport: WebSocketTransport) -> None:
        try:
            while True:
                raw = await transport.recv()
                await self._dispatcher.dispatch(raw)
        except TransportError as exc:
            if transport is self._transport:
                await self._handle_transport_closed(exc)
        except Exception as exc:
            logger.exception("Receive loop failed")
            if transport is self._transport:
                await self._handle_transport_closed(TransportError(reason=f"receive failed: {exc}"))

    async def _handle_transport_closed(self, error: TransportError) -> None:
        self._transport = None
        if not error.clean:
            logger.warning("Realtime connection error: %s", error)
            self._set_state(ConnectionState.ERROR)
            self._events.emit(EVENT_ERROR, error)
        await self._heartbeat.stop()
        self._handle_closed(error.code, error.reason)

    def _handle_closed(self, code: int, reason: str) -> None:
        logger.info("Realtime connection closed: code=%s reason=%s", code, reason)
        self._set_state(ConnectionState.DISCONNECTED)
        self._events.emit(EVENT_CLOSE, code, reason)
        if not self._manually_disconnected:
            self._schedule_reconnect()

    def _forward_message(self, envelope: Envelope) -> None:
        self._events.emit(EVENT_MESSAGE, envelope)

    # -- Internals: reconnecting ----------------------------------------------

    def _schedule_reconnect(self) -> None:
        try:
            attempt = self._reconnect.next_attempt()
        except ExhaustionError as exc:
            logger.warning("Not reconnecting: %s", exc)
            return
        self._set_state(ConnectionState.RECONNECTING)
        self._events.emit(EVENT_RECONNECT_ATTEMPT, attempt, self._reconnect.max_attempts)
        self._reconnect.schedule(self._retry_connect)

    async def _retry_connect(self) -> None:
        try:
            await self.connect()
        except TransportError as exc:
            logger.debug("Reconnect failed: %s", exc)


__all__ = ["RealtimeClient"]
