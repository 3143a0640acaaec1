"""Console client: connect, send chat messages, print what comes back."""

from __future__ import annotations

import sys
import uuid
import asyncio
import logging
import argparse

import orjson

from assistant_ws.state import Envelope
from assistant_ws.errors import TransportError
from assistant_ws.client import RealtimeClient, build_ws_url
from assistant_ws.runtime import load_config, configure_logging
from assistant_ws.protocol import envelope_to_wire

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="assistant-ws", description="Talk to the assistant's realtime /ws endpoint")
    p.add_argument("--url", default=None, help="endpoint URL (default: ASSISTANT_WS_URL or ws://localhost:8081/ws)")
    p.add_argument("--session-id", default=None, help="session id (default: a fresh UUID4)")
    p.add_argument("--user-id", default=None)
    p.add_argument("--message", "-m", action="append", default=[], help="chat message to send (repeatable)")
    p.add_argument("--listen", type=float, default=5.0, help="seconds to keep printing inbound messages")
    p.add_argument("--debug", action="store_true")
    return p.parse_args(argv)


def _print_envelope(envelope: Envelope) -> None:
    sys.stdout.write(orjson.dumps(envelope_to_wire(envelope)).decode("utf-8") + "\n")
    sys.stdout.flush()


async def run(args: argparse.Namespace) -> int:
    config = load_config(endpoint=build_ws_url(args.url) if args.url else None, debug_logging=args.debug or None)
    session_id = args.session_id or str(uuid.uuid4())

    client = RealtimeClient(config)
    client.on("message", _print_envelope)
    try:
        await client.connect(session_id=session_id, user_id=args.user_id)
    except TransportError as exc:
        logger.error("Could not connect to %s: %s", config.endpoint, exc)
        await client.disconnect()
        return 1

    try:
        for text in args.message:
            if not await client.send_chat(text):
                logger.warning("Message queued, not sent: %r", text)
        await asyncio.sleep(max(0.0, args.listen))
    finally:
        await client.disconnect()
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging("DEBUG" if args.debug else None)
    raise SystemExit(asyncio.run(run(args)))


__all__ = ["main", "parse_args", "run"]
