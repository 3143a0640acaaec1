"""Envelope message types (wire values)."""

from __future__ import annotations

from enum import Enum


class MessageType(str, Enum):
    CHAT = "Chat"
    VOICE_DATA = "VoiceData"
    STATUS_UPDATE = "StatusUpdate"
    ERROR = "Error"
    PING = "Ping"
    PONG = "Pong"


__all__ = ["MessageType"]
