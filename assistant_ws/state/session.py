"""Session correlation carried across reconnects (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionContext:
    session_id: str | None = None
    user_id: str | None = None

    def merged(self, session_id: str | None = None, user_id: str | None = None) -> SessionContext:
        """Return a copy where only the provided (non-empty) ids replace the current ones."""
        return SessionContext(
            session_id=session_id or self.session_id,
            user_id=user_id or self.user_id,
        )


__all__ = ["SessionContext"]
