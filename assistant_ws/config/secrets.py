"""Secrets and authentication configuration."""

from __future__ import annotations

import os

ENV_ACCESS_TOKEN = "ASSISTANT_ACCESS_TOKEN"


def get_access_token() -> str | None:
    token = (os.getenv(ENV_ACCESS_TOKEN) or "").strip()
    return token or None


__all__ = ["ENV_ACCESS_TOKEN", "get_access_token"]
