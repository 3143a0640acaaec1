"""Runtime package: environment loading and process-level setup."""

from .logging import configure_logging
from .settings_loader import load_config

__all__ = ["configure_logging", "load_config"]
