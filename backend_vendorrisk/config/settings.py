"""
Application settings.

Typed, read-once view of the environment (see config.env). get_settings()
is cached; tests call get_settings.cache_clear() after changing the env.
Logging is configured from these settings at import time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from backend_vendorrisk.config.env import get_log_format, get_log_level


@dataclass(frozen=True)
class Settings:
    """Resolved settings for the engine process."""

    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def log_level_value(self) -> int:
        """Numeric stdlib level for structlog's filtering logger."""
        return getattr(logging, self.log_level, logging.INFO)

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"

    def to_dict(self) -> dict[str, Any]:
        return {
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the current application settings (cached)."""
    return Settings(log_level=get_log_level(), log_format=get_log_format())
