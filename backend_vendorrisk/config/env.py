"""
Environment variable loading for Backend VendorRisk.

- LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: INFO)
- LOG_FORMAT: json | console (default: json)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_vendorrisk/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
ENV_PATH = _ROOT / ".env"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "console")


def load_vendorrisk_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides set vars."""
    if ENV_PATH.is_file():
        load_dotenv(ENV_PATH, override=False)


def get_log_level() -> str:
    """Return LOG_LEVEL upper-cased; unknown values fall back to INFO."""
    load_vendorrisk_env()
    raw = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    return raw if raw in LOG_LEVELS else "INFO"


def get_log_format() -> str:
    """Return LOG_FORMAT: json | console. Default: json."""
    load_vendorrisk_env()
    raw = (os.getenv("LOG_FORMAT") or "json").strip().lower()
    return raw if raw in LOG_FORMATS else "json"
