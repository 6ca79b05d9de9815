"""
Structured JSON logging: timestamp, event_type, subject_id and keyword fields.

structlog with ISO timestamps, log level, and consistent keys for
aggregation. Engine modules use get_logger() and pass event_type as the
first argument (and subject_id / snapshot_id where relevant).

Level and format come from config.get_settings(); the config package does
not import vendorrisk_logging, so there is no circular import. Call
configure_structlog(settings) to reconfigure (e.g. in tests).
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Any

import structlog

from backend_vendorrisk.config.settings import Settings, get_settings


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_structlog(settings: Settings | None = None) -> None:
    """Configure structlog: JSON or console renderer, timestamp, level filter, event_type."""
    settings = settings or get_settings()
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    # JSON for aggregation (LOG_FORMAT=json); human-readable for local runs
    if settings.json_logs:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("snapshot_compared", subject_id=sid, trend="improved")
    Output (JSON): {"event_type": "snapshot_compared", "subject_id": "...",
    "trend": "improved", "timestamp": "...", "level": "info", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_subject(subject_id: str) -> structlog.BoundLogger:
    """Return a logger with subject_id bound to all subsequent log calls."""
    return get_logger("backend_vendorrisk").bind(subject_id=subject_id)
