"""
Structured logging for Backend VendorRisk.

JSON logs with timestamp, event_type and keyword fields.
Use get_logger(__name__) in every engine module.
"""

from backend_vendorrisk.vendorrisk_logging.logger import bind_subject, get_logger

__all__ = ["bind_subject", "get_logger"]
