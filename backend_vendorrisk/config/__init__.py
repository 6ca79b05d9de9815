"""
Configuration management for Backend VendorRisk.

Loads settings from environment variables and an optional .env file.
The scoring engine computes without configuration; settings cover the
ambient concerns (log level and format).
"""

from backend_vendorrisk.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
