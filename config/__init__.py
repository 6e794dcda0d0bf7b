"""Application configuration utilities."""

from .logging_setup import LOG_FORMAT, configure_logging
from .settings import DEFAULT_BASE_URL, DEFAULT_DATA_DIR, Settings, get_settings

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_DATA_DIR",
    "LOG_FORMAT",
    "Settings",
    "configure_logging",
    "get_settings",
]
