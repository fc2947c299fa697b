"""
Utility helpers shared across chmeta packages.
"""

from .logging import configure_logging, get_logger, time_call
from .messages import format_message, set_locale

__all__ = ["configure_logging", "format_message", "get_logger", "set_locale", "time_call"]
