"""
Error hierarchy shared by the dialect and adapter layers.
"""

from __future__ import annotations

from typing import Any


class AdapterError(RuntimeError):
    """Base error for chmeta failures."""


class AdapterConfigurationError(AdapterError):
    """Raised when configuration or required dependencies are invalid."""


class UnsupportedAccessTypeError(AdapterConfigurationError):
    """Raised when the configured access type has no meaning for this dialect."""

    def __init__(self, message: str, access_type: Any) -> None:
        super().__init__(message)
        self.access_type = access_type


class AdapterConnectionError(AdapterError):
    """Raised when establishing or using a connection fails."""


class AdapterExecutionError(AdapterError):
    """Raised when SQL execution or parameter validation fails."""
