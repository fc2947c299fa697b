"""
Database adapter interfaces and implementations.
"""

from .base import (
    AccessType,
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    ConnectionConfig,
    DatabaseAdapter,
    UnsupportedAccessTypeError,
)
from .clickhouse import ClickHouseAdapter

__all__ = [
    "AccessType",
    "ConnectionConfig",
    "DatabaseAdapter",
    "AdapterError",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterExecutionError",
    "UnsupportedAccessTypeError",
    "ClickHouseAdapter",
]
