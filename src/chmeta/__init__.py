"""
chmeta public package initialization.

ClickHouse dialect rules for ETL hosts: column DDL, quoting, reserved words,
connection URLs and the index-existence check.
"""

from .core import (  # noqa: F401
    AccessType,
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    ColumnDescriptor,
    ConnectionConfig,
    FieldType,
    UnsupportedAccessTypeError,
)
from .dialects import ClickHouseDialect, DialectCapabilities  # noqa: F401
from .schema import MigrationEngine, SqlScriptParser  # noqa: F401

__all__ = [
    "AccessType",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterError",
    "AdapterExecutionError",
    "ClickHouseDialect",
    "ColumnDescriptor",
    "ConnectionConfig",
    "DialectCapabilities",
    "FieldType",
    "MigrationEngine",
    "SqlScriptParser",
    "UnsupportedAccessTypeError",
]
