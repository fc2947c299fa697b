"""
Adapter protocol definitions for chmeta.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from ..core.connection import AccessType, ConnectionConfig
from ..core.errors import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    UnsupportedAccessTypeError,
)
from ..dialects.base import Dialect

__all__ = [
    "AccessType",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterError",
    "AdapterExecutionError",
    "ConnectionConfig",
    "DatabaseAdapter",
    "UnsupportedAccessTypeError",
]


class DatabaseAdapter(Protocol):
    """
    Session capability the dialect relies on for live inspection.

    ``execute`` returns a DB-API cursor (``fetchone``, ``description``,
    ``close``) or ``None`` when the statement produced no result set.
    """

    dialect: Dialect
    slow_query_ms: int

    def connect(self, config: ConnectionConfig) -> Any:
        """
        Establish a connection handle using the supplied configuration.
        """

    def close(self) -> None:
        """
        Close underlying resources. Implementations should be idempotent.
        """

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any:
        """
        Execute a single SQL statement returning a cursor-like object.
        """

    def executemany(self, sql: str, seq_of_params: Sequence[Sequence[Any]]) -> Any:
        """
        Execute a prepared statement against multiple parameter sets.
        """

    def begin(self) -> None:
        """
        Start a transaction where the backend has one.
        """

    def commit(self) -> None:
        """
        Commit the current transaction context.
        """

    def rollback(self) -> None:
        """
        Roll back the current transaction context.
        """
