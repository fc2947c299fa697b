"""
ClickHouse database adapter implementation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from ..dialects.clickhouse import ClickHouseDialect
from ..security.redaction import redact_params
from ..utils import get_logger, time_call
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterExecutionError,
    ConnectionConfig,
    DatabaseAdapter,
)

SLOW_QUERY_ENV_VAR = "CHMETA_SLOW_QUERY_MS"


def _load_driver():
    try:
        from clickhouse_connect import dbapi

        return dbapi
    except ImportError:
        return None


def resolve_slow_query_ms(*, default: int, override: int | None = None) -> int:
    if override is not None:
        return override
    value = os.getenv(SLOW_QUERY_ENV_VAR)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise AdapterConfigurationError(
            f"Invalid integer value for '{SLOW_QUERY_ENV_VAR}': {value!r}"
        ) from exc


@dataclass
class ClickHouseConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any


class ClickHouseAdapter(DatabaseAdapter):
    """
    Adapter wrapping the clickhouse-connect DB-API module.

    ClickHouse has no multi-statement transactions, so ``begin``, ``commit``
    and ``rollback`` only log.
    """

    def __init__(self, config: ConnectionConfig | None = None, slow_query_ms: int | None = None) -> None:
        self.dialect = ClickHouseDialect(config)
        self._state: ClickHouseConnectionState | None = None
        self.logger = get_logger("adapters.clickhouse")
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)

    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError(
                "clickhouse-connect is required to use ClickHouseAdapter."
            )

        self.dialect = ClickHouseDialect(config, clob_length=self.dialect.clob_length)
        options = dict(config.options or {})
        port = config.port if config.port not in (None, "") else self.dialect.default_port()

        self.logger.info("Connecting to ClickHouse %s", config.descriptive_label())

        try:
            connection = driver.connect(
                host=config.host or "localhost",
                port=int(port),
                database=config.database,
                username=config.username or "default",
                password=config.password or "",
                **options,
            )
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to ClickHouse.") from exc

        self._state = ClickHouseConnectionState(connection, config, driver)
        return connection

    def close(self) -> None:
        if self._state:
            try:
                self._state.connection.close()
            finally:
                self._state = None

    def _ensure_connection(self):
        if not self._state:
            raise AdapterConnectionError("ClickHouseAdapter is not connected.")
        return self._state.connection

    def execute(self, sql: str, params: Sequence[Any] | Mapping[str, Any] | None = None):
        connection = self._ensure_connection()
        params = params or ()
        self._validate_params(sql, params)
        cursor = connection.cursor()
        try:
            with time_call(
                "clickhouse.execute",
                self.logger,
                sql=sql,
                params=redact_params(params),
                threshold_ms=self.slow_query_ms,
            ):
                if params:
                    cursor.execute(sql, params)
                else:
                    cursor.execute(sql)
        except Exception:
            cursor.close()
            raise
        return cursor

    def executemany(
        self,
        sql: str,
        seq_of_params: Sequence[Sequence[Any]] | Iterable[Sequence[Any]],
    ):
        connection = self._ensure_connection()
        seq = list(seq_of_params)
        for params in seq:
            self._validate_params(sql, params)
        cursor = connection.cursor()
        try:
            with time_call(
                "clickhouse.executemany",
                self.logger,
                sql=sql,
                params="bulk",
                threshold_ms=self.slow_query_ms,
            ):
                cursor.executemany(sql, seq)
        except Exception:
            cursor.close()
            raise
        return cursor

    def begin(self) -> None:
        self._ensure_connection()
        self.logger.debug("ClickHouse has no transactions; begin ignored.")

    def commit(self) -> None:
        self._ensure_connection()
        self.logger.debug("ClickHouse has no transactions; commit ignored.")

    def rollback(self) -> None:
        self._ensure_connection()
        self.logger.debug("ClickHouse has no transactions; rollback ignored.")

    @staticmethod
    def _count_placeholders(sql: str) -> int:
        count = 0
        idx = 0
        while idx < len(sql) - 1:
            if sql[idx] == "%" and sql[idx + 1] == "s":
                count += 1
                idx += 2
                continue
            if sql[idx] == "%" and sql[idx + 1] == "%":
                idx += 2
                continue
            idx += 1
        return count

    def _validate_params(self, sql: str, params: Sequence[Any] | Mapping[str, Any]) -> None:
        if isinstance(params, Mapping):
            return
        placeholder_count = self._count_placeholders(sql)
        if placeholder_count == 0:
            if params:
                raise AdapterExecutionError(
                    "Parameters provided but SQL statement has no placeholders."
                )
            return
        if placeholder_count != len(params):
            raise AdapterExecutionError(
                f"Parameter count mismatch: expected {placeholder_count}, received {len(params)}."
            )
