import os
import uuid

import pytest

from chmeta.adapters import ConnectionConfig
from chmeta.adapters.clickhouse import ClickHouseAdapter
from chmeta.core import AdapterExecutionError


def _require_clickhouse_adapter():
    try:
        import clickhouse_connect  # noqa: F401
    except ImportError:
        pytest.skip("clickhouse-connect driver not installed")
    dsn = os.getenv("CHMETA_CLICKHOUSE_DSN")
    if not dsn:
        pytest.skip("CHMETA_CLICKHOUSE_DSN not set; skipping ClickHouse integration test")
    adapter = ClickHouseAdapter()
    config = ConnectionConfig.from_dsn(dsn)
    try:
        adapter.connect(config)
    except Exception as exc:  # pragma: no cover - environment dependent
        pytest.skip(f"Cannot connect to ClickHouse for integration test: {exc}")
    return adapter


def test_table_exists_and_drop_roundtrip():
    adapter = _require_clickhouse_adapter()
    dialect = adapter.dialect
    table = f"chmeta_integration_{uuid.uuid4().hex[:8]}"
    try:
        adapter.execute(f"CREATE TABLE {table} (id Int64) ENGINE = MergeTree ORDER BY id")
        cursor = adapter.execute(dialect.sql_table_exists(table))
        assert cursor.fetchone() is None
        cursor = adapter.execute(dialect.sql_column_exists("id", table))
        assert cursor.fetchone() is None

        adapter.execute(dialect.drop_table_if_exists_statement(table))
        with pytest.raises(Exception):
            adapter.execute(dialect.sql_table_exists(table))
    finally:
        try:
            adapter.execute(dialect.drop_table_if_exists_statement(table))
        except Exception:
            pass
        adapter.close()


def test_index_check_wraps_missing_catalog_view():
    adapter = _require_clickhouse_adapter()
    try:
        with pytest.raises(AdapterExecutionError):
            adapter.dialect.check_index_exists(adapter, None, "events", ["id"])
    finally:
        adapter.close()
