import logging

import pytest

from chmeta.core import AdapterExecutionError, ColumnDescriptor, ConnectionConfig, FieldType
from chmeta.dialects import ClickHouseDialect
from chmeta.schema import MigrationEngine


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class RecordingAdapter:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.statements = []
        self.cursors = []

    def execute(self, sql, params=None):
        self.statements.append(sql)
        if self.fail_on is not None and len(self.statements) == self.fail_on:
            raise OSError("Code: 44. Cannot drop column")
        cursor = FakeCursor()
        self.cursors.append(cursor)
        return cursor


@pytest.fixture
def dialect():
    return ClickHouseDialect(ConnectionConfig())


@pytest.fixture
def modify_script(dialect):
    return dialect.modify_column_statement("events", ColumnDescriptor("qty", FieldType.INTEGER, 12, 0))


def test_parse_flags_destructive_statements(dialect, modify_script):
    engine = MigrationEngine(RecordingAdapter(), dialect)
    operations = engine.parse(modify_script)
    assert [op.destructive for op in operations] == [False, False, True, False, False, True]


def test_destructive_script_requires_force(dialect, modify_script, caplog):
    caplog.set_level(logging.WARNING, logger="chmeta.schema.migration")
    adapter = RecordingAdapter()
    engine = MigrationEngine(adapter, dialect)
    with pytest.raises(RuntimeError, match="requires explicit confirmation"):
        engine.apply_script(modify_script)
    assert adapter.statements == []
    assert any("Destructive statement detected" in record.message for record in caplog.records)


def test_forced_script_runs_in_order(dialect, modify_script):
    adapter = RecordingAdapter()
    engine = MigrationEngine(adapter, dialect)
    engine.apply_script(modify_script, force=True)
    assert adapter.statements == [
        "ALTER TABLE events ADD qty_KTL BIGINT",
        "UPDATE events SET qty_KTL=qty",
        "ALTER TABLE events DROP COLUMN qty",
        "ALTER TABLE events ADD qty BIGINT",
        "UPDATE events SET qty=qty_KTL",
        "ALTER TABLE events DROP COLUMN qty_KTL",
    ]
    assert all(cursor.closed for cursor in adapter.cursors)


def test_failure_leaves_earlier_statements_applied(dialect, modify_script):
    adapter = RecordingAdapter(fail_on=3)
    engine = MigrationEngine(adapter, dialect)
    with pytest.raises(AdapterExecutionError, match="Statement 3 of 6") as excinfo:
        engine.apply_script(modify_script, force=True)
    assert isinstance(excinfo.value.__cause__, OSError)
    assert adapter.statements[0] == "ALTER TABLE events ADD qty_KTL BIGINT"
    assert len(adapter.statements) == 3


def test_non_destructive_script_needs_no_force(dialect):
    adapter = RecordingAdapter()
    engine = MigrationEngine(adapter, dialect)
    column = ColumnDescriptor("note", FieldType.STRING, 20)
    engine.apply_script(dialect.add_column_statement("events", column))
    assert adapter.statements == ["ALTER TABLE events ADD note VARCHAR(20)"]
