"""
ClickHouse dialect implementation.

Several rules emit SQL inherited from an Oracle-flavoured adapter
(``USER_SEQUENCES``, ``DUAL``, ``ROWNUM``, ``chr()`` concatenation). They are
kept byte-for-byte so that previously generated scripts stay comparable.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Final, FrozenSet, Mapping, Sequence

from ..core.connection import (
    STRICT_BIGNUMBER_INTERPRETATION,
    SUPPORTS_BOOLEAN_DATA_TYPE,
    AccessType,
    ConnectionConfig,
)
from ..core.errors import AdapterConfigurationError, AdapterExecutionError, UnsupportedAccessTypeError
from ..core.fields import ColumnDescriptor, FieldType
from ..schema.script import SqlScriptParser
from ..utils import format_message, get_logger
from .base import Dialect, DialectCapabilities

NATIVE_PORT: Final[int] = 8123
UNSPECIFIED_PORT: Final[int] = -1
SOCKET_TIMEOUT_SUFFIX: Final[str] = "?socket_timeout=600000"
CLOB_LENGTH: Final[int] = 9_999_999
TEMP_COLUMN_SUFFIX: Final[str] = "_KTL"
TEMP_COLUMN_PREFIX_LENGTH: Final[int] = 30
CR: Final[str] = "\n"

RESERVED_WORDS: Final[FrozenSet[str]] = frozenset(
    {
        "ALIAS", "AND", "AS", "AT", "BEGIN", "BETWEEN", "BIGINT", "BIT", "BY", "BOOLEAN",
        "BOTH", "CALL", "CASE", "CAST", "CHAR", "CHARACTER", "COMMIT", "CONSTANT", "CURSOR",
        "COALESCE", "CONTINUE", "CONVERT", "CURRENT_DATE", "CURRENT_TIMESTAMP", "CURRENT_USER",
        "DATE", "DEC", "DECIMAL", "DECLARE", "DEFAULT", "DECODE", "DELETE", "ELSE", "ELSIF",
        "END", "EXCEPTION", "EXECUTE", "EXIT", "EXTRACT", "FALSE", "FETCH", "FLOAT", "FOR",
        "FROM", "FUNCTION", "GOTO", "IF", "IN", "INT", "INTO", "IS", "INTEGER", "IMMEDIATE",
        "INDEX", "INOUT", "INSERT", "LEADING", "LIKE", "LIMIT", "LOCALTIME", "LOCALTIMESTAMP",
        "LOOP", "NCHAR", "NEXT", "NOCOPY", "NOT", "NULLIF", "NULL", "NUMBER", "NUMERIC",
        "OPTION", "OF", "OR", "OUT", "OVERLAY", "PERFORM", "POSITION", "PRAGMA", "PROCEDURE",
        "QUERY", "RAISE", "RECORD", "RENAME", "RETURN", "REVERSE", "ROLLBACK", "REAL", "SELECT",
        "SAVEPOINT", "SETOF", "SMALLINT", "SUBSTRING", "SQL", "SYSDATE", "SESSION_USER", "THEN",
        "TO", "TYPE", "TABLE", "TIME", "TIMESTAMP", "TINYINT", "TRAILING", "TREAT", "TRIM",
        "TRUE", "UID", "UPDATE", "USER", "USING", "VARCHAR", "VARCHAR2", "VALUES", "WITH",
        "WHEN", "WHILE", "LEVEL",
    }
)

_PLAIN_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

if TYPE_CHECKING:
    from ..adapters.base import DatabaseAdapter


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def _column_position(cursor: Any, name: str) -> int | None:
    description = getattr(cursor, "description", None) or ()
    for position, column in enumerate(description):
        if str(column[0]).upper() == name:
            return position
    return None


def _read_column(row: Any, position: int | None, name: str) -> str:
    if isinstance(row, Mapping):
        value = next((v for k, v in row.items() if str(k).upper() == name), None)
    elif position is not None:
        value = row[position]
    else:
        value = None
    return "" if value is None else str(value)


class ClickHouseDialect:
    """
    Rule table rendering ClickHouse DDL and helper SQL from host metadata.

    The dialect is bound to one :class:`ConnectionConfig`; the access type and
    the attribute store are read from it, everything else is a pure function
    of the arguments.
    """

    name: Final[str] = "clickhouse"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_auto_inc=False,
        supports_sequences=True,
        supports_sequence_no_max_value_option=True,
        supports_synonyms=True,
        supports_options_in_url=False,
        supports_prepared_statement_metadata_retrieval=False,
        supports_error_handling_on_batch_updates=False,
        supports_repository=True,
        release_savepoint=False,
        needs_to_lock_all_tables=False,
        use_schema_name_for_table_list=True,
        requires_create_table_primary_key_append=True,
    )
    max_columns_in_index: Final[int] = 32
    max_varchar_length: Final[int] = 2000

    def __init__(self, config: ConnectionConfig | None = None, *, clob_length: int = CLOB_LENGTH) -> None:
        self._config = config if config is not None else ConnectionConfig()
        self.clob_length = clob_length
        self.logger = get_logger("dialects.clickhouse")

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    # ------------------------------------------------------------------ #
    # Attribute store
    # ------------------------------------------------------------------ #
    def _flag(self, key: str) -> bool:
        return (self._config.get_attribute(key, "N") or "N").upper() == "Y"

    def _set_flag(self, key: str, value: bool) -> None:
        self._config.set_attribute(key, "Y" if value else "N")

    @property
    def strict_bignumber_interpretation(self) -> bool:
        return self._flag(STRICT_BIGNUMBER_INTERPRETATION)

    @strict_bignumber_interpretation.setter
    def strict_bignumber_interpretation(self, value: bool) -> None:
        self._set_flag(STRICT_BIGNUMBER_INTERPRETATION, value)

    @property
    def supports_boolean_data_type(self) -> bool:
        return self._flag(SUPPORTS_BOOLEAN_DATA_TYPE)

    @supports_boolean_data_type.setter
    def supports_boolean_data_type(self, value: bool) -> None:
        self._set_flag(SUPPORTS_BOOLEAN_DATA_TYPE, value)

    # ------------------------------------------------------------------ #
    # Connection
    # ------------------------------------------------------------------ #
    def access_types(self) -> tuple[AccessType, ...]:
        return (AccessType.NATIVE, AccessType.JNDI)

    def default_port(self) -> int:
        if self._config.access_type is AccessType.NATIVE:
            return NATIVE_PORT
        return UNSPECIFIED_PORT

    def build_url(self, hostname: str | None, port: int | str | None, database_name: str | None) -> str:
        access_type = self._config.access_type
        if access_type is AccessType.ODBC:
            return f"odbc:{database_name}"
        if access_type is not AccessType.NATIVE:
            raise UnsupportedAccessTypeError(
                format_message("unsupported_access_type", access_type=access_type.value),
                access_type,
            )

        host = "localhost" if _is_blank(hostname) else str(hostname)
        port_segment = ""
        if not _is_blank(port) and str(port).strip() != str(UNSPECIFIED_PORT):
            port_segment = f":{str(port).strip()}"
        if _is_blank(database_name):
            raise AdapterConfigurationError(format_message("database_name_required"))
        database = database_name if database_name.startswith("/") else f"/{database_name}"
        return f"clickhouse://{host}{port_segment}{database}{SOCKET_TIMEOUT_SUFFIX}"

    # ------------------------------------------------------------------ #
    # Column DDL
    # ------------------------------------------------------------------ #
    def field_definition(
        self,
        column: ColumnDescriptor,
        *,
        technical_key: str | None = None,
        primary_key: str | None = None,
        use_autoinc: bool = False,
        add_fieldname: bool = True,
        add_cr: bool = False,
    ) -> str:
        parts: list[str] = []
        if add_fieldname:
            parts.append(f"{column.name} ")

        parts.append(self._column_type(column, technical_key, primary_key))

        if add_cr:
            parts.append(CR)
        return "".join(parts)

    def _column_type(
        self, column: ColumnDescriptor, technical_key: str | None, primary_key: str | None
    ) -> str:
        length = column.length
        precision = column.precision

        if column.is_temporal:
            return "TIMESTAMP"
        if column.type is FieldType.BOOLEAN:
            return "BOOLEAN" if self.supports_boolean_data_type else "CHAR(1)"
        if column.is_numeric:
            if self._is_key(column.name, technical_key) or self._is_key(column.name, primary_key):
                return "BIGSERIAL"
            if length <= 0:
                return "DOUBLE PRECISION"
            if precision > 0 or length > 18:
                return f"NUMERIC({length + precision}, {precision})"
            if precision == 0:
                if length > 9:
                    return "BIGINT"
                if length < 5:
                    return "SMALLINT"
                return "INT"
            return "FLOAT(53)"
        if column.type is FieldType.STRING:
            if length < 1 or length >= self.clob_length:
                return "TEXT"
            return f"VARCHAR({length})"
        if column.type is FieldType.BINARY:
            return "BLOB"
        return " UNKNOWN"

    @staticmethod
    def _is_key(column_name: str, key: str | None) -> bool:
        return key is not None and column_name.lower() == key.lower()

    def add_column_statement(
        self,
        table_name: str,
        column: ColumnDescriptor,
        *,
        technical_key: str | None = None,
        primary_key: str | None = None,
        use_autoinc: bool = False,
    ) -> str:
        definition = self.field_definition(
            column,
            technical_key=technical_key,
            primary_key=primary_key,
            use_autoinc=use_autoinc,
            add_fieldname=True,
            add_cr=False,
        )
        return f"ALTER TABLE {table_name} ADD {definition}"

    def drop_column_statement(self, table_name: str, column: ColumnDescriptor, **kwargs: Any) -> str:
        return f"ALTER TABLE {table_name} DROP COLUMN {column.name}{CR}"

    def modify_column_statement(
        self,
        table_name: str,
        column: ColumnDescriptor,
        *,
        technical_key: str | None = None,
        primary_key: str | None = None,
        use_autoinc: bool = False,
    ) -> str:
        """
        Rebuild a column through a temporary copy.

        Not atomic: a failure part way through leaves the ``_KTL`` column in
        place, so callers needing atomicity must wrap the script themselves.
        """

        keys = {"technical_key": technical_key, "primary_key": primary_key, "use_autoinc": use_autoinc}
        temporary = column.renamed(self.temporary_column_name(column.name))

        statements = [
            self.add_column_statement(table_name, temporary, **keys) + ";" + CR,
            f"UPDATE {table_name} SET {temporary.name}={column.name};{CR}",
            self.drop_column_statement(table_name, column) + ";" + CR,
            self.add_column_statement(table_name, column, **keys) + ";" + CR,
            f"UPDATE {table_name} SET {column.name}={temporary.name};{CR}",
            self.drop_column_statement(table_name, temporary),
        ]
        return "".join(statements)

    @staticmethod
    def temporary_column_name(name: str) -> str:
        quoted = len(name) >= 2 and name.startswith('"') and name.endswith('"')
        if quoted:
            name = name[1:-1]
        temporary = name[:TEMP_COLUMN_PREFIX_LENGTH] + TEMP_COLUMN_SUFFIX
        if quoted:
            temporary = f'"{temporary}"'
        return temporary

    def drop_table_if_exists_statement(self, table_name: str) -> str:
        return f"DROP TABLE IF EXISTS {table_name}"

    # ------------------------------------------------------------------ #
    # Identifiers and literals
    # ------------------------------------------------------------------ #
    def reserved_words(self) -> FrozenSet[str]:
        return RESERVED_WORDS

    def is_reserved_word(self, word: str) -> bool:
        return word.upper() in RESERVED_WORDS

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'

    def quote_field(self, name: str) -> str:
        if not name or (len(name) >= 2 and name.startswith('"') and name.endswith('"')):
            return name
        if self.is_reserved_word(name) or not _PLAIN_IDENTIFIER.match(name):
            return self.quote_identifier(name)
        return name

    def quoted_schema_table(self, schema_name: str | None, table_name: str) -> str:
        if _is_blank(schema_name):
            return self.quote_field(table_name)
        return f"{self.quote_field(schema_name)}.{self.quote_field(table_name)}"

    def quote_sql_string(self, value: str) -> str:
        # Line breaks map to chr(13)/chr(10) swapped, as previously generated scripts do.
        value = value.replace("'", "''")
        value = value.replace("\n", "'||chr(13)||'")
        value = value.replace("\r", "'||chr(10)||'")
        return f"'{value}'"

    # ------------------------------------------------------------------ #
    # Catalog and helper queries
    # ------------------------------------------------------------------ #
    def limit_clause(self, nr_rows: int) -> str:
        return f" WHERE ROWNUM <= {nr_rows}"

    def sql_query_fields(self, table_name: str) -> str:
        return f"SELECT * FROM {table_name} WHERE 1=0"

    def sql_table_exists(self, table_name: str) -> str:
        return self.sql_query_fields(table_name)

    def sql_query_column_fields(self, column_name: str, table_name: str) -> str:
        return f"SELECT {column_name} FROM {table_name} WHERE 1=0"

    def sql_column_exists(self, column_name: str, table_name: str) -> str:
        return self.sql_query_column_fields(column_name, table_name)

    def sql_list_of_procedures(self) -> str:
        return "show tables"

    def sql_list_of_sequences(self) -> str:
        return "SELECT SEQUENCE_NAME FROM all_sequences"

    def sql_sequence_exists(self, sequence_name: str) -> str:
        if "." not in sequence_name:
            return f"SELECT * FROM USER_SEQUENCES WHERE SEQUENCE_NAME = '{sequence_name.upper()}'"
        schema_name, sequence = sequence_name.split(".", 1)
        return (
            f"SELECT * FROM ALL_SEQUENCES WHERE SEQUENCE_NAME = '{sequence.upper()}'"
            f" AND SEQUENCE_OWNER = '{schema_name.upper()}'"
        )

    def sql_current_sequence_value(self, sequence_name: str) -> str:
        return f"SELECT {sequence_name}.currval FROM DUAL"

    def sql_next_sequence_value(self, sequence_name: str) -> str:
        return f"SELECT {sequence_name}.nextval FROM dual"

    def sql_lock_tables(self, table_names: Sequence[str]) -> str:
        return "".join(f"LOCK TABLE {table} IN EXCLUSIVE MODE;{CR}" for table in table_names)

    def sql_unlock_tables(self, table_names: Sequence[str]) -> str | None:
        return None

    def create_script_parser(self) -> SqlScriptParser:
        return SqlScriptParser(use_backslash_escape=False)

    # ------------------------------------------------------------------ #
    # Live inspection
    # ------------------------------------------------------------------ #
    def check_index_exists(
        self,
        adapter: "DatabaseAdapter",
        schema_name: str | None,
        table_name: str,
        index_fields: Sequence[str],
    ) -> bool:
        """
        Return True when every name in ``index_fields`` is an indexed column of the table.

        Row order is irrelevant; an absent cursor means no index information
        and yields False. The cursor is closed on every path.
        """

        table_label = self.quoted_schema_table(schema_name, table_name)
        requested = list(index_fields)
        wanted = {field.upper() for field in requested}
        escaped = table_name.replace("'", "''")
        sql = f"SELECT * FROM USER_IND_COLUMNS WHERE TABLE_NAME = '{escaped}'"

        found: set[str] = set()
        try:
            cursor = adapter.execute(sql)
            if cursor is None:
                self.logger.debug("No index information returned for %s", table_label)
                return False
            try:
                position = _column_position(cursor, "COLUMN_NAME")
                row = cursor.fetchone()
                while row is not None:
                    column = _read_column(row, position, "COLUMN_NAME")
                    # Catalog views report upper-case names; match ignoring case.
                    if column.upper() in wanted:
                        found.add(column.upper())
                    row = cursor.fetchone()
            finally:
                cursor.close()
        except Exception as exc:
            raise AdapterExecutionError(format_message("index_check_failed", table=table_label)) from exc

        exists = wanted <= found
        self.logger.debug(
            "Index check on %s for %s: %s", table_label, ", ".join(requested), exists
        )
        return exists


def get_clickhouse_dialect(config: ConnectionConfig | None = None) -> Dialect:
    return ClickHouseDialect(config)
