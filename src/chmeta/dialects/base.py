"""
Dialect strategy interfaces describing the rules an ETL host asks of a database.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, FrozenSet, Protocol, Sequence

from ..core.connection import AccessType, ConnectionConfig
from ..core.fields import ColumnDescriptor

if TYPE_CHECKING:
    from ..adapters.base import DatabaseAdapter
    from ..schema.script import SqlScriptParser


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags the host consults before asking for a rule.
    """

    supports_auto_inc: bool = True
    supports_sequences: bool = False
    supports_sequence_no_max_value_option: bool = False
    supports_synonyms: bool = False
    supports_options_in_url: bool = True
    supports_prepared_statement_metadata_retrieval: bool = True
    supports_error_handling_on_batch_updates: bool = True
    supports_repository: bool = False
    release_savepoint: bool = True
    needs_to_lock_all_tables: bool = True
    use_schema_name_for_table_list: bool = False
    requires_create_table_primary_key_append: bool = False


class Dialect(Protocol):
    """
    Rule table consumed by the host: metadata in, SQL fragment out.
    """

    @property
    def name(self) -> str: ...

    @property
    def capabilities(self) -> DialectCapabilities: ...

    @property
    def config(self) -> ConnectionConfig: ...

    @property
    def strict_bignumber_interpretation(self) -> bool: ...

    @strict_bignumber_interpretation.setter
    def strict_bignumber_interpretation(self, value: bool) -> None: ...

    @property
    def supports_boolean_data_type(self) -> bool: ...

    @supports_boolean_data_type.setter
    def supports_boolean_data_type(self, value: bool) -> None: ...

    def default_port(self) -> int: ...

    def access_types(self) -> tuple[AccessType, ...]: ...

    def build_url(self, hostname: str | None, port: int | str | None, database_name: str | None) -> str: ...

    def field_definition(
        self,
        column: ColumnDescriptor,
        *,
        technical_key: str | None = None,
        primary_key: str | None = None,
        use_autoinc: bool = False,
        add_fieldname: bool = True,
        add_cr: bool = False,
    ) -> str: ...

    def add_column_statement(self, table_name: str, column: ColumnDescriptor, **kwargs) -> str: ...

    def drop_column_statement(self, table_name: str, column: ColumnDescriptor, **kwargs) -> str: ...

    def modify_column_statement(self, table_name: str, column: ColumnDescriptor, **kwargs) -> str: ...

    def reserved_words(self) -> FrozenSet[str]: ...

    def is_reserved_word(self, word: str) -> bool: ...

    def quote_identifier(self, identifier: str) -> str: ...

    def quote_field(self, name: str) -> str: ...

    def quoted_schema_table(self, schema_name: str | None, table_name: str) -> str: ...

    def quote_sql_string(self, value: str) -> str: ...

    def limit_clause(self, nr_rows: int) -> str: ...

    def sql_query_fields(self, table_name: str) -> str: ...

    def sql_table_exists(self, table_name: str) -> str: ...

    def sql_column_exists(self, column_name: str, table_name: str) -> str: ...

    def sql_list_of_procedures(self) -> str: ...

    def sql_list_of_sequences(self) -> str: ...

    def sql_sequence_exists(self, sequence_name: str) -> str: ...

    def sql_current_sequence_value(self, sequence_name: str) -> str: ...

    def sql_next_sequence_value(self, sequence_name: str) -> str: ...

    def sql_lock_tables(self, table_names: Sequence[str]) -> str: ...

    def sql_unlock_tables(self, table_names: Sequence[str]) -> str | None: ...

    def drop_table_if_exists_statement(self, table_name: str) -> str: ...

    def check_index_exists(
        self,
        adapter: "DatabaseAdapter",
        schema_name: str | None,
        table_name: str,
        index_fields: Sequence[str],
    ) -> bool: ...

    def create_script_parser(self) -> "SqlScriptParser": ...
