"""
Executes dialect-generated DDL scripts statement by statement.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence

from ..core.errors import AdapterExecutionError
from ..security.migrations import confirm_destructive_operation
from ..utils import get_logger
from .script import SqlScriptParser

if TYPE_CHECKING:
    from ..adapters.base import DatabaseAdapter
    from ..dialects.base import Dialect

_DESTRUCTIVE_RE = re.compile(r"\b(DROP|TRUNCATE)\b", re.IGNORECASE)


@dataclass
class MigrationOperation:
    sql: str
    destructive: bool = False
    description: str | None = None


class MigrationEngine:
    """
    Runs multi-statement scripts through an adapter.

    There is no rollback: when a statement fails, the statements before it
    stay applied and the error names the failing statement.
    """

    def __init__(self, adapter: "DatabaseAdapter", dialect: "Dialect") -> None:
        self.adapter = adapter
        self.dialect = dialect
        self.logger = get_logger("schema.migration")

    def parse(self, script: str) -> List[MigrationOperation]:
        parser: SqlScriptParser = self.dialect.create_script_parser()
        return [
            MigrationOperation(sql=statement, destructive=bool(_DESTRUCTIVE_RE.search(statement)))
            for statement in parser.split(script)
        ]

    def apply_script(self, script: str, *, force: bool = False) -> List[MigrationOperation]:
        operations = self.parse(script)
        self.apply(operations, force=force)
        return operations

    def apply(self, operations: Sequence[MigrationOperation], *, force: bool = False) -> None:
        for op in operations:
            if op.destructive:
                description = op.description or op.sql
                self.logger.warning("Destructive statement detected: %s (force=%s)", description, force)
                confirm_destructive_operation(description, force=force)

        for number, op in enumerate(operations, start=1):
            try:
                cursor = self.adapter.execute(op.sql)
            except Exception as exc:
                self.logger.error(
                    "Statement %s of %s failed; earlier statements remain applied.",
                    number,
                    len(operations),
                )
                raise AdapterExecutionError(
                    f"Statement {number} of {len(operations)} failed: {op.sql}"
                ) from exc
            if cursor is not None and hasattr(cursor, "close"):
                cursor.close()
