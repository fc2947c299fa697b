"""
Column metadata handed to the dialect by the host.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class FieldType(Enum):
    """
    Logical value types known to the host. Only some have a DDL mapping.
    """

    NONE = "none"
    NUMBER = "number"
    STRING = "string"
    DATE = "date"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    BIGNUMBER = "bignumber"
    SERIALIZABLE = "serializable"
    BINARY = "binary"
    TIMESTAMP = "timestamp"
    INET = "inet"


NUMERIC_TYPES = frozenset({FieldType.NUMBER, FieldType.INTEGER, FieldType.BIGNUMBER})
TEMPORAL_TYPES = frozenset({FieldType.DATE, FieldType.TIMESTAMP})


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Immutable description of one column.

    ``length`` and ``precision`` use ``-1`` for "not declared".
    """

    name: str
    type: FieldType
    length: int = -1
    precision: int = -1

    @property
    def is_numeric(self) -> bool:
        return self.type in NUMERIC_TYPES

    @property
    def is_temporal(self) -> bool:
        return self.type in TEMPORAL_TYPES

    def renamed(self, name: str) -> "ColumnDescriptor":
        return replace(self, name=name)
