"""
Dialect strategy registry.
"""

from .base import Dialect, DialectCapabilities
from .clickhouse import RESERVED_WORDS, ClickHouseDialect

__all__ = ["Dialect", "DialectCapabilities", "ClickHouseDialect", "RESERVED_WORDS"]
