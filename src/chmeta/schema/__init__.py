"""
Script parsing and execution utilities.
"""

from .migration import MigrationEngine, MigrationOperation
from .script import SqlScriptParser

__all__ = ["MigrationEngine", "MigrationOperation", "SqlScriptParser"]
