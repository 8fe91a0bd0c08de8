"""Domain entities for the SQLite manager.

Exports:
    - SqlTemplate: SQL text with positional ``?`` placeholders
    - PreparedStatement: Translated statement with named parameters
    - CreateTableSpec: Versioned DDL for a table
    - UpsertSpec: Target table and columns for insert-or-replace
"""

from sqlite_manager.domain.entities.templates import (
    CreateTableSpec,
    PreparedStatement,
    SqlTemplate,
    UpsertSpec,
)

__all__ = [
    "CreateTableSpec",
    "PreparedStatement",
    "SqlTemplate",
    "UpsertSpec",
]
