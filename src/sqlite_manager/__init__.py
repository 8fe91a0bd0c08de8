"""
SQLite Manager - convenience layer over a SQLite database file

Opens per-call connections behind a single lock, translates positional
``?`` templates into named parameters, keeps per-table schema versions,
and offers batch and insert-or-replace helpers.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"

from sqlite_manager.application import SqliteDatabaseManager
from sqlite_manager.domain.entities import (
    CreateTableSpec,
    PreparedStatement,
    SqlTemplate,
    UpsertSpec,
)

__all__ = [
    "SqliteDatabaseManager",
    "SqlTemplate",
    "PreparedStatement",
    "CreateTableSpec",
    "UpsertSpec",
]
