"""Application layer for the SQLite manager.

Exports:
    - SqliteDatabaseManager: Locked public surface over one database file
    - StatementExecutor: Runs templates on per-call connections
    - TableVersionStore: Reads and writes the ``table_version`` table
"""

from sqlite_manager.application.database_manager import SqliteDatabaseManager
from sqlite_manager.application.executor import Row, StatementExecutor
from sqlite_manager.application.version_store import UNREGISTERED_VERSION, TableVersionStore

__all__ = [
    "SqliteDatabaseManager",
    "StatementExecutor",
    "TableVersionStore",
    "Row",
    "UNREGISTERED_VERSION",
]
