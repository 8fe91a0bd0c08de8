"""Schema version store.

Keeps one integer version per table name in the reserved ``table_version``
table. A table that has never been registered reports version 0.
"""

from __future__ import annotations

from sqlite_manager.application.executor import StatementExecutor
from sqlite_manager.domain.services import statements

UNREGISTERED_VERSION = 0


class TableVersionStore:
    """Reads and writes rows of the ``table_version`` table."""

    def __init__(self, executor: StatementExecutor) -> None:
        self._executor = executor

    def ensure_schema(self) -> int:
        """Create the version table if it does not exist."""
        return self._executor.execute_non_query(statements.create_version_table())

    def get_version(self, table_name: str) -> int:
        value = self._executor.execute_scalar(statements.select_version(table_name))
        if value is None:
            return UNREGISTERED_VERSION
        return int(value)

    def set_version(self, table_name: str, version: int) -> int:
        """Insert or replace the version for ``table_name``.

        Returns:
            Rows affected (1).
        """
        return self._executor.execute_batch([statements.replace_version(table_name, version)])

    def all_versions(self) -> dict[str, int]:
        rows = self._executor.query(statements.select_all_versions())
        return {row["table_name"]: int(row["version"] or 0) for row in rows}
