"""Statement executor.

Runs templates and prepared statements against connections obtained from a
ConnectionFactory. Every call opens its own connection and closes it on
exit, including on failure. The executor holds no lock of its own;
serialization is the manager's job.

Result shapes:
    - execute_scalar: first column of the first row, or None
    - execute_non_query: rows affected (DDL reports 0)
    - execute_batch: total rows affected, all-or-nothing
    - query: list of ``{column: value}`` dicts, fully materialized
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Any, Iterable, Iterator

from sqlite_manager.domain.entities import PreparedStatement
from sqlite_manager.domain.services import Statement, prepare, translate_many
from sqlite_manager.domain.value_objects import SqlValue
from sqlite_manager.infrastructure.logging import get_logger
from sqlite_manager.ports.outbound import ConnectionFactory

logger = get_logger(__name__)

Row = dict[str, SqlValue]


def _affected(cursor: sqlite3.Cursor) -> int:
    # sqlite3 reports -1 for statements that are not INSERT/UPDATE/DELETE/REPLACE
    return max(cursor.rowcount, 0)


class StatementExecutor:
    """Executes statements on short-lived connections.

    ``SqlTemplate`` arguments are translated first; ``PreparedStatement``
    arguments run exactly as given.
    """

    def __init__(self, factory: ConnectionFactory) -> None:
        self._factory = factory

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation and always close it."""
        conn = self._factory.connect()
        try:
            yield conn
        finally:
            conn.close()

    def _run(self, conn: sqlite3.Connection, statement: PreparedStatement) -> sqlite3.Cursor:
        return conn.execute(statement.expression, statement.bindings)

    def execute_scalar(self, template: Statement | None) -> Any:
        statement = prepare(template)
        if statement.is_empty:
            return None

        with self.connection() as conn:
            row = self._run(conn, statement).fetchone()
        return row[0] if row else None

    def execute_non_query(self, template: Statement | None) -> int:
        statement = prepare(template)
        if statement.is_empty:
            return 0

        with self.connection() as conn:
            return _affected(self._run(conn, statement))

    def execute_batch(self, templates: Iterable[Statement | None] | None) -> int:
        """Run every template inside one transaction.

        All templates are translated before the connection is opened. On the
        first failing statement the transaction is rolled back and the
        original exception is re-raised unchanged.

        Returns:
            Total rows affected across the batch.
        """
        statements = translate_many(templates)
        if not statements:
            return 0

        with self.connection() as conn:
            conn.execute("BEGIN")
            affected = 0
            index = 0
            try:
                for index, statement in enumerate(statements):
                    affected += _affected(self._run(conn, statement))
                conn.commit()
            except BaseException as e:
                conn.rollback()
                logger.warning(
                    "batch_rolled_back",
                    failed_index=index,
                    statements=len(statements),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

        logger.debug("batch_committed", statements=len(statements), affected_rows=affected)
        return affected

    def query(self, template: Statement | None) -> list[Row]:
        statement = prepare(template)
        if statement.is_empty:
            return []

        with self.connection() as conn:
            cursor = self._run(conn, statement)
            if cursor.description is None:
                return []
            columns = [column[0] for column in cursor.description]
            return [dict(zip(columns, values)) for values in cursor.fetchall()]
