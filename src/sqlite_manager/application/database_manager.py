"""SQLite database manager - the public entry point.

The manager ties together the connection factory, the statement executor
and the table version store, and serializes every operation behind one
re-entrant lock.

Usage:
    from sqlite_manager import CreateTableSpec, SqlTemplate, SqliteDatabaseManager, UpsertSpec

    db = SqliteDatabaseManager("data/app.db")
    db.initialize()

    db.ensure_table(CreateTableSpec(
        "student", 1, "CREATE TABLE student(name TEXT PRIMARY KEY, age INTEGER)"
    ))
    db.upsert(UpsertSpec("student", ("name", "age")), [{"name": "Jack", "age": 21}])
    rows = db.query(SqlTemplate("SELECT * FROM student WHERE age > ?", (18,)))

Migration policy:
    ``ensure_table`` is destructive. When the requested version is higher
    than the stored one the table is dropped and recreated from its DDL;
    existing rows are discarded. There is no incremental ALTER path.
"""

from __future__ import annotations

import base64
import json
import sqlite3
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Sequence

from sqlite_manager.adapters.outbound import SQLiteConnectionFactory
from sqlite_manager.application.executor import Row, StatementExecutor
from sqlite_manager.application.version_store import TableVersionStore
from sqlite_manager.domain.entities import CreateTableSpec, SqlTemplate, UpsertSpec
from sqlite_manager.domain.services import Statement, statements
from sqlite_manager.domain.value_objects import SqlValue
from sqlite_manager.infrastructure.config import Config
from sqlite_manager.infrastructure.logging import get_logger
from sqlite_manager.infrastructure.metrics import MetricsRegistry
from sqlite_manager.infrastructure.tracing import operation_span
from sqlite_manager.ports.outbound import ConnectionFactory

logger = get_logger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class SqliteDatabaseManager:
    """Convenience layer over one SQLite database file.

    Every public method runs under a single re-entrant lock, so at most one
    operation is in flight per manager and callers block until the lock is
    free. Connections are opened per call and closed on exit.

    Initialization is lazy: the first operation creates the database
    directory, the file and the ``table_version`` table. ``initialize`` may
    also be called explicitly and is idempotent.

    Thread Safety:
        Instances may be shared between threads. Two managers pointing at
        the same file do not share a lock; SQLite's own file locking applies.
    """

    def __init__(
        self,
        db_path: str | Path,
        encryption_key: str | None = None,
        *,
        timeout: float = 5.0,
        foreign_keys: bool = False,
        metrics: MetricsRegistry | None = None,
        factory: ConnectionFactory | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            db_path: Database file path, resolved to an absolute path now.
            encryption_key: Optional passphrase for SQLCipher-enabled builds.
            timeout: Seconds sqlite3 waits on a file locked by another process.
            foreign_keys: Whether to enable foreign key enforcement.
            metrics: Optional metrics registry; nothing is recorded without one.
            factory: Connection factory override; built from the path if None.
        """
        self._factory = factory or SQLiteConnectionFactory(
            db_path,
            encryption_key=encryption_key,
            timeout=timeout,
            foreign_keys=foreign_keys,
        )
        self._executor = StatementExecutor(self._factory)
        self._versions = TableVersionStore(self._executor)
        self._metrics = metrics
        self._lock = threading.RLock()
        self._initialized = False

    @classmethod
    def from_config(
        cls, config: Config, metrics: MetricsRegistry | None = None
    ) -> SqliteDatabaseManager:
        """Build a manager from the ``database`` section of a Config."""
        database = config.database
        key = database.encryption_key.get_secret_value() if database.encryption_key else None
        return cls(
            database.path,
            encryption_key=key,
            timeout=database.timeout_seconds,
            foreign_keys=database.foreign_keys,
            metrics=metrics,
        )

    @property
    def path(self) -> Path:
        """Absolute path of the database file."""
        return self._factory.path

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @contextmanager
    def _operation(self, name: str, **attributes: Any) -> Iterator[None]:
        """Hold the lock for one operation, with tracing and metrics."""
        wait_start = time.perf_counter()
        with self._lock:
            started = time.perf_counter()
            if self._metrics is not None:
                self._metrics.lock_wait_seconds.observe(started - wait_start)

            status = "error"
            with operation_span(name, str(self.path), **attributes):
                try:
                    yield
                    status = "success"
                finally:
                    if self._metrics is not None:
                        self._metrics.statements_total.labels(
                            operation=name, status=status
                        ).inc()
                        self._metrics.statement_latency_seconds.labels(
                            operation=name
                        ).observe(time.perf_counter() - started)

    def _ensure_initialized(self) -> None:
        # Caller holds the lock
        if self._initialized:
            return

        created = self._factory.ensure_database()
        self._versions.ensure_schema()
        self._initialized = True
        logger.info(
            "manager_initialized",
            path=str(self.path),
            created=created,
            encrypted=self._factory.encrypted,
        )

    def initialize(self) -> None:
        """Create the database file and the version table if needed.

        Safe to call repeatedly and across process restarts.
        """
        with self._operation("initialize"):
            self._ensure_initialized()

    # Schema versions

    def get_table_version(self, table_name: str) -> int:
        """Stored version of ``table_name``; 0 if it was never registered."""
        with self._operation("get_table_version", table=table_name):
            self._ensure_initialized()
            return self._versions.get_version(table_name)

    def get_table_versions(self) -> dict[str, int]:
        """Every registered table and its version."""
        with self._operation("get_table_versions"):
            self._ensure_initialized()
            return self._versions.all_versions()

    def ensure_table(self, spec: CreateTableSpec) -> int:
        """Drop and recreate a table when ``spec`` carries a newer version.

        Returns:
            Total rows affected by the drop, the DDL and the version update;
            0 when the stored version is already current.
        """
        with self._operation("ensure_table", table=spec.table_name):
            current = self.get_table_version(spec.table_name)
            if spec.target_version <= current:
                logger.debug(
                    "table_up_to_date",
                    table=spec.table_name,
                    version=current,
                    requested=spec.target_version,
                )
                return 0

            affected = self.drop_table_if_exists(spec.table_name)
            affected += self._executor.execute_non_query(statements.create_table(spec))
            affected += self._versions.set_version(spec.table_name, spec.target_version)

            if self._metrics is not None:
                self._metrics.table_migrations_total.labels(table=spec.table_name).inc()
            logger.info(
                "table_migrated",
                table=spec.table_name,
                from_version=current,
                to_version=spec.target_version,
            )
            return affected

    def ensure_tables(self, specs: Iterable[CreateTableSpec]) -> int:
        """Apply ``ensure_table`` to each spec in order."""
        with self._operation("ensure_tables"):
            return sum(self.ensure_table(spec) for spec in specs)

    def table_exists(self, table_name: str) -> bool:
        with self._operation("table_exists", table=table_name):
            self._ensure_initialized()
            count = self._executor.execute_scalar(statements.count_tables_named(table_name))
            return bool(count)

    def drop_table_if_exists(self, table_name: str) -> int:
        with self._operation("drop_table", table=table_name):
            self._ensure_initialized()
            return self._executor.execute_non_query(statements.drop_table(table_name))

    # Statements

    def execute_scalar(self, template: SqlTemplate) -> SqlValue:
        """First column of the first result row, or None."""
        with self._operation("execute_scalar"):
            self._ensure_initialized()
            return self._executor.execute_scalar(template)

    def execute_non_query(self, template: SqlTemplate) -> int:
        """Run one statement and return the number of rows it affected."""
        with self._operation("execute_non_query"):
            self._ensure_initialized()
            return self._executor.execute_non_query(template)

    def execute_batch(self, templates: Iterable[Statement]) -> int:
        """Run statements in one transaction; all of them commit or none do."""
        templates = list(templates)
        with self._operation("execute_batch", statements=len(templates)):
            self._ensure_initialized()
            try:
                return self._executor.execute_batch(templates)
            except sqlite3.Error:
                if self._metrics is not None:
                    self._metrics.batch_rollbacks_total.inc()
                raise

    def query(self, template: SqlTemplate) -> list[Row]:
        """All result rows as ``{column: value}`` dicts."""
        with self._operation("query"):
            self._ensure_initialized()
            return self._executor.query(template)

    def query_json(self, template: SqlTemplate) -> str:
        """``query`` serialized as a JSON array; BLOBs become base64 text."""
        with self._operation("query_json"):
            rows = self.query(template)
            return json.dumps(rows, ensure_ascii=False, default=_json_default)

    def upsert(self, spec: UpsertSpec, rows: Sequence[Mapping[str, SqlValue]]) -> int:
        """Insert or replace ``rows`` into ``spec.table_name`` as one batch.

        The table needs a primary or unique key for replace semantics to
        apply; otherwise every row is inserted.
        """
        # Fail on an empty column list even when there are no rows
        statements.upsert_expression(spec)
        rows = list(rows)
        if not rows:
            return 0

        with self._operation("upsert", table=spec.table_name, rows=len(rows)):
            affected = self.execute_batch(statements.upsert_statements(spec, rows))
            logger.debug("upsert_applied", table=spec.table_name, rows=len(rows), affected_rows=affected)
            return affected

    def get_stats(self) -> dict[str, Any]:
        """Manager state for diagnostics."""
        with self._operation("get_stats"):
            stats: dict[str, Any] = {
                "path": str(self.path),
                "initialized": self._initialized,
                "encrypted": self._factory.encrypted,
            }
            if self._initialized:
                stats["table_versions"] = self._versions.all_versions()
            return stats

    def __enter__(self) -> SqliteDatabaseManager:
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        # Connections are per call; nothing to release
        return None

    def __repr__(self) -> str:
        return f"SqliteDatabaseManager(path={str(self.path)!r}, initialized={self._initialized})"
