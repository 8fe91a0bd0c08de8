"""SQLite connection factory using the standard ``sqlite3`` module.

Connections are opened with ``isolation_level=None`` so the executor
controls transactions explicitly with ``BEGIN``/``COMMIT``/``ROLLBACK``.

Encryption:
    When a passphrase is supplied, every connection issues ``PRAGMA key``
    before anything else. This takes effect when the interpreter's sqlite3
    module is linked against SQLCipher; stock SQLite ignores the pragma.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from sqlite_manager.infrastructure.logging import get_logger

logger = get_logger(__name__)


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class SQLiteConnectionFactory:
    """Opens connections to a single database file.

    The path is resolved to an absolute path at construction time, so a
    later change of working directory does not move the database.
    """

    def __init__(
        self,
        db_path: str | Path,
        encryption_key: str | None = None,
        timeout: float = 5.0,
        foreign_keys: bool = False,
    ) -> None:
        """Initialize the factory.

        Args:
            db_path: Database file path; relative paths resolve against the cwd.
            encryption_key: Optional passphrase for SQLCipher builds.
            timeout: Seconds to wait when another process holds the file lock.
            foreign_keys: Whether to enable foreign key enforcement.
        """
        self._path = Path(db_path).expanduser().resolve()
        self._encryption_key = encryption_key or None
        self._timeout = timeout
        self._foreign_keys = foreign_keys

    @property
    def path(self) -> Path:
        return self._path

    @property
    def encrypted(self) -> bool:
        return self._encryption_key is not None

    def ensure_database(self) -> bool:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if self._path.exists():
            return False

        conn = self.connect()
        conn.close()
        logger.info("database_created", path=str(self._path))
        return True

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            str(self._path),
            timeout=self._timeout,
            isolation_level=None,
            check_same_thread=False,
        )
        try:
            if self._encryption_key is not None:
                conn.execute(f"PRAGMA key = {_quote_literal(self._encryption_key)}")
            if self._foreign_keys:
                conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def __repr__(self) -> str:
        return f"SQLiteConnectionFactory(path={str(self._path)!r}, encrypted={self.encrypted})"
