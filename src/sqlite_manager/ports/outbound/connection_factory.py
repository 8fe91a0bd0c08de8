"""Connection factory port.

The executor never holds a connection between calls. It asks a factory for
a fresh connection, uses it for one operation and closes it.
"""

from __future__ import annotations

import sqlite3
from abc import abstractmethod
from pathlib import Path
from typing import Protocol


class ConnectionFactory(Protocol):
    """Protocol for opening connections to one database file.

    Thread Safety:
        ``connect`` may be called from any thread; each returned connection
        is used by a single operation and then closed.
    """

    @property
    @abstractmethod
    def path(self) -> Path:
        """Absolute path of the database file."""
        ...

    @property
    @abstractmethod
    def encrypted(self) -> bool:
        """Whether connections are keyed with a passphrase."""
        ...

    @abstractmethod
    def ensure_database(self) -> bool:
        """Create the parent directory and the database file if missing.

        Returns:
            True if the file was created by this call.
        """
        ...

    @abstractmethod
    def connect(self) -> sqlite3.Connection:
        """Open a new connection.

        The connection must be in manual transaction mode: statements run
        outside an explicit ``BEGIN`` are committed immediately.

        Raises:
            sqlite3.Error: If the database cannot be opened.
        """
        ...
