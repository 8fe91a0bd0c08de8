"""Unit tests for SQLiteConnectionFactory."""

from __future__ import annotations

from pathlib import Path

import pytest

from sqlite_manager.adapters.outbound import SQLiteConnectionFactory


@pytest.mark.unit
class TestSQLiteConnectionFactory:
    """Tests for connection setup."""

    def test_ensure_database_creates_parents_and_file(self, temp_dir: Path) -> None:
        """Ensure database creates parents and file."""
        factory = SQLiteConnectionFactory(temp_dir / "a" / "b" / "app.db")

        assert factory.ensure_database() is True
        assert factory.path.is_file()
        assert factory.ensure_database() is False

    def test_connections_are_in_manual_transaction_mode(self, temp_dir: Path) -> None:
        """Connections are in manual transaction mode."""
        factory = SQLiteConnectionFactory(temp_dir / "app.db")

        conn = factory.connect()
        try:
            assert conn.isolation_level is None
            assert not conn.in_transaction
        finally:
            conn.close()

    def test_foreign_keys_pragma(self, temp_dir: Path) -> None:
        """Foreign keys pragma."""
        factory = SQLiteConnectionFactory(temp_dir / "app.db", foreign_keys=True)

        conn = factory.connect()
        try:
            assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        finally:
            conn.close()

    def test_encryption_key_with_quote_is_accepted(self, temp_dir: Path) -> None:
        """Encryption key with quote is accepted."""
        # Stock SQLite ignores PRAGMA key; the statement must still be valid SQL
        factory = SQLiteConnectionFactory(temp_dir / "app.db", encryption_key="it's secret")

        assert factory.encrypted
        factory.ensure_database()
        conn = factory.connect()
        try:
            assert conn.execute("SELECT 1").fetchone()[0] == 1
        finally:
            conn.close()

    def test_empty_key_means_unencrypted(self, temp_dir: Path) -> None:
        """Empty key means unencrypted."""
        assert not SQLiteConnectionFactory(temp_dir / "app.db", encryption_key="").encrypted

    def test_repr_hides_key(self, temp_dir: Path) -> None:
        """Repr hides key."""
        factory = SQLiteConnectionFactory(temp_dir / "app.db", encryption_key="hunter2")

        assert "hunter2" not in repr(factory)
