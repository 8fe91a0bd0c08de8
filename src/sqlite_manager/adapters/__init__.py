"""Adapters layer - concrete implementations of ports.

Inbound adapters expose the manager to clients (REST); outbound adapters
connect it to the SQLite engine.
"""

from sqlite_manager.adapters.outbound import SQLiteConnectionFactory

__all__ = ["SQLiteConnectionFactory"]
