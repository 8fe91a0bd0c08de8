"""Outbound adapters - implementations of outbound ports."""

from sqlite_manager.adapters.outbound.sqlite_connection_factory import SQLiteConnectionFactory

__all__ = ["SQLiteConnectionFactory"]
