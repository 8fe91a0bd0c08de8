"""Outbound ports - dependencies on external systems."""

from sqlite_manager.ports.outbound.connection_factory import ConnectionFactory

__all__ = ["ConnectionFactory"]
