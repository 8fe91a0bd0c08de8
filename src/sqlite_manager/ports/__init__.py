"""Ports layer - interface definitions following Hexagonal Architecture.

Outbound ports describe what the manager needs from the outside world;
adapters implement them.
"""

from sqlite_manager.ports.outbound import ConnectionFactory

__all__ = ["ConnectionFactory"]
