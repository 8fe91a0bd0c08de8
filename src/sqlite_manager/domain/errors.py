"""Exceptions raised by the SQLite manager before a statement reaches the engine.

Engine failures are not wrapped: ``sqlite3.Error`` and its subclasses reach
the caller unchanged.
"""

from __future__ import annotations


class SqliteManagerError(Exception):
    """Base class for manager-level validation errors."""

    pass


class PlaceholderMismatchError(SqliteManagerError, ValueError):
    """The number of ``?`` placeholders differs from the number of parameters."""

    def __init__(self, expression: str, placeholders: int, parameters: int) -> None:
        self.expression = expression
        self.placeholders = placeholders
        self.parameters = parameters
        super().__init__(
            f"SQL template has {placeholders} placeholder(s) but "
            f"{parameters} parameter(s) were supplied: {expression!r}"
        )


class UnsupportedValueError(SqliteManagerError, TypeError):
    """A bound value is not one of the SQLite storage classes."""

    def __init__(self, value: object, position: int | str | None = None) -> None:
        self.value = value
        self.position = position
        where = f" at {position}" if position is not None else ""
        super().__init__(
            f"Unsupported SQL value{where}: {type(value).__name__} "
            "(expected None, int, float, str or bytes)"
        )
