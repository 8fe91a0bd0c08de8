"""SQL value kinds.

SQLite stores every value in one of five storage classes. Parameters and row
values crossing the manager boundary are restricted to the Python types that
map onto those classes, and ``classify`` tags each value with its kind.

    NULL     <- None
    INTEGER  <- int (bool included)
    REAL     <- float
    TEXT     <- str
    BLOB     <- bytes, bytearray, memoryview
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Union

from sqlite_manager.domain.errors import UnsupportedValueError

SqlValue = Union[None, int, float, str, bytes, bytearray, memoryview]
"""A value that can be bound to, or read from, a SQLite statement."""


class SqlValueKind(Enum):
    """SQLite storage classes."""

    NULL = "NULL"
    INTEGER = "INTEGER"
    REAL = "REAL"
    TEXT = "TEXT"
    BLOB = "BLOB"


def classify(value: Any, position: int | str | None = None) -> SqlValueKind:
    """Return the storage class of ``value``.

    Raises:
        UnsupportedValueError: If the value has no SQLite storage class.
    """
    if value is None:
        return SqlValueKind.NULL
    # bool is an int subclass; sqlite3 stores it as 0/1
    if isinstance(value, int):
        return SqlValueKind.INTEGER
    if isinstance(value, float):
        return SqlValueKind.REAL
    if isinstance(value, str):
        return SqlValueKind.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return SqlValueKind.BLOB
    raise UnsupportedValueError(value, position)


def validate_values(values: Iterable[Any]) -> list[SqlValueKind]:
    """Classify every value in order, failing on the first unsupported one."""
    return [classify(value, i) for i, value in enumerate(values)]
