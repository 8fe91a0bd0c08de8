"""Value objects for the SQLite manager domain."""

from sqlite_manager.domain.value_objects.sql_values import (
    SqlValue,
    SqlValueKind,
    classify,
    validate_values,
)

__all__ = [
    "SqlValue",
    "SqlValueKind",
    "classify",
    "validate_values",
]
