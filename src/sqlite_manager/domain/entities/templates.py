"""Statement templates and table specifications.

These are the request objects callers hand to the manager. Each one is
immutable and owned by a single call. ``from_dict`` accepts the camelCase
field names used by JSON clients (``sqlExpression``, ``params``,
``tableName``, ``createSql``, ``columnNames``) as well as the snake_case
attribute names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from sqlite_manager.domain.value_objects import SqlValue


def _pick(data: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    for name in names:
        if name in data:
            return data[name]
    return default


@dataclass(frozen=True, slots=True)
class SqlTemplate:
    """A SQL expression with positional ``?`` placeholders.

    Attributes:
        expression: SQL text; each ``?`` marks one positional parameter
        parameters: Values bound to the placeholders in order

    Example:
        >>> SqlTemplate("SELECT * FROM users WHERE age = ?", (20,))
        SqlTemplate(expression='SELECT * FROM users WHERE age = ?', parameters=(20,))
    """

    expression: str
    parameters: tuple[SqlValue, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence; store a tuple so the template stays hashable
        if not isinstance(self.parameters, tuple):
            object.__setattr__(self, "parameters", tuple(self.parameters or ()))

    @property
    def is_blank(self) -> bool:
        """True when there is no SQL to run."""
        return self.expression is None or not self.expression.strip()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SqlTemplate:
        return cls(
            expression=_pick(data, "sqlExpression", "expression", default=""),
            parameters=tuple(_pick(data, "params", "parameters", default=()) or ()),
        )


@dataclass(frozen=True, slots=True)
class PreparedStatement:
    """A translated statement with named parameters ``p0``, ``p1``, ...

    Attributes:
        expression: SQL text with ``:pN`` markers, or "" when there is nothing to run
        parameters: Ordered ``(name, value)`` pairs
    """

    expression: str = ""
    parameters: tuple[tuple[str, SqlValue], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.expression

    @property
    def bindings(self) -> dict[str, SqlValue]:
        """Parameters in the mapping form ``sqlite3`` accepts."""
        return dict(self.parameters)


@dataclass(frozen=True, slots=True)
class CreateTableSpec:
    """DDL for a table together with the schema version it produces.

    Attributes:
        table_name: Table the DDL creates
        target_version: Version recorded once the DDL has been applied
        ddl: CREATE TABLE statement
    """

    table_name: str
    target_version: int
    ddl: str

    def __post_init__(self) -> None:
        if not self.table_name or not self.table_name.strip():
            raise ValueError("table_name must not be empty")
        if self.target_version < 0:
            raise ValueError(f"target_version must be non-negative, got {self.target_version}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreateTableSpec:
        return cls(
            table_name=_pick(data, "tableName", "table_name", default=""),
            target_version=int(_pick(data, "version", "target_version", default=0)),
            ddl=_pick(data, "createSql", "ddl", default=""),
        )


@dataclass(frozen=True, slots=True)
class UpsertSpec:
    """Target table and the ordered columns written by an upsert."""

    table_name: str
    column_names: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.column_names, tuple):
            object.__setattr__(self, "column_names", tuple(self.column_names))
        if not self.table_name or not self.table_name.strip():
            raise ValueError("table_name must not be empty")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpsertSpec:
        return cls(
            table_name=_pick(data, "tableName", "table_name", default=""),
            column_names=tuple(_pick(data, "columnNames", "column_names", default=()) or ()),
        )

    def values_for(self, row: Mapping[str, Any]) -> tuple[SqlValue, ...]:
        """Row values in column order; missing columns bind NULL."""
        return tuple(row.get(name) for name in self.column_names)
