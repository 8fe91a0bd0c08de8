"""Builders for the statements the manager issues on its own behalf.

Every builder returns a PreparedStatement with ``:pN`` markers already in
place, so the SQL is handed to sqlite3 without going through the ``?``
translator. Table and column names are rendered as quoted SQLite
identifiers through sqlglot; values always travel as bound parameters.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from sqlglot import exp

from sqlite_manager.domain.entities import CreateTableSpec, PreparedStatement, UpsertSpec
from sqlite_manager.domain.services.translator import NAME_MARKER, parameter_name
from sqlite_manager.domain.value_objects import SqlValue, validate_values

VERSION_TABLE = "table_version"
DIALECT = "sqlite"


def quote_identifier(name: str) -> str:
    """Render ``name`` as a quoted SQLite identifier."""
    return exp.to_identifier(name, quoted=True).sql(dialect=DIALECT)


def markers(count: int) -> str:
    """``:p0, :p1, ...`` for ``count`` bound values."""
    return ", ".join(NAME_MARKER + parameter_name(i) for i in range(count))


def bind(expression: str, values: Sequence[SqlValue] = ()) -> PreparedStatement:
    """Pair ``values`` with the names ``p0``, ``p1``, ... used in ``expression``.

    Raises:
        UnsupportedValueError: If a value has no SQLite storage class.
    """
    validate_values(values)
    return PreparedStatement(
        expression=expression,
        parameters=tuple((parameter_name(i), value) for i, value in enumerate(values)),
    )


def create_version_table() -> PreparedStatement:
    return bind(
        f"CREATE TABLE IF NOT EXISTS {VERSION_TABLE}("
        "table_name varchar(100) PRIMARY KEY, "
        "version INTEGER)"
    )


def select_version(table_name: str) -> PreparedStatement:
    return bind(
        f"SELECT version FROM {VERSION_TABLE} WHERE table_name = {markers(1)}",
        (table_name,),
    )


def select_all_versions() -> PreparedStatement:
    return bind(f"SELECT table_name, version FROM {VERSION_TABLE} ORDER BY table_name")


def replace_version(table_name: str, version: int) -> PreparedStatement:
    return bind(
        f"INSERT OR REPLACE INTO {VERSION_TABLE}(table_name, version) VALUES({markers(2)})",
        (table_name, version),
    )


def create_table(spec: CreateTableSpec) -> PreparedStatement:
    """The caller's DDL, run verbatim."""
    return bind((spec.ddl or "").strip())


def drop_table(table_name: str) -> PreparedStatement:
    return bind(f"DROP TABLE IF EXISTS {quote_identifier(table_name)}")


def count_tables_named(table_name: str) -> PreparedStatement:
    return bind(
        f"SELECT count(*) FROM sqlite_master WHERE type = 'table' AND name = {markers(1)}",
        (table_name,),
    )


def upsert_expression(spec: UpsertSpec) -> str:
    """``INSERT OR REPLACE`` text for one row of ``spec``.

    Raises:
        ValueError: If the spec names no columns.
    """
    if not spec.column_names:
        raise ValueError(f"upsert into {spec.table_name!r} requires at least one column")
    columns = ", ".join(quote_identifier(name) for name in spec.column_names)
    return (
        f"INSERT OR REPLACE INTO {quote_identifier(spec.table_name)}"
        f"({columns}) VALUES({markers(len(spec.column_names))})"
    )


def upsert_statements(
    spec: UpsertSpec, rows: Iterable[Mapping[str, SqlValue]]
) -> list[PreparedStatement]:
    """One insert-or-replace statement per row, values in column order."""
    expression = upsert_expression(spec)
    return [bind(expression, spec.values_for(row)) for row in rows]
