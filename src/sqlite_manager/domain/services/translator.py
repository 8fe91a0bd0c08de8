"""SQL template translator.

Rewrites a positional-placeholder template into a statement with named
parameters so each bound value can be identified in logs and by the engine:

    SELECT * FROM users WHERE age = ? AND name = ?      [20, "Frank"]
      -> SELECT * FROM users WHERE age = :p0 AND name = :p1
         [("p0", 20), ("p1", "Frank")]

The expression is split on every ``?`` character. No attempt is made to skip
``?`` inside string literals or comments, and literal text is never escaped;
identifiers interpolated into the expression are the caller's responsibility.
"""

from __future__ import annotations

from typing import Iterable, Union

from sqlite_manager.domain.entities import PreparedStatement, SqlTemplate
from sqlite_manager.domain.errors import PlaceholderMismatchError
from sqlite_manager.domain.value_objects import validate_values

PLACEHOLDER = "?"
PARAM_PREFIX = "p"
NAME_MARKER = ":"

Statement = Union[SqlTemplate, PreparedStatement]


def parameter_name(index: int) -> str:
    """Name bound to the placeholder at ``index``."""
    return f"{PARAM_PREFIX}{index}"


def translate(template: SqlTemplate | None) -> PreparedStatement:
    """Translate a template into a prepared statement.

    Args:
        template: Template to translate. None or a blank expression yields an
            empty statement, which executors treat as nothing to run.

    Returns:
        A new PreparedStatement owned by the caller.

    Raises:
        PlaceholderMismatchError: If the ``?`` count differs from the number
            of parameters.
        UnsupportedValueError: If a parameter has no SQLite storage class.
    """
    if template is None or template.is_blank:
        return PreparedStatement()

    expression = template.expression
    parameters = template.parameters
    pieces = expression.split(PLACEHOLDER)
    placeholders = len(pieces) - 1

    if placeholders != len(parameters):
        raise PlaceholderMismatchError(expression, placeholders, len(parameters))

    if not parameters:
        return PreparedStatement(expression=expression)

    validate_values(parameters)

    names = [parameter_name(i) for i in range(placeholders)]
    parts = [pieces[0]]
    for name, piece in zip(names, pieces[1:]):
        parts.append(NAME_MARKER + name)
        parts.append(piece)

    return PreparedStatement(
        expression="".join(parts),
        parameters=tuple(zip(names, parameters)),
    )


def prepare(statement: Statement | None) -> PreparedStatement:
    """Translate a template; pass an already prepared statement through as is.

    Prepared statements are never re-scanned for ``?``, so SQL the manager
    builds itself (quoted identifiers, caller DDL) may contain the character.
    """
    if isinstance(statement, PreparedStatement):
        return statement
    return translate(statement)


def translate_many(templates: Iterable[Statement | None] | None) -> list[PreparedStatement]:
    """Translate a batch, dropping statements that have nothing to run.

    Every template is translated before any is executed, so a malformed
    template fails the batch before a connection is opened.
    """
    if not templates:
        return []
    statements = (prepare(template) for template in templates)
    return [statement for statement in statements if not statement.is_empty]
