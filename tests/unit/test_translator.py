"""Unit tests for the SQL template translator."""

from __future__ import annotations

import pytest

from sqlite_manager.domain.entities import PreparedStatement, SqlTemplate
from sqlite_manager.domain.errors import PlaceholderMismatchError, UnsupportedValueError
from sqlite_manager.domain.services import parameter_name, prepare, translate, translate_many


@pytest.mark.unit
class TestTranslate:
    """Tests for translate()."""

    def test_rewrites_placeholders_to_named_parameters(self) -> None:
        """Rewrites placeholders to named parameters."""
        template = SqlTemplate("SELECT * FROM users WHERE age = ? AND name = ?", (20, "Frank"))

        statement = translate(template)

        assert statement.expression == "SELECT * FROM users WHERE age = :p0 AND name = :p1"
        assert statement.parameters == (("p0", 20), ("p1", "Frank"))

    def test_parameters_bound_in_input_order(self) -> None:
        """Parameters bound in input order."""
        values = tuple(range(10, 17))
        template = SqlTemplate(
            "INSERT INTO t VALUES(" + ", ".join("?" for _ in values) + ")", values
        )

        statement = translate(template)

        assert [name for name, _ in statement.parameters] == [f"p{i}" for i in range(len(values))]
        assert [value for _, value in statement.parameters] == list(values)
        assert "?" not in statement.expression

    def test_placeholder_at_start_and_end(self) -> None:
        """Placeholder at start and end."""
        statement = translate(SqlTemplate("?x?", ("a", "b")))

        assert statement.expression == ":p0x:p1"

    def test_no_parameters_returns_expression_unchanged(self) -> None:
        """No parameters returns expression unchanged."""
        statement = translate(SqlTemplate("SELECT 1"))

        assert statement.expression == "SELECT 1"
        assert statement.parameters == ()
        assert not statement.is_empty

    def test_bindings_mapping(self) -> None:
        """Bindings map names to values."""
        statement = translate(SqlTemplate("SELECT ?, ?", (None, b"\x00")))

        assert statement.bindings == {"p0": None, "p1": b"\x00"}

    @pytest.mark.parametrize("expression", ["", "   ", "\n\t"])
    def test_blank_expression_is_empty_statement(self, expression: str) -> None:
        """Blank expression is empty statement."""
        assert translate(SqlTemplate(expression)).is_empty

    def test_none_template_is_empty_statement(self) -> None:
        """None template is empty statement."""
        assert translate(None).is_empty

    def test_too_few_parameters_fails(self) -> None:
        """Too few parameters fails."""
        with pytest.raises(PlaceholderMismatchError) as exc_info:
            translate(SqlTemplate("SELECT ? + ?", (1,)))

        assert exc_info.value.placeholders == 2
        assert exc_info.value.parameters == 1

    def test_too_many_parameters_fails(self) -> None:
        """Too many parameters fails."""
        with pytest.raises(ValueError):
            translate(SqlTemplate("SELECT 1", (1,)))

    def test_unsupported_parameter_type_fails(self) -> None:
        """Unsupported parameter type fails."""
        with pytest.raises(UnsupportedValueError) as exc_info:
            translate(SqlTemplate("SELECT ?", ({"a": 1},)))

        assert exc_info.value.position == 0

    def test_literal_question_mark_counts_as_placeholder(self) -> None:
        """Literal question mark counts as placeholder."""
        # No literal awareness: '?' inside quotes is still a placeholder
        with pytest.raises(PlaceholderMismatchError):
            translate(SqlTemplate("SELECT 'why?' WHERE a = ?", (1,)))


@pytest.mark.unit
class TestTranslateMany:
    """Tests for translate_many()."""

    def test_drops_empty_statements(self) -> None:
        """Drops empty statements."""
        statements = translate_many(
            [SqlTemplate("SELECT 1"), SqlTemplate("  "), None, SqlTemplate("SELECT ?", (2,))]
        )

        assert [s.expression for s in statements] == ["SELECT 1", "SELECT :p0"]

    def test_empty_input(self) -> None:
        """Empty input."""
        assert translate_many([]) == []
        assert translate_many(None) == []

    def test_fails_before_returning_anything(self) -> None:
        """Fails before returning anything."""
        with pytest.raises(PlaceholderMismatchError):
            translate_many([SqlTemplate("SELECT 1"), SqlTemplate("SELECT ?")])


def test_parameter_name() -> None:
    """Parameter names are p0, p1, ..."""
    assert parameter_name(0) == "p0"
    assert parameter_name(12) == "p12"


@pytest.mark.unit
class TestPrepare:
    """Tests for prepare()."""

    def test_translates_templates(self) -> None:
        """Templates are translated as by translate()."""
        assert prepare(SqlTemplate("SELECT ?", (1,))).expression == "SELECT :p0"

    def test_prepared_statement_passes_through(self) -> None:
        """A prepared statement is returned without scanning for placeholders."""
        statement = PreparedStatement("CREATE TABLE faq(mark TEXT DEFAULT '?')")

        assert prepare(statement) is statement

    def test_translate_many_accepts_prepared_statements(self) -> None:
        """Batches may mix templates and prepared statements."""
        statements = translate_many(
            [SqlTemplate("SELECT ?", (1,)), PreparedStatement('DROP TABLE IF EXISTS "a?"')]
        )

        assert [s.expression for s in statements] == ["SELECT :p0", 'DROP TABLE IF EXISTS "a?"']
