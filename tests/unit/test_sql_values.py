"""Unit tests for SQL value kinds."""

from __future__ import annotations

import pytest

from sqlite_manager.domain.errors import UnsupportedValueError
from sqlite_manager.domain.value_objects import SqlValueKind, classify, validate_values


@pytest.mark.unit
class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        "value, kind",
        [
            (None, SqlValueKind.NULL),
            (0, SqlValueKind.INTEGER),
            (True, SqlValueKind.INTEGER),
            (2**62, SqlValueKind.INTEGER),
            (1.5, SqlValueKind.REAL),
            ("", SqlValueKind.TEXT),
            (b"\x01", SqlValueKind.BLOB),
            (bytearray(b"ab"), SqlValueKind.BLOB),
            (memoryview(b"ab"), SqlValueKind.BLOB),
        ],
    )
    def test_storage_classes(self, value: object, kind: SqlValueKind) -> None:
        """Storage classes."""
        assert classify(value) is kind

    @pytest.mark.parametrize("value", [[1], {"a": 1}, object(), {1, 2}])
    def test_rejects_other_types(self, value: object) -> None:
        """Rejects other types."""
        with pytest.raises(UnsupportedValueError):
            classify(value)

    def test_unsupported_value_is_type_error(self) -> None:
        """Unsupported value is type error."""
        with pytest.raises(TypeError, match="at 3"):
            classify([], position=3)


@pytest.mark.unit
def test_validate_values_reports_position() -> None:
    """Validate values reports position."""
    with pytest.raises(UnsupportedValueError) as exc_info:
        validate_values([1, "a", None, ["bad"]])

    assert exc_info.value.position == 3


@pytest.mark.unit
def test_validate_values_returns_kinds_in_order() -> None:
    """Validate values returns kinds in order."""
    kinds = validate_values([1, 2.0, "x", None])

    assert kinds == [
        SqlValueKind.INTEGER,
        SqlValueKind.REAL,
        SqlValueKind.TEXT,
        SqlValueKind.NULL,
    ]
