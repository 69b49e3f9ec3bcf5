"""Tests for napdb.core.types module."""

import pytest

from napdb.core.errors import UnknownFieldTypeError
from napdb.core.types import FieldType, describe_kind, kind_of


class TestFieldTypeParse:
    """Test FieldType.parse tag resolution."""

    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("string", FieldType.STRING),
            ("integer", FieldType.INTEGER),
            ("float", FieldType.FLOAT),
            ("boolean", FieldType.BOOLEAN),
            (FieldType.FLOAT, FieldType.FLOAT),
        ],
    )
    def test_known_tags(self, tag, expected):
        assert FieldType.parse(tag) is expected

    def test_legacy_int_alias(self):
        """Definitions written as "int" still load."""
        assert FieldType.parse("int") is FieldType.INTEGER

    @pytest.mark.parametrize("tag", ["date", "", "STRING", None, 3])
    def test_unknown_tag_raises(self, tag):
        with pytest.raises(UnknownFieldTypeError) as exc_info:
            FieldType.parse(tag)
        assert exc_info.value.type_tag == tag

    def test_numeric_members(self):
        assert FieldType.INTEGER.is_numeric
        assert FieldType.FLOAT.is_numeric
        assert not FieldType.STRING.is_numeric
        assert not FieldType.BOOLEAN.is_numeric


class TestKindOf:
    """Test runtime value classification."""

    def test_string(self):
        assert kind_of("Ansh Bajaj") is FieldType.STRING

    def test_integer(self):
        assert kind_of(20) is FieldType.INTEGER

    def test_float(self):
        assert kind_of(20.0) is FieldType.FLOAT

    def test_bool_is_not_integer(self):
        """bool subclasses int but is its own kind."""
        assert kind_of(True) is FieldType.BOOLEAN
        assert kind_of(False) is FieldType.BOOLEAN

    @pytest.mark.parametrize("value", [None, [1], {"a": 1}, b"bytes", (1,)])
    def test_no_kind(self, value):
        assert kind_of(value) is None

    def test_describe_kind(self):
        assert describe_kind(1.5) == "float"
        assert describe_kind([1]) == "list"
        assert describe_kind(None) == "NoneType"
