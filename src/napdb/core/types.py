"""
Field types and value kinds.

The store knows exactly four scalar kinds. ``FieldType`` is the closed set
of tags a schema may declare; ``kind_of`` classifies a runtime value into
one of those kinds (or none) with an exhaustive match, so type checks
compare two enum members instead of inspecting arbitrary Python types.

Examples:
    >>> kind_of("Ansh")
    <FieldType.STRING: 'string'>
    >>> kind_of(True)
    <FieldType.BOOLEAN: 'boolean'>
    >>> kind_of(20.0)
    <FieldType.FLOAT: 'float'>
    >>> kind_of(None) is None
    True
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from napdb.core.errors import UnknownFieldTypeError


# Scalar values a document may hold
Value = Union[str, int, float, bool]

Document = dict[str, Value]


class FieldType(str, Enum):
    """Closed set of declarable field types."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"

    @classmethod
    def parse(cls, tag: Any) -> FieldType:
        """
        Resolve a type tag to a FieldType.

        Accepts members, their values, and the legacy ``"int"`` tag written
        by older schema definitions.

        Raises:
            UnknownFieldTypeError: If the tag is not a known type.
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            tag = _ALIASES.get(tag, tag)
            try:
                return cls(tag)
            except ValueError:
                pass
        raise UnknownFieldTypeError(tag)

    @property
    def is_numeric(self) -> bool:
        return self in (FieldType.INTEGER, FieldType.FLOAT)


_ALIASES = {"int": "integer"}


def kind_of(value: Any) -> FieldType | None:
    """Classify a value into its scalar kind, or None if it has none."""
    match value:
        # bool before int: bool is an int subclass
        case bool():
            return FieldType.BOOLEAN
        case int():
            return FieldType.INTEGER
        case float():
            return FieldType.FLOAT
        case str():
            return FieldType.STRING
        case _:
            return None


def describe_kind(value: Any) -> str:
    """Human-readable kind name for error messages."""
    kind = kind_of(value)
    if kind is not None:
        return kind.value
    return type(value).__name__


__all__ = [
    "Value",
    "Document",
    "FieldType",
    "kind_of",
    "describe_kind",
]
