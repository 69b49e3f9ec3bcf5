"""
Type validation for document values.

``Validator`` is a stateless service implementing the type-check contract.
Schemas receive it as an argument instead of hardwiring it, so a schema can
be exercised against a fake validator and type rules can change without
touching schema code.

Contract:
    ``validate_type(value, declared_type) -> Result[None]``

    - ``string``  requires exactly a str
    - ``integer`` requires exactly an int (``30.0`` and ``True`` fail)
    - ``float``   requires exactly a float (``1`` fails)
    - ``boolean`` requires exactly a bool
    - any other declared type is ``UnknownFieldTypeError`` regardless of value

Examples:
    >>> validator = Validator()
    >>> validator.validate_type(30, FieldType.INTEGER).is_ok()
    True
    >>> validator.validate_type(30.0, "integer").error.message
    'expected integer, got float'
    >>> type(validator.validate_type("x", "date").error).__name__
    'UnknownFieldTypeError'
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from napdb.core.errors import TypeMismatchError, UnknownFieldTypeError
from napdb.core.result import Err, Ok, Result
from napdb.core.types import FieldType, describe_kind, kind_of


@runtime_checkable
class TypeValidator(Protocol):
    """Anything that can check a value against a declared field type."""

    def validate_type(self, value: Any, field_type: FieldType | str) -> Result[None]:
        """Return Ok(None) if value conforms to field_type, else Err."""
        ...


class Validator:
    """Default TypeValidator: exact kind match, no coercion."""

    def validate_type(self, value: Any, field_type: FieldType | str) -> Result[None]:
        try:
            declared = FieldType.parse(field_type)
        except UnknownFieldTypeError as e:
            return Err(e)

        if kind_of(value) is declared:
            return Ok(None)
        return Err(TypeMismatchError(declared.value, describe_kind(value), value=value))


__all__ = ["TypeValidator", "Validator"]
