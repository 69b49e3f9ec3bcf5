"""
Criteria matching for record retrieval.

A record matches a criteria mapping iff every criterion key is present in
the record and its value compares equal to the expected value. Comparison
is kind-aware:

- both None: equal; exactly one None: not equal
- same kind: exact equality
- integer vs float: compared as floats, so ``{"age": 20}`` and
  ``{"age": 20.0}`` both match a stored ``20``
- anything else: canonical string renderings are compared

The last rule is a last-resort fallback kept on purpose: criteria such as
``{"active": "true"}`` match a stored ``True``. It is not a type-safety
guarantee; ``{"age": "20"}`` also matches a stored ``20``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from napdb.core.types import FieldType, kind_of


def canonical_string(value: Any) -> str:
    """Render a value the way the string fallback compares it."""
    match kind_of(value):
        case FieldType.BOOLEAN:
            return "true" if value else "false"
        case FieldType.FLOAT:
            return repr(value)
        case _:
            return str(value)


def compare_values(a: Any, b: Any) -> bool:
    """Kind-aware equality used by criteria matching."""
    if a is None or b is None:
        return a is None and b is None

    kind_a, kind_b = kind_of(a), kind_of(b)

    if kind_a is not None and kind_a is kind_b:
        return a == b

    if kind_a is not None and kind_b is not None and kind_a.is_numeric and kind_b.is_numeric:
        try:
            return float(a) == float(b)
        except OverflowError:
            # int beyond float range never equals a finite float
            return False

    if kind_a is None and kind_b is None and type(a) is type(b):
        return a == b

    return canonical_string(a) == canonical_string(b)


def matches(record: Mapping[str, Any], criteria: Mapping[str, Any]) -> bool:
    """True if record satisfies every (key, expected) pair in criteria."""
    for key, expected in criteria.items():
        if key not in record:
            return False
        if not compare_values(record[key], expected):
            return False
    return True


__all__ = ["canonical_string", "compare_values", "matches"]
