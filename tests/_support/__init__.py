"""
Test support utilities for napdb tests.

This module provides helpers that don't fit as pytest fixtures but are
useful across multiple test files.
"""

from __future__ import annotations

from typing import Any

from napdb.core.result import Ok, Result
from napdb.core.schema import Field
from napdb.core.types import FieldType

USER_FIELDS = (
    Field("name", FieldType.STRING, required=True),
    Field("age", FieldType.INTEGER, required=True),
    Field("email", FieldType.STRING, required=False),
)


class AcceptAllValidator:
    """Validator stub: every value passes, every call is recorded."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, Any]] = []

    def validate_type(self, value: Any, field_type: Any) -> Result[None]:
        self.calls.append((value, field_type))
        return Ok(None)


def assert_dict_subset(actual: dict, expected: dict, path: str = "") -> None:
    """
    Assert that expected is a subset of actual (recursive).

    Useful for checking stored records without pinning generated ids.
    """
    for key, expected_value in expected.items():
        current_path = f"{path}.{key}" if path else key

        assert key in actual, f"Missing key at {current_path}"
        actual_value = actual[key]

        if isinstance(expected_value, dict) and isinstance(actual_value, dict):
            assert_dict_subset(actual_value, expected_value, current_path)
        else:
            assert actual_value == expected_value, (
                f"Mismatch at {current_path}: "
                f"expected {expected_value!r}, got {actual_value!r}"
            )
