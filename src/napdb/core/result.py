"""
Result envelope for consistent success/failure handling.

Provides a typed Result[T] pattern that makes success/failure explicit in the
type system, carries error context for failures and avoids exception-based
control flow for expected errors such as a document failing validation.

Every store operation (adding a field, building a schema, validating a
document, adding or scanning records) returns Ok[T] for success or Err[T]
for failure. Callers decide whether to branch, chain or unwrap.

Manifesto:
    - **Explicit over Implicit:** No hidden exceptions that callers might miss
    - **Functional composition:** Chain operations with map/flat_map without
      nested try/except blocks
    - **Fail-fast collection:** collect_results() stops at the first Err

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        │                    (Type Alias)                              │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[T]      │     Utilities           │
        │   (Success)     │   (Failure)     │                         │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: Exc    │ • try_result_with()     │
        │ • map()         │ • to_dict()     │ • collect_results()     │
        │ • flat_map()    │ • and_then()    │                         │
        │ • unwrap()      │ • unwrap_or()   │                         │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    >>> from napdb.core.result import Ok, Err, Result
    >>> def divide(a: int, b: int) -> Result[float]:
    ...     if b == 0:
    ...         return Err(ValueError("Division by zero"))
    ...     return Ok(a / b)
    >>> match divide(10, 2):
    ...     case Ok(value):
    ...         print(f"Result: {value}")
    ...     case Err(error):
    ...         print(f"Error: {error}")
    Result: 5.0

Guardrails:
    ❌ DON'T: Use unwrap() without checking is_ok() first
    ✅ DO: Use unwrap_or() or pattern matching for safe extraction

    ❌ DON'T: Raise exceptions inside map/flat_map functions
    ✅ DO: Return Err from flat_map if the operation can fail

Tags:
    result-pattern, error-handling, functional-programming, napdb
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from napdb.core.errors import NapError


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Immutable; ``map`` and ``flat_map`` build new results instead of
    modifying this one.

    Examples:
        >>> Ok(10).map(lambda x: x * 2).unwrap()
        20
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or default (always returns value for Ok)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Alias for flat_map."""
        return f(self.value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    Wraps an Exception, preferably a NapError subclass. ``map`` and
    ``flat_map`` pass the Err through unchanged so errors propagate through
    chains; ``unwrap`` raises the carried error.

    Examples:
        >>> err = Err(ValueError("something went wrong"))
        >>> err.unwrap_or("default")
        'default'
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Get default since this is Err."""
        return default

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, NapError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Ok[T] | Err[T]


# =============================================================================
# RESULT CONSTRUCTORS AND UTILITIES
# =============================================================================


def try_result_with(
    f: Callable[[], T],
    error_mapper: Callable[[Exception], Exception] | None = None,
) -> Result[T]:
    """
    Execute function and map exceptions to custom error types.

    The bridge between exception-raising code (storage adapters, the uuid
    module) and Result-returning store operations.

    Examples:
        >>> from napdb.core.errors import PersistenceError
        >>> def fetch():
        ...     raise OSError("disk full")
        >>> result = try_result_with(fetch, lambda e: PersistenceError(f"save failed: {e}"))
        >>> result.error.message
        'save failed: disk full'

    Args:
        f: Zero-argument callable that may raise exceptions
        error_mapper: Optional function to transform exceptions

    Returns:
        Ok[T] if f() succeeds, Err with mapped exception if f() raises
    """
    try:
        return Ok(f())
    except Exception as e:
        if error_mapper:
            return Err(error_mapper(e))
        return Err(e)


def collect_results(results: list[Result[T]]) -> Result[list[T]]:
    """
    Collect a list of Results into a Result of list (fail-fast).

    Returns Ok with every value if all are Ok, otherwise the first Err.
    Accepts any iterable, so a generator of Results stops being consumed
    at the first failure.

    Examples:
        >>> collect_results([Ok(1), Ok(2), Ok(3)]).unwrap()
        [1, 2, 3]
        >>> results = [Ok(1), Err(ValueError("a")), Err(ValueError("b"))]
        >>> str(collect_results(results).error)
        'a'
    """
    values = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err(error):
                return Err(error)
    return Ok(values)


__all__ = [
    # Types
    "Result",
    "Ok",
    "Err",
    # Constructors
    "try_result_with",
    # Collectors
    "collect_results",
]
