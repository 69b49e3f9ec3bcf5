"""
Structured error types for napdb.

Provides a typed error hierarchy with rich metadata for categorization,
logging and root cause analysis through error chaining.

Every failure the store reports is a NapError subclass. Instead of generic
exceptions that lose context, NapError and its subclasses carry:
- **Category:** What kind of error (schema, validation, storage, etc.)
- **Context:** Structured metadata (schema, field, operation, path)
- **Cause:** Chained underlying exception for root cause analysis

Manifesto:
    - **Typed Error Hierarchy:** One error type per failure mode
    - **Returned, not raised:** Operations hand errors back inside Err(...)
    - **Rich Context:** Errors carry metadata for logging
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                          NapError                               │
        │                (category, context, cause)                       │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                 │
        │  SchemaDefinitionError   ValidationError        StorageError    │
        │  (SCHEMA)                (VALIDATION)           (STORAGE)       │
        │       │                       │                      │          │
        │  DuplicateFieldError     MissingRequiredField   ObjectNotFound  │
        │                          FieldValidationError   EncodeError     │
        │                          UnknownFieldTypeError  DecodeError     │
        │                          TypeMismatchError                      │
        │                          ReservedFieldError                     │
        │                                                                 │
        │  PersistenceError        IdentityError          ConfigError     │
        │  (STORAGE)               (INTERNAL)             (CONFIG)        │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = MissingRequiredFieldError("name")
    >>> error.field_name
    'name'
    >>> error.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>

    Wrapping an adapter failure:

    >>> cause = ObjectNotFoundError("schemas/users.json")
    >>> error = PersistenceError("load failed", cause=cause).with_context(
    ...     operation="load", path="schemas/users.json"
    ... )
    >>> error.context.path
    'schemas/users.json'

Guardrails:
    ❌ DON'T: Use generic Exception - loses all metadata
    ✅ DO: Use the NapError subclass for the failure mode

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, napdb
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        SCHEMA: Schema definition problems (duplicate fields)
        VALIDATION: Document does not satisfy its schema
        STORAGE: Persistence backend failures
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state, identity generation
    """

    SCHEMA = "SCHEMA"             # Duplicate or reserved field names
    VALIDATION = "VALIDATION"     # Missing fields, type mismatches
    STORAGE = "STORAGE"           # Disk, encode/decode, not found
    CONFIG = "CONFIG"             # Missing config, invalid settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the metadata the store attaches most often; anything
    else goes into ``metadata``. ``to_dict()`` serializes non-None fields.

    Examples:
        >>> ctx = ErrorContext(schema="users", operation="save")
        >>> ctx.to_dict()
        {'schema': 'users', 'operation': 'save'}
    """

    schema: str | None = None
    field_name: str | None = None
    operation: str | None = None
    path: str | None = None
    record_id: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["schema", "field_name", "operation", "path", "record_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class NapError(Exception):
    """
    Base exception for all napdb errors.

    Subclasses set ``default_category`` to classify themselves. All instances
    carry a message, a category, an ErrorContext and an optional cause which
    is also chained as ``__cause__`` so tracebacks show the root failure.

    Examples:
        >>> error = NapError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(schema="users").context.schema
        'users'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> NapError:
        """
        Add context to error (fluent API).

        Known ErrorContext fields are set directly, anything else lands in
        ``context.metadata``.
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }

        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict

        if self.cause is not None:
            result["cause"] = str(self.cause)

        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# SCHEMA DEFINITION ERRORS
# =============================================================================


class SchemaDefinitionError(NapError):
    """Schema definition is inconsistent."""

    default_category = ErrorCategory.SCHEMA


class DuplicateFieldError(SchemaDefinitionError):
    """A field with the same name already exists in the schema."""

    def __init__(self, field_name: str, schema: str | None = None):
        self.field_name = field_name
        super().__init__(
            f"field '{field_name}' already exists in schema",
            context=ErrorContext(schema=schema, field_name=field_name),
        )


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(NapError):
    """
    Document validation error.

    Never retryable - the document (or the schema) must be fixed.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


class TypeMismatchError(ValidationError):
    """Value kind does not match the declared field type."""

    def __init__(self, expected: str, actual: str, value: Any = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"expected {expected}, got {actual}",
            value=value,
            constraint="type",
        )


class UnknownFieldTypeError(ValidationError):
    """Declared field type is outside the closed set of field types."""

    def __init__(self, type_tag: Any):
        self.type_tag = type_tag
        super().__init__(f"unknown field type: {type_tag}", constraint="type")


class MissingRequiredFieldError(ValidationError):
    """A required field is absent from the document."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"required field '{field_name}' is missing",
            field=field_name,
            constraint="required",
        )


class FieldValidationError(ValidationError):
    """A present field failed its type contract or custom check."""

    def __init__(
        self,
        field_name: str,
        cause: Exception | None = None,
        *,
        value: Any = None,
        constraint: str | None = None,
    ):
        self.field_name = field_name
        reason = str(cause) if cause is not None else f"failed {constraint or 'custom'} validation"
        super().__init__(
            f"field '{field_name}': {reason}",
            field=field_name,
            value=value,
            constraint=constraint or getattr(cause, "constraint", None),
            cause=cause,
        )


class ReservedFieldError(ValidationError):
    """Document supplies a value for a store-assigned field."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"field '{field_name}' is assigned by the store and must not be supplied",
            field=field_name,
            constraint="generated",
        )


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class StorageError(NapError):
    """Storage adapter failure (disk, permissions, bad path)."""

    default_category = ErrorCategory.STORAGE

    def __init__(self, message: str, *, path: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.path = path
        if path is not None and self.context.path is None:
            self.context.path = path


class ObjectNotFoundError(StorageError):
    """No object stored at the requested path."""

    def __init__(self, path: str):
        super().__init__(f"object not found: {path}", path=path)


class EncodeError(StorageError):
    """Object could not be serialized."""


class DecodeError(StorageError):
    """Stored bytes are not a valid encoding."""


class PersistenceError(NapError):
    """
    Engine-level persistence failure.

    Wraps the adapter error as ``cause`` and records the failing operation
    and path in the context.
    """

    default_category = ErrorCategory.STORAGE

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        path: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if operation is not None:
            self.context.operation = operation
        if path is not None:
            self.context.path = path

    @property
    def operation(self) -> str | None:
        return self.context.operation

    @property
    def path(self) -> str | None:
        return self.context.path


# =============================================================================
# IDENTITY / CONFIG ERRORS
# =============================================================================


class IdentityError(NapError):
    """Record identity could not be generated."""

    default_category = ErrorCategory.INTERNAL


class ConfigError(NapError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG


__all__ = [
    # Category enum
    "ErrorCategory",
    # Context
    "ErrorContext",
    # Base
    "NapError",
    # Schema
    "SchemaDefinitionError",
    "DuplicateFieldError",
    # Validation
    "ValidationError",
    "TypeMismatchError",
    "UnknownFieldTypeError",
    "MissingRequiredFieldError",
    "FieldValidationError",
    "ReservedFieldError",
    # Storage
    "StorageError",
    "ObjectNotFoundError",
    "EncodeError",
    "DecodeError",
    "PersistenceError",
    # Identity / config
    "IdentityError",
    "ConfigError",
]
