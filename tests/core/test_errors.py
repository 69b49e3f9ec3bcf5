"""Tests for napdb.core.errors module."""

import pytest

from napdb.core.errors import (
    ConfigError,
    DecodeError,
    DuplicateFieldError,
    EncodeError,
    ErrorCategory,
    ErrorContext,
    FieldValidationError,
    IdentityError,
    MissingRequiredFieldError,
    NapError,
    ObjectNotFoundError,
    PersistenceError,
    ReservedFieldError,
    SchemaDefinitionError,
    StorageError,
    TypeMismatchError,
    UnknownFieldTypeError,
    ValidationError,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        ctx = ErrorContext()
        assert ctx.schema is None
        assert ctx.operation is None
        assert ctx.metadata == {}

    def test_to_dict_excludes_none(self):
        ctx = ErrorContext(schema="users", operation="save")
        assert ctx.to_dict() == {"schema": "users", "operation": "save"}

    def test_to_dict_includes_metadata(self):
        ctx = ErrorContext(path="schemas/users.json", metadata={"attempt": 2})
        assert ctx.to_dict() == {"path": "schemas/users.json", "attempt": 2}


class TestNapError:
    """Test NapError base class."""

    def test_defaults(self):
        error = NapError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"
        assert error.category == ErrorCategory.INTERNAL
        assert error.cause is None

    def test_cause_is_chained(self):
        cause = OSError("disk full")
        error = NapError("save failed", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_with_context(self):
        error = NapError("x").with_context(schema="users", attempt=3)
        assert error.context.schema == "users"
        assert error.context.metadata == {"attempt": 3}

    def test_to_dict(self):
        error = NapError("x", cause=ValueError("inner")).with_context(operation="load")
        assert error.to_dict() == {
            "error_type": "NapError",
            "message": "x",
            "category": "INTERNAL",
            "context": {"operation": "load"},
            "cause": "inner",
        }

    def test_repr(self):
        assert repr(NapError("x")) == "NapError('x', category=INTERNAL)"


class TestSchemaErrors:
    def test_duplicate_field(self):
        error = DuplicateFieldError("name", schema="users")
        assert isinstance(error, SchemaDefinitionError)
        assert error.field_name == "name"
        assert error.category == ErrorCategory.SCHEMA
        assert error.context.to_dict() == {"schema": "users", "field_name": "name"}
        assert "name" in error.message


class TestValidationErrors:
    @pytest.mark.parametrize(
        "error",
        [
            TypeMismatchError("integer", "float", value=1.5),
            UnknownFieldTypeError("date"),
            MissingRequiredFieldError("name"),
            FieldValidationError("age", TypeMismatchError("integer", "string")),
            ReservedFieldError("uuid"),
        ],
    )
    def test_all_are_validation_errors(self, error):
        assert isinstance(error, ValidationError)
        assert error.category == ErrorCategory.VALIDATION

    def test_type_mismatch(self):
        error = TypeMismatchError("integer", "float", value=30.0)
        assert error.expected == "integer"
        assert error.actual == "float"
        assert error.value == 30.0
        assert error.message == "expected integer, got float"

    def test_missing_required(self):
        error = MissingRequiredFieldError("name")
        assert error.field_name == "name"
        assert error.constraint == "required"
        assert error.to_dict()["field"] == "name"

    def test_field_validation_wraps_cause(self):
        cause = TypeMismatchError("integer", "string", value="x")
        error = FieldValidationError("age", cause, value="x")
        assert error.field_name == "age"
        assert error.cause is cause
        assert error.constraint == "type"
        assert error.message == "field 'age': expected integer, got string"

    def test_field_validation_without_cause(self):
        error = FieldValidationError("age", value=150, constraint="check")
        assert error.message == "field 'age': failed check validation"
        assert error.to_dict()["value"] == "150"

    def test_unknown_field_type(self):
        error = UnknownFieldTypeError("date")
        assert error.type_tag == "date"
        assert "date" in error.message


class TestStorageErrors:
    def test_object_not_found(self):
        error = ObjectNotFoundError("schemas/users.json")
        assert isinstance(error, StorageError)
        assert error.path == "schemas/users.json"
        assert error.context.path == "schemas/users.json"
        assert error.category == ErrorCategory.STORAGE

    @pytest.mark.parametrize("cls", [EncodeError, DecodeError])
    def test_codec_errors(self, cls):
        error = cls("bad json", path="t/x.json")
        assert isinstance(error, StorageError)
        assert error.path == "t/x.json"

    def test_persistence_error(self):
        cause = ObjectNotFoundError("collections/users/a.json")
        error = PersistenceError(
            "load failed", operation="load_record", path="collections/users/a.json", cause=cause
        )
        assert error.operation == "load_record"
        assert error.path == "collections/users/a.json"
        assert error.cause is cause
        assert error.category == ErrorCategory.STORAGE


class TestDefaultCategories:
    @pytest.mark.parametrize(
        "error, expected",
        [
            (ConfigError("bad"), ErrorCategory.CONFIG),
            (IdentityError("bad"), ErrorCategory.INTERNAL),
            (MissingRequiredFieldError("x"), ErrorCategory.VALIDATION),
            (DuplicateFieldError("x"), ErrorCategory.SCHEMA),
            (DecodeError("bad"), ErrorCategory.STORAGE),
        ],
    )
    def test_category(self, error, expected):
        assert error.category == expected

    def test_explicit_category_overrides_default(self):
        assert ConfigError("bad", category=ErrorCategory.INTERNAL).category == ErrorCategory.INTERNAL
