"""napdb core -- schema-validated document store primitives.

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Structured error hierarchy (NapError and friends)
        result.py          Result[T] envelope (Ok / Err / collect_results)
        types.py           FieldType enum, value kind classification
        validator.py       TypeValidator protocol + default Validator

    Layer 2 -- Storage
        storage.py         StorageAdapter protocol, in-memory and filesystem
                           adapters, persisted layout helpers

    Layer 3 -- Schemas & Records
        schema.py          Field, Schema, build_schema, load_schema
        records.py         add_record / get_records (validate, identify, scan)
        matching.py        Criteria matcher with cross-kind numeric equality

    Ambient
        logging.py         structlog configuration
        settings.py        pydantic-settings NapSettings

Typical flow::

    storage = open_storage()
    users = build_schema("users", storage, Field("name", "string", required=True)).unwrap()
    record_id = users.add_record({"name": "Ansh"}, Validator(), storage).unwrap()
    users.get_records({"name": "Ansh"}, storage).unwrap()
"""

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
from napdb.core.logging import configure_logging, get_logger
from napdb.core.matching import compare_values, matches
from napdb.core.records import add_record, get_records
from napdb.core.result import Err, Ok, Result
from napdb.core.schema import IDENTITY_FIELD, Field, Schema, build_schema, load_schema
from napdb.core.settings import NapSettings
from napdb.core.storage import (
    FileSystemStorage,
    InMemoryStorage,
    StorageAdapter,
    open_storage,
)
from napdb.core.types import Document, FieldType, Value
from napdb.core.validator import TypeValidator, Validator

__all__ = [
    # Errors
    "ConfigError",
    "DecodeError",
    "DuplicateFieldError",
    "EncodeError",
    "ErrorCategory",
    "ErrorContext",
    "FieldValidationError",
    "IdentityError",
    "MissingRequiredFieldError",
    "NapError",
    "ObjectNotFoundError",
    "PersistenceError",
    "ReservedFieldError",
    "SchemaDefinitionError",
    "StorageError",
    "TypeMismatchError",
    "UnknownFieldTypeError",
    "ValidationError",
    # Result
    "Err",
    "Ok",
    "Result",
    # Types / validation
    "Document",
    "FieldType",
    "Value",
    "TypeValidator",
    "Validator",
    # Schema / records
    "IDENTITY_FIELD",
    "Field",
    "Schema",
    "build_schema",
    "load_schema",
    "add_record",
    "get_records",
    "compare_values",
    "matches",
    # Storage
    "FileSystemStorage",
    "InMemoryStorage",
    "StorageAdapter",
    "open_storage",
    # Ambient
    "NapSettings",
    "configure_logging",
    "get_logger",
]
