"""
Schema definitions and document validation.

A ``Schema`` is a named set of ``Field`` definitions keyed by field name.
It is the sole authority on what a conforming document looks like; it does
not track records, which live only in the storage backend.

``build_schema`` is the normal way to create one: it prepends the
store-assigned ``uuid`` identity field, adds the caller's fields, and
persists the definition under ``schemas/<name>.json``. ``load_schema``
reads a persisted definition back.

Manifesto:
    - **Fields form a set:** Order of addition never changes behavior
    - **Identity is declared, not special-cased:** The builder adds ``uuid``
      as a ``generated`` field; validation skips generated fields uniformly
    - **First failure wins:** ``validate`` stops at the first bad field
    - **Results, not exceptions:** Every operation returns Ok/Err

Examples:
    >>> from napdb.core.storage import InMemoryStorage
    >>> storage = InMemoryStorage()
    >>> users = build_schema(
    ...     "users",
    ...     storage,
    ...     Field("name", FieldType.STRING, required=True),
    ...     Field("age", FieldType.INTEGER, required=True),
    ...     Field("email", FieldType.STRING),
    ... ).unwrap()
    >>> users.validate({"name": "Ansh Bajaj", "age": 20}).is_ok()
    True
    >>> users.validate({"age": 25}).error.field_name
    'name'

Tags:
    schema, validation, document, napdb
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field as dataclass_field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from napdb.core.errors import (
    DuplicateFieldError,
    FieldValidationError,
    MissingRequiredFieldError,
    NapError,
    PersistenceError,
    SchemaDefinitionError,
    UnknownFieldTypeError,
)
from napdb.core.logging import get_logger
from napdb.core.result import Err, Ok, Result, collect_results, try_result_with
from napdb.core.storage import StorageAdapter, schema_path
from napdb.core.types import FieldType
from napdb.core.validator import TypeValidator, Validator

if TYPE_CHECKING:
    from napdb.core.types import Document

logger = get_logger(__name__)


IDENTITY_FIELD = "uuid"


@dataclass(frozen=True)
class Field:
    """
    One field definition.

    Attributes:
        name: Lookup key, unique within a schema.
        type: Declared FieldType. Known tags (``"string"``, ``"int"``...) are
            normalized to FieldType; unknown tags are kept so add_field can
            reject them.
        required: Absence is an error when True.
        generated: Assigned by the store, never checked against documents.
        check: Optional predicate run on present values after the type check.
            Not persisted with the schema definition.
    """

    name: str
    type: FieldType | str
    required: bool = False
    generated: bool = False
    check: Callable[[Any], bool] | None = dataclass_field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "type", FieldType.parse(self.type))
        except UnknownFieldTypeError:
            pass

    @property
    def type_tag(self) -> str:
        return self.type.value if isinstance(self.type, FieldType) else str(self.type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type_tag,
            "required": self.required,
            "generated": self.generated,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Field:
        """Rebuild a field from its persisted form.

        Raises:
            UnknownFieldTypeError: The stored type tag is not a FieldType.
            KeyError: ``name`` or ``type`` is missing.
        """
        return cls(
            name=data["name"],
            type=FieldType.parse(data["type"]),
            required=bool(data.get("required", False)),
            generated=bool(data.get("generated", False)),
        )


class Schema:
    """
    Named collection of field definitions.

    Attributes:
        name: Schema name; also names the record collection.
        fields: Read-only mapping of field name to Field.
    """

    def __init__(self, name: str):
        self.name = name
        self._fields: dict[str, Field] = {}

    @property
    def fields(self) -> Mapping[str, Field]:
        return MappingProxyType(self._fields)

    @property
    def identity_field(self) -> Field | None:
        """The generated identity field, if the schema declares one."""
        field = self._fields.get(IDENTITY_FIELD)
        return field if field is not None and field.generated else None

    def add_field(self, field: Field) -> Result[None]:
        """
        Add a field.

        Err(DuplicateFieldError) or Err(UnknownFieldTypeError) leaves the
        schema unchanged.
        """
        if not isinstance(field.type, FieldType):
            return Err(
                UnknownFieldTypeError(field.type).with_context(
                    schema=self.name, field_name=field.name
                )
            )
        if field.name in self._fields:
            return Err(DuplicateFieldError(field.name, schema=self.name))
        self._fields[field.name] = field
        return Ok(None)

    def validate(
        self,
        document: Mapping[str, Any],
        validator: TypeValidator | None = None,
    ) -> Result[None]:
        """
        Check document against every caller-supplied field.

        Generated fields are skipped. Keys the schema does not declare are
        allowed. Returns the first failure found.
        """
        if validator is None:
            validator = Validator()

        for name, field in self._fields.items():
            if field.generated:
                continue

            if name not in document:
                if field.required:
                    return Err(MissingRequiredFieldError(name))
                continue

            value = document[name]
            checked = validator.validate_type(value, field.type)
            if checked.is_err():
                return Err(FieldValidationError(name, checked.error, value=value))

            if field.check is not None:
                passed = try_result_with(lambda: field.check(value))
                if passed.is_err():
                    return Err(
                        FieldValidationError(name, passed.error, value=value, constraint="check")
                    )
                if not passed.value:
                    return Err(FieldValidationError(name, value=value, constraint="check"))

        return Ok(None)

    # ------------------------------------------------------------------ #
    # Records
    # ------------------------------------------------------------------ #

    def add_record(
        self,
        document: Mapping[str, Any],
        validator: TypeValidator | None,
        storage: StorageAdapter,
    ) -> Result[str]:
        """Validate, identify and persist document. See records.add_record."""
        from napdb.core.records import add_record

        return add_record(self, document, validator, storage)

    def get_records(
        self,
        criteria: Mapping[str, Any],
        storage: StorageAdapter,
    ) -> Result[list[Document]]:
        """Scan the collection for records matching criteria."""
        from napdb.core.records import get_records

        return get_records(self, criteria, storage)

    get_record = get_records

    # ------------------------------------------------------------------ #
    # Serialization / diagnostics
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, Any]:
        """Persisted definition; fields sorted by name."""
        return {
            "name": self.name,
            "fields": [self._fields[n].to_dict() for n in sorted(self._fields)],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Result[Schema]:
        """Rebuild a schema from its persisted definition."""
        try:
            schema = cls(data["name"])
            fields = [Field.from_dict(item) for item in data["fields"]]
        except NapError as e:
            return Err(e)
        except (KeyError, TypeError) as e:
            return Err(SchemaDefinitionError(f"malformed schema definition: {e!r}", cause=e))

        added = collect_results([schema.add_field(f) for f in fields])
        return added.map(lambda _: schema)

    def describe(self) -> str:
        lines = [f"Schema for collection '{self.name}':"]
        for name, field in self._fields.items():
            lines.append(f"{name} ({field.type_tag}, required={str(field.required).lower()})")
        return "\n".join(lines)

    def print_schema(self) -> None:
        print(self.describe())

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, fields={list(self._fields)})"


# =============================================================================
# BUILDERS
# =============================================================================


def _check_schema_name(name: str) -> Result[None]:
    if not isinstance(name, str) or not name or "/" in name or name in (".", ".."):
        return Err(SchemaDefinitionError(f"invalid schema name: {name!r}"))
    return Ok(None)


def build_schema(name: str, storage: StorageAdapter, *fields: Field) -> Result[Schema]:
    """
    Create, populate and persist a schema.

    The generated ``uuid`` identity field is always added first, so a caller
    field named ``uuid`` fails as a duplicate.

    Returns:
        Ok(schema), or Err with the first DuplicateFieldError /
        PersistenceError. No schema is returned on failure.
    """
    named = _check_schema_name(name)
    if named.is_err():
        return Err(named.error)

    schema = Schema(name)
    identity = Field(IDENTITY_FIELD, FieldType.STRING, required=True, generated=True)

    added = collect_results(schema.add_field(f) for f in (identity, *fields))
    if added.is_err():
        logger.warning("schema_rejected", schema=name, error=added.error.message)
        return Err(added.error)

    path = schema_path(name)
    saved = try_result_with(
        lambda: storage.save(schema.to_dict(), path),
        lambda e: PersistenceError(
            f"failed to save schema '{name}': {e}",
            operation="save_schema",
            path=path,
            cause=e,
        ).with_context(schema=name),
    )
    if saved.is_err():
        logger.warning("persistence_failed", schema=name, path=path, operation="save_schema")
        return Err(saved.error)

    logger.info("schema_built", schema=name, fields=len(schema.fields))
    return Ok(schema)


def load_schema(name: str, storage: StorageAdapter) -> Result[Schema]:
    """Load a schema definition previously written by build_schema."""
    named = _check_schema_name(name)
    if named.is_err():
        return Err(named.error)

    path = schema_path(name)
    loaded = try_result_with(
        lambda: storage.load(path),
        lambda e: PersistenceError(
            f"failed to load schema '{name}': {e}",
            operation="load_schema",
            path=path,
            cause=e,
        ).with_context(schema=name),
    )
    if loaded.is_err():
        return Err(loaded.error)

    data = loaded.value
    if not isinstance(data, Mapping):
        return Err(
            PersistenceError(
                f"schema definition at {path} is not a JSON object",
                operation="load_schema",
                path=path,
            )
        )

    result = Schema.from_dict(data)
    if result.is_ok():
        logger.debug("schema_loaded", schema=name, fields=len(result.value.fields))
    return result


__all__ = [
    "IDENTITY_FIELD",
    "Field",
    "Schema",
    "build_schema",
    "load_schema",
]
