"""
Record engine: validate, identify, persist and scan records.

``add_record`` turns a caller document into a record:

    1. reject a caller-supplied identity, validate against the schema
    2. generate a uuid4 identity
    3. ensure ``collections/<schema>`` exists
    4. save the record at ``collections/<schema>/<uuid>.json``

``get_records`` enumerates that collection, loads every ``.json`` entry
(any load failure fails the whole call) and keeps records that satisfy the
criteria matcher. There are no indexes: every call is a full scan.

Concurrency:
    Single writer per collection is assumed. A scan running alongside an
    insert may or may not see the new record.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from napdb.core.errors import IdentityError, PersistenceError, ReservedFieldError
from napdb.core.logging import get_logger
from napdb.core.matching import matches
from napdb.core.result import Err, Ok, Result, collect_results, try_result_with
from napdb.core.schema import IDENTITY_FIELD, Schema
from napdb.core.storage import (
    RECORD_EXTENSION,
    StorageAdapter,
    collection_namespace,
    record_path,
)
from napdb.core.validator import TypeValidator, Validator

if TYPE_CHECKING:
    from napdb.core.types import Document

logger = get_logger(__name__)


def new_record_id() -> Result[str]:
    """Generate a fresh 128-bit random identity."""
    return try_result_with(
        lambda: str(uuid.uuid4()),
        lambda e: IdentityError(f"failed to generate record identity: {e}", cause=e),
    )


def _persistence_error(schema: Schema, operation: str, path: str):
    def wrap(e: Exception) -> PersistenceError:
        return PersistenceError(
            f"{operation} failed for {path}: {e}",
            operation=operation,
            path=path,
            cause=e,
        ).with_context(schema=schema.name)

    return wrap


def add_record(
    schema: Schema,
    document: Mapping[str, Any],
    validator: TypeValidator | None,
    storage: StorageAdapter,
) -> Result[str]:
    """
    Validate document against schema and persist it as a new record.

    The caller's mapping is copied, never mutated.

    Returns:
        Ok(record_id) once the storage adapter confirmed the write, or Err
        with a ValidationError, IdentityError or PersistenceError.
    """
    if IDENTITY_FIELD in document:
        logger.info("record_rejected", schema=schema.name, field=IDENTITY_FIELD)
        return Err(ReservedFieldError(IDENTITY_FIELD))

    validated = schema.validate(
        document, validator if validator is not None else Validator()
    )
    if validated.is_err():
        logger.info("record_rejected", schema=schema.name, error=validated.error.message)
        return Err(validated.error)

    generated = new_record_id()
    if generated.is_err():
        logger.error("identity_failed", schema=schema.name, error=str(generated.error))
        return Err(generated.error)
    record_id = generated.value

    record = dict(document)
    record[IDENTITY_FIELD] = record_id

    namespace = collection_namespace(schema.name)
    path = record_path(schema.name, record_id)

    stored = try_result_with(
        lambda: storage.ensure_namespace(namespace),
        _persistence_error(schema, "ensure_namespace", namespace),
    ).and_then(
        lambda _: try_result_with(
            lambda: storage.save(record, path),
            _persistence_error(schema, "save_record", path),
        )
    )
    if stored.is_err():
        logger.warning("persistence_failed", **stored.error.context.to_dict())
        return Err(stored.error)

    logger.info("record_added", schema=schema.name, record_id=record_id)
    return Ok(record_id)


def _load_record(schema: Schema, storage: StorageAdapter, path: str) -> Result[Document]:
    loaded = try_result_with(
        lambda: storage.load(path),
        _persistence_error(schema, "load_record", path),
    )
    if loaded.is_ok() and not isinstance(loaded.value, dict):
        return Err(
            PersistenceError(
                f"record at {path} is not a JSON object",
                operation="load_record",
                path=path,
            ).with_context(schema=schema.name)
        )
    return loaded


def get_records(
    schema: Schema,
    criteria: Mapping[str, Any],
    storage: StorageAdapter,
) -> Result[list[Document]]:
    """
    Return every stored record of schema matching criteria.

    Entries without the ``.json`` extension are ignored. Order follows the
    adapter's enumeration order. No match is Ok([]).
    """
    namespace = collection_namespace(schema.name)
    listed = try_result_with(
        lambda: storage.list_namespace(namespace),
        _persistence_error(schema, "list_records", namespace),
    )
    if listed.is_err():
        return Err(listed.error)

    paths = [
        f"{namespace}/{entry}"
        for entry in listed.value
        if entry.endswith(RECORD_EXTENSION)
    ]

    loaded = collect_results(_load_record(schema, storage, p) for p in paths)
    if loaded.is_err():
        logger.warning("persistence_failed", **loaded.error.context.to_dict())
        return Err(loaded.error)

    found = [record for record in loaded.value if matches(record, criteria)]
    logger.debug("records_scanned", schema=schema.name, scanned=len(paths), matched=len(found))
    return Ok(found)


__all__ = ["add_record", "get_records", "new_record_id"]
