"""
Storage adapter protocol (SYNC-ONLY) with in-memory and filesystem backends.

The store never touches files directly. Schema definitions and records go
through a ``StorageAdapter``: a key to JSON-object store addressed by
``/``-separated logical paths grouped into namespaces.

Manifesto:
    - **Protocol-based:** Duck typing via a runtime_checkable Protocol
    - **Backend-agnostic:** Same schema/record code on memory or disk
    - **Atomic publish:** A record is either fully written or not visible
    - **Distinct failures:** not-found, encode, decode and I/O errors are
      separate StorageError subclasses

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                   StorageAdapter Protocol                    │
        │  save(obj, path) | load(path) | ensure_namespace(ns)         │
        │  list_namespace(ns)                                          │
        └─────────────────────────────────────────────────────────────┘
                              │
                    ┌─────────┴─────────┐
                    │                   │
        ┌───────────▼────────┐  ┌──────▼──────────────┐
        │ InMemoryStorage    │  │ FileSystemStorage    │
        │ (tests, scratch)   │  │ (temp file + replace)│
        └────────────────────┘  └─────────────────────┘

    Persisted layout::

        schemas/<schema-name>.json
        collections/<schema-name>/<record-uuid>.json

Examples:
    >>> storage = InMemoryStorage()
    >>> storage.save({"name": "users"}, schema_path("users"))
    >>> storage.load("schemas/users.json")
    {'name': 'users'}
    >>> storage.list_namespace("schemas")
    ['users.json']

Guardrails:
    ❌ DON'T: Hardcode filesystem paths in schema or record code
    ✅ DO: Build paths with schema_path() / record_path()

    ❌ DON'T: Share one collection between concurrent writers
    ✅ DO: Serialize writers outside the store; there is no locking

Tags:
    storage, protocol, json, filesystem, in-memory, napdb
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from napdb.core.errors import (
    ConfigError,
    DecodeError,
    EncodeError,
    ObjectNotFoundError,
    StorageError,
)
from napdb.core.logging import get_logger
from napdb.core.settings import NapSettings

logger = get_logger(__name__)


SCHEMAS_NAMESPACE = "schemas"
COLLECTIONS_NAMESPACE = "collections"
RECORD_EXTENSION = ".json"


# =============================================================================
# LAYOUT
# =============================================================================


def schema_path(schema_name: str) -> str:
    """Path of a schema definition."""
    return f"{SCHEMAS_NAMESPACE}/{schema_name}{RECORD_EXTENSION}"


def collection_namespace(schema_name: str) -> str:
    """Namespace holding the records of one schema."""
    return f"{COLLECTIONS_NAMESPACE}/{schema_name}"


def record_path(schema_name: str, record_id: str) -> str:
    """Path of a single record."""
    return f"{collection_namespace(schema_name)}/{record_id}{RECORD_EXTENSION}"


def normalize_path(path: str) -> str:
    """
    Validate a logical path and return it in canonical form.

    Raises:
        StorageError: For empty, absolute or parent-escaping paths.
    """
    if not path or path.startswith("/") or "\\" in path:
        raise StorageError(f"invalid storage path: {path!r}", path=path)
    parts = [p for p in path.split("/") if p not in ("", ".")]
    if not parts or ".." in parts:
        raise StorageError(f"invalid storage path: {path!r}", path=path)
    return "/".join(parts)


# =============================================================================
# CODEC
# =============================================================================


def encode(obj: Any, path: str) -> str:
    """Serialize obj to canonical JSON text."""
    try:
        return json.dumps(obj, sort_keys=True, allow_nan=False, indent=2)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"cannot encode object for {path}: {e}", path=path, cause=e) from e


def decode(text: str, path: str) -> Any:
    """Parse JSON text read from path."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"malformed JSON in {path}: {e}", path=path, cause=e) from e


# =============================================================================
# PROTOCOL
# =============================================================================


@runtime_checkable
class StorageAdapter(Protocol):
    """
    Abstract SYNCHRONOUS object store for schema definitions and records.

    Implementations:
        - :class:`InMemoryStorage`: single-process dict, nothing on disk
        - :class:`FileSystemStorage`: one JSON file per object under a root
    """

    def save(self, obj: Any, path: str) -> None:
        """Serialize obj and durably write it at path, creating parents.

        Raises:
            EncodeError: obj is not JSON-serializable.
            StorageError: The write failed.
        """
        ...

    def load(self, path: str) -> Any:
        """Read and decode the object at path.

        Raises:
            ObjectNotFoundError: Nothing stored at path.
            DecodeError: Stored content is not valid JSON.
            StorageError: The read failed.
        """
        ...

    def ensure_namespace(self, namespace: str) -> None:
        """Create namespace if missing. Idempotent."""
        ...

    def list_namespace(self, namespace: str) -> list[str]:
        """Names of entries directly inside namespace ([] if missing)."""
        ...


# ------------------------------------------------------------------ #
# In-Memory Storage
# ------------------------------------------------------------------ #


class InMemoryStorage:
    """Dict-backed storage adapter.

    Objects are kept as encoded JSON text so encode/decode behave exactly as
    they do on disk. Not shared between processes.

    Example:
        storage = InMemoryStorage()
        storage.save({"a": 1}, "collections/users/1.json")
        storage.list_namespace("collections/users")  # ['1.json']
    """

    def __init__(self) -> None:
        self._objects: dict[str, str] = {}
        self._namespaces: set[str] = set()

    def save(self, obj: Any, path: str) -> None:
        """Store obj at path."""
        path = normalize_path(path)
        text = encode(obj, path)
        parent, _, _ = path.rpartition("/")
        if parent:
            self.ensure_namespace(parent)
        self._objects[path] = text

    def load(self, path: str) -> Any:
        """Return the object stored at path."""
        path = normalize_path(path)
        if path not in self._objects:
            raise ObjectNotFoundError(path)
        return decode(self._objects[path], path)

    def ensure_namespace(self, namespace: str) -> None:
        """Register namespace and its ancestors."""
        parts = normalize_path(namespace).split("/")
        for i in range(1, len(parts) + 1):
            self._namespaces.add("/".join(parts[:i]))

    def list_namespace(self, namespace: str) -> list[str]:
        """List direct children (objects and namespaces) of namespace."""
        namespace = normalize_path(namespace)
        prefix = namespace + "/"
        names = set()
        for key in list(self._objects) + list(self._namespaces):
            if key.startswith(prefix):
                names.add(key[len(prefix):].split("/", 1)[0])
        return sorted(names)

    def put_raw(self, path: str, text: str) -> None:
        """Store raw text at path without encoding (for foreign or corrupt data)."""
        path = normalize_path(path)
        parent, _, _ = path.rpartition("/")
        if parent:
            self.ensure_namespace(parent)
        self._objects[path] = text

    def size(self) -> int:
        """Return current number of stored objects."""
        return len(self._objects)


# ------------------------------------------------------------------ #
# Filesystem Storage
# ------------------------------------------------------------------ #


class FileSystemStorage:
    """One JSON file per object under a root directory.

    Writes go to a hidden temporary file in the target directory and are
    published with ``os.replace``, so a crashed or failed write never leaves
    a partial ``.json`` file behind.

    Attributes:
        root: Directory all logical paths are resolved against.

    Example:
        storage = FileSystemStorage(Path("./napdb-data"))
        storage.save(record, record_path("users", record_id))
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self.root.joinpath(*normalize_path(path).split("/"))

    def save(self, obj: Any, path: str) -> None:
        """Atomically write obj as JSON at path."""
        target = self._resolve(path)
        text = encode(obj, path)
        tmp_name: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"failed to write {path}: {e}", path=path, cause=e) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass

    def load(self, path: str) -> Any:
        """Read and decode the JSON file at path."""
        target = self._resolve(path)
        try:
            text = target.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ObjectNotFoundError(path) from e
        except UnicodeDecodeError as e:
            raise DecodeError(f"{path} is not UTF-8 text", path=path, cause=e) from e
        except OSError as e:
            raise StorageError(f"failed to read {path}: {e}", path=path, cause=e) from e
        return decode(text, path)

    def ensure_namespace(self, namespace: str) -> None:
        """Create the namespace directory (and parents)."""
        try:
            self._resolve(namespace).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"failed to create namespace {namespace}: {e}", path=namespace, cause=e
            ) from e

    def list_namespace(self, namespace: str) -> list[str]:
        """List the namespace directory; missing directory → []."""
        directory = self._resolve(namespace)
        try:
            return sorted(entry.name for entry in directory.iterdir())
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(
                f"failed to list namespace {namespace}: {e}", path=namespace, cause=e
            ) from e


# =============================================================================
# FACTORY
# =============================================================================


def open_storage(
    settings: NapSettings | None = None,
    *,
    backend: str | None = None,
) -> StorageAdapter:
    """
    Build the storage adapter selected by settings.

    Args:
        settings: Settings to read ``storage_backend`` and ``data_dir`` from.
            Loaded from the environment when omitted.
        backend: Override for ``settings.storage_backend``.

    Raises:
        ConfigError: Unknown backend name.
    """
    settings = settings or NapSettings()
    name = backend or settings.storage_backend

    if name == "memory":
        logger.debug("storage_opened", backend=name)
        return InMemoryStorage()
    if name == "filesystem":
        logger.debug("storage_opened", backend=name, root=str(settings.data_dir))
        return FileSystemStorage(settings.data_dir)

    raise ConfigError(f"unknown storage backend: {name!r}").with_context(
        storage_backend=name
    )


__all__ = [
    "SCHEMAS_NAMESPACE",
    "COLLECTIONS_NAMESPACE",
    "RECORD_EXTENSION",
    "schema_path",
    "collection_namespace",
    "record_path",
    "normalize_path",
    "StorageAdapter",
    "InMemoryStorage",
    "FileSystemStorage",
    "open_storage",
]
