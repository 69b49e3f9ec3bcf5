"""
Shared pytest fixtures and configuration for napdb tests.

This module provides:
- In-memory and filesystem storage adapters
- The ``users`` schema used throughout the examples
- A fake validator that accepts everything
- Location-based test markers

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_insert(users, memory_storage):
        ...
"""

import sys
from pathlib import Path

import pytest

# Ensure napdb and tests._support are importable
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from napdb.core.schema import Schema, build_schema
from napdb.core.storage import FileSystemStorage, InMemoryStorage

from tests._support import USER_FIELDS, AcceptAllValidator


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.path).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    """Fresh in-memory storage adapter."""
    return InMemoryStorage()


@pytest.fixture
def fs_storage(tmp_path: Path) -> FileSystemStorage:
    """Filesystem storage adapter rooted in a per-test temp directory."""
    return FileSystemStorage(tmp_path / "data")


@pytest.fixture(params=["memory", "filesystem"])
def storage(request, tmp_path: Path):
    """Run a test against both storage adapters."""
    if request.param == "memory":
        return InMemoryStorage()
    return FileSystemStorage(tmp_path / "data")


# =============================================================================
# Schema Fixtures
# =============================================================================


@pytest.fixture
def users(storage) -> Schema:
    """The ``users`` schema persisted in the parametrized storage."""
    return build_schema("users", storage, *USER_FIELDS).unwrap()


@pytest.fixture
def memory_users(memory_storage) -> Schema:
    """The ``users`` schema persisted in memory_storage."""
    return build_schema("users", memory_storage, *USER_FIELDS).unwrap()


@pytest.fixture
def accept_all_validator() -> AcceptAllValidator:
    return AcceptAllValidator()
