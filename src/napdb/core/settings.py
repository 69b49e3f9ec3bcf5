"""Settings for the napdb store.

Configuration is explicit, validated, and environment-driven. Every field
can be set through a ``NAPDB_``-prefixed environment variable or a ``.env``
file in the working directory.

Fields
──────
data_dir         : Root directory for the filesystem storage adapter
storage_backend  : ``filesystem`` or ``memory``
log_level        : Structlog log level
log_json         : Force JSON (True) / console (False) logs; None = auto
debug            : Shortcut for DEBUG-level logging

Examples:
    >>> from napdb.core.settings import NapSettings
    >>> settings = NapSettings(storage_backend="memory")
    >>> settings.storage_backend
    'memory'
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NapSettings(BaseSettings):
    """Settings shared by every napdb entry point."""

    model_config = SettingsConfigDict(
        env_prefix="NAPDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    data_dir: Path = Field(
        default_factory=lambda: Path("napdb-data"),
        description="Root directory for the filesystem storage adapter",
    )
    storage_backend: Literal["filesystem", "memory"] = "filesystem"

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool | None = None


def get_settings() -> NapSettings:
    """Load settings from the environment."""
    return NapSettings()


__all__ = ["NapSettings", "get_settings"]
