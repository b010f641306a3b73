"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, daynote.toml only contains
overrides. Most installs need no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from daynote.domain.formats import DEFAULT_NAMES_LOCALE
from daynote.infrastructure.registry import default_registry_path

DEFAULT_STATE_DIR = Path("~/.daynote")


# --- daynote.toml sections ---


class PathsConfig(BaseModel):
    """[paths] section."""

    model_config = {"frozen": True}

    registry: Path = Field(default_factory=default_registry_path)
    state_dir: Path = DEFAULT_STATE_DIR


class FormatConfig(BaseModel):
    """[format] section."""

    model_config = {"frozen": True}

    names_locale: str = DEFAULT_NAMES_LOCALE


class WatchConfig(BaseModel):
    """[watch] section."""

    model_config = {"frozen": True}

    debounce_seconds: float = Field(default=1.0, ge=0.0)
    rollover: bool = True
