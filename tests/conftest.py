"""Shared pytest fixtures and test helpers for daynote tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from daynote.infrastructure.cache import CacheStore
from daynote.infrastructure.state import SelectionStore
from daynote.infrastructure.vault import VaultResolver

# Monday 2024-03-04 09:05:07, a fixed "now" for filename assertions.
FIXED_NOW = datetime(2024, 3, 4, 9, 5, 7)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    """Shared directory for the selection file and the note cache."""
    path = tmp_path / "state"
    path.mkdir()
    return path


@pytest.fixture
def registry_path(tmp_path: Path) -> Path:
    """Location of the vault registry (not created until a vault is made)."""
    return tmp_path / "obsidian" / "obsidian.json"


@pytest.fixture
def make_vault(tmp_path: Path, registry_path: Path) -> Callable[..., Path]:
    """Create a vault directory and register it in ``obsidian.json``.

    ``daily`` writes ``.obsidian/daily-notes.json`` with the given dict;
    ``notes`` maps vault-relative paths to file contents.
    """

    def _make(
        name: str,
        *,
        daily: dict[str, Any] | None = None,
        notes: dict[str, str] | None = None,
    ) -> Path:
        root = tmp_path / "vaults" / name
        root.mkdir(parents=True)
        if daily is not None:
            (root / ".obsidian").mkdir()
            (root / ".obsidian" / "daily-notes.json").write_text(json.dumps(daily))
        for rel, text in (notes or {}).items():
            note = root / rel
            note.parent.mkdir(parents=True, exist_ok=True)
            note.write_text(text, encoding="utf-8")

        registry_path.parent.mkdir(parents=True, exist_ok=True)
        data = json.loads(registry_path.read_text()) if registry_path.exists() else {"vaults": {}}
        data["vaults"][f"id-{name}"] = {"path": str(root), "ts": 1700000000000, "open": True}
        registry_path.write_text(json.dumps(data))
        return root

    return _make


@pytest.fixture
def resolver(registry_path: Path, state_dir: Path) -> VaultResolver:
    """Resolver on temp paths with the clock pinned to FIXED_NOW."""
    return VaultResolver(
        registry_path,
        SelectionStore.in_dir(state_dir),
        CacheStore.in_dir(state_dir),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def cli_env(
    tmp_path: Path,
    registry_path: Path,
    state_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Point the CLI at the temp registry and state dir via env vars.

    Also moves CWD and HOME into *tmp_path* so no real daynote.toml is found.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("DAYNOTE_CONFIG", raising=False)
    monkeypatch.setenv("DAYNOTE_PATHS__REGISTRY", str(registry_path))
    monkeypatch.setenv("DAYNOTE_PATHS__STATE_DIR", str(state_dir))
    return tmp_path


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
