"""Readers for Obsidian's own configuration files.

- The vault registry (``obsidian.json``) lists every vault Obsidian knows:
  ``{"vaults": {"<id>": {"path": "/abs/path", ...}, ...}}``.
- Each vault keeps its daily-notes plugin settings in
  ``<vault>/.obsidian/daily-notes.json``: ``{"folder": ..., "format": ...}``.

Both are owned by Obsidian; anything unexpected reads as empty.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from pydantic import ValidationError

from daynote.domain.models import DailyNoteSettings, VaultDescriptor
from daynote.infrastructure.filesystem import read_json_object

logger = logging.getLogger(__name__)

DAILY_NOTES_CONFIG = Path(".obsidian") / "daily-notes.json"


def default_registry_path() -> Path:
    """Platform location of Obsidian's ``obsidian.json``."""
    home = Path.home()
    if sys.platform == "darwin":
        base = home / "Library" / "Application Support"
    elif sys.platform == "win32":
        base = Path(os.environ.get("APPDATA") or home / "AppData" / "Roaming")
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config")
    return base / "obsidian" / "obsidian.json"


def load_vaults(registry_path: Path) -> list[VaultDescriptor]:
    """Read every vault in the registry, sorted by display name.

    Entries without a string ``path`` are skipped. A missing or malformed
    registry yields an empty list.
    """
    data = read_json_object(registry_path)
    entries = data.get("vaults")
    if not isinstance(entries, dict):
        if data:
            logger.debug("Registry %s has no 'vaults' mapping", registry_path)
        return []

    vaults: dict[str, VaultDescriptor] = {}
    for vault_id, info in entries.items():
        path = info.get("path") if isinstance(info, dict) else None
        if not isinstance(path, str) or not path:
            logger.debug("Skipping registry entry %s without a path", vault_id)
            continue
        vaults.setdefault(path, VaultDescriptor(path=path))
    return sorted(vaults.values(), key=lambda v: (v.display_name, v.path))


def load_daily_note_settings(vault_root: Path) -> DailyNoteSettings:
    """Read ``.obsidian/daily-notes.json`` under *vault_root*, or defaults."""
    config_path = vault_root / DAILY_NOTES_CONFIG
    data = read_json_object(config_path)
    try:
        return DailyNoteSettings.model_validate(data)
    except ValidationError as exc:
        logger.debug("Ignoring malformed daily-notes config %s: %s", config_path, exc)
        return DailyNoteSettings()
