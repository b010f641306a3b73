"""Filesystem primitives shared by the registry, state, and cache stores.

INVARIANT: Reads never raise. Every read helper here degrades to an empty
value and logs the cause at DEBUG; callers decide what "empty" means.
Writes do raise ``OSError`` so the caller can keep the previous state.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_text_or_empty(path: Path) -> str:
    """Return the UTF-8 text of *path*, or ``""`` if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("File not found: %s", path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Unreadable file %s: %s", path, exc)
    return ""


def read_json_object(path: Path) -> dict[str, Any]:
    """Parse *path* as a JSON object. Returns ``{}`` when missing or malformed."""
    raw = read_text_or_empty(path)
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.debug("Invalid JSON in %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.debug("Expected a JSON object in %s, got %s", path, type(data).__name__)
        return {}
    return data


def atomic_write_text(path: Path, content: str) -> None:
    """Replace *path* with *content* in one step (temp file + rename).

    The temp file lives in the same directory so ``os.replace`` never
    crosses a filesystem boundary. Readers see the old file or the new
    one, never a truncated mix.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
