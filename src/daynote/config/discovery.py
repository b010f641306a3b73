"""Config file discovery.

Walk-up finder locates daynote.toml from the working directory; the
user-level ``~/.daynote/daynote.toml`` is the fallback. Supports the
DAYNOTE_CONFIG env var and the --config CLI flag as overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

from daynote.config.models import DEFAULT_STATE_DIR

CONFIG_FILENAME = "daynote.toml"
CONFIG_ENV_VAR = "DAYNOTE_CONFIG"


def user_config_path() -> Path:
    return DEFAULT_STATE_DIR.expanduser() / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for daynote.toml.

    Returns the path to the config file, or None if not found.
    Checks DAYNOTE_CONFIG env var first and the user config last.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    fallback = user_config_path()
    return fallback if fallback.is_file() else None
