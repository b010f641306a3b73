"""Selected-vault persistence.

The selection is a plain text file holding one absolute vault path. It is
passed explicitly to :class:`~daynote.infrastructure.vault.VaultResolver`
rather than living in module state, so tests can point it anywhere.
"""

from __future__ import annotations

import logging
from pathlib import Path

from daynote.infrastructure.filesystem import atomic_write_text, read_text_or_empty

logger = logging.getLogger(__name__)

SELECTION_FILENAME = "vault.txt"


class SelectionStore:
    """Read/write access to the persisted selected-vault path."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def in_dir(cls, state_dir: Path) -> SelectionStore:
        return cls(state_dir / SELECTION_FILENAME)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        """Return the saved vault path, or None if nothing usable is saved."""
        saved = read_text_or_empty(self._path).rstrip("\r\n")
        return saved or None

    def save(self, vault_path: str) -> None:
        """Persist *vault_path* as the selection.

        Raises:
            OSError: If the state directory is not writable.
        """
        atomic_write_text(self._path, vault_path)
        logger.debug("Saved vault selection %s", vault_path)
