"""Value types for vaults, daily-note settings, and resolved notes."""

from __future__ import annotations

from pathlib import Path, PurePath
from urllib.parse import quote

from pydantic import BaseModel

from daynote.domain.formats import DEFAULT_PATTERN


class VaultDescriptor(BaseModel):
    """One Obsidian vault, keyed by its absolute directory path."""

    model_config = {"frozen": True}

    path: str

    @property
    def display_name(self) -> str:
        """Last path component, as shown in the vault picker."""
        return PurePath(self.path).name


class DailyNoteSettings(BaseModel):
    """Per-vault daily-notes plugin configuration.

    ``folder`` is relative to the vault root; ``None`` means the root.
    ``format`` is a Moment.js pattern; ``None`` means :data:`DEFAULT_PATTERN`.
    """

    model_config = {"frozen": True}

    folder: str | None = None
    format: str | None = None

    @property
    def folder_path(self) -> str:
        return (self.folder or "").strip("/")

    @property
    def date_pattern(self) -> str:
        return self.format or DEFAULT_PATTERN


class NoteLocation(BaseModel):
    """Today's note in one vault, resolved under one read of its settings."""

    model_config = {"frozen": True}

    settings: DailyNoteSettings
    filename: str
    path: Path


class ResolvedNote(BaseModel):
    """Today's note as resolved from disk or read back from the cache."""

    model_config = {"frozen": True}

    filename: str = ""
    content: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.filename and not self.content


def daily_note_uri(vault: VaultDescriptor) -> str:
    """Build the ``obsidian://daily`` URL that opens today's note in *vault*."""
    return f"obsidian://daily?vault={quote(vault.display_name)}"
