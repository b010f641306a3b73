"""VaultResolver — which file is "today's note", and its cached snapshot.

The resolver is the single dependency injected into every service. It
owns three collaborators, all passed in explicitly:

- the Obsidian vault registry (read-only),
- a :class:`SelectionStore` holding the selected vault path,
- a :class:`CacheStore` holding the last resolved ``{content, filename}``.

INVARIANT: No public method raises because of filesystem state. Missing
or malformed registries, configs, notes, and caches degrade to empty or
default values. A stale display beats a broken one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError

from daynote.domain.formats import DEFAULT_NAMES_LOCALE, DEFAULT_PATTERN, format_date
from daynote.domain.models import (
    DailyNoteSettings,
    NoteLocation,
    ResolvedNote,
    VaultDescriptor,
)
from daynote.infrastructure.cache import CacheStore
from daynote.infrastructure.filesystem import read_text_or_empty
from daynote.infrastructure.registry import load_daily_note_settings, load_vaults
from daynote.infrastructure.state import SelectionStore

if TYPE_CHECKING:
    from daynote.config.settings import DaynoteSettings

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


class VaultResolver:
    """Resolve today's daily note for the selected vault and cache it.

    Constructed once per CLI invocation (or watcher) from
    :class:`DaynoteSettings`. Tests build it directly with temp paths and
    a fixed *clock*.
    """

    def __init__(
        self,
        registry_path: Path,
        selection: SelectionStore,
        cache: CacheStore,
        *,
        names_locale: str = DEFAULT_NAMES_LOCALE,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._registry_path = registry_path
        self._selection = selection
        self._cache = cache
        self._names_locale = names_locale
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: DaynoteSettings) -> VaultResolver:
        state_dir = settings.paths.state_dir.expanduser()
        return cls(
            settings.paths.registry.expanduser(),
            SelectionStore.in_dir(state_dir),
            CacheStore.in_dir(state_dir),
            names_locale=settings.format.names_locale,
        )

    @property
    def registry_path(self) -> Path:
        return self._registry_path

    @property
    def cache(self) -> CacheStore:
        return self._cache

    # ------------------------------------------------------------------
    # Vault discovery and selection
    # ------------------------------------------------------------------

    def discover_vaults(self) -> list[VaultDescriptor]:
        """All registered vaults, sorted by display name. Empty on any failure."""
        return load_vaults(self._registry_path)

    def find_vault(self, key: str) -> VaultDescriptor | None:
        """Look up a vault by absolute path, then by display name."""
        vaults = self.discover_vaults()
        for vault in vaults:
            if vault.path == key:
                return vault
        for vault in vaults:
            if vault.display_name == key:
                return vault
        return None

    def selected_vault(self) -> VaultDescriptor | None:
        """The persisted selection if still registered, else the first vault."""
        vaults = self.discover_vaults()
        saved = self._selection.load()
        if saved is not None:
            for vault in vaults:
                if vault.path == saved:
                    return vault
            logger.debug("Saved vault %s is no longer registered", saved)
        return vaults[0] if vaults else None

    def select_vault(self, vault: VaultDescriptor) -> bool:
        """Persist *vault* as the selection. Does not refresh the cache.

        Returns False (after logging) if the selection could not be saved.
        """
        try:
            self._selection.save(vault.path)
        except OSError as exc:
            logger.warning("Could not save vault selection %s: %s", vault.path, exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Today's note
    # ------------------------------------------------------------------

    def daily_note_settings(self, vault: VaultDescriptor) -> DailyNoteSettings:
        """Per-vault daily-notes settings, read fresh on every call."""
        return load_daily_note_settings(Path(vault.path))

    def todays_filename(self, vault: VaultDescriptor, *, now: datetime | None = None) -> str:
        """Today's note name (no extension) under *vault*'s date pattern."""
        return self._render(self.daily_note_settings(vault).date_pattern, now)

    def todays_note_path(self, vault: VaultDescriptor, *, now: datetime | None = None) -> Path:
        """``<vault>/[<folder>/]<filename>.md`` for today."""
        return self.locate_todays_note(vault, now=now).path

    def locate_todays_note(
        self, vault: VaultDescriptor, *, now: datetime | None = None
    ) -> NoteLocation:
        """Settings, filename, and path of today's note, from a single settings read."""
        settings = self.daily_note_settings(vault)
        filename = self._render(settings.date_pattern, now)
        path = Path(vault.path)
        if settings.folder_path:
            path = path / settings.folder_path
        return NoteLocation(
            settings=settings, filename=filename, path=path / f"{filename}{NOTE_SUFFIX}"
        )

    def read_note(self, location: NoteLocation) -> ResolvedNote:
        """Read the note at *location*; empty content if it cannot be read."""
        return ResolvedNote(filename=location.filename, content=read_text_or_empty(location.path))

    def read_todays_note(self, *, now: datetime | None = None) -> ResolvedNote:
        """Resolve and read today's note in the selected vault.

        Returns an empty note when no vault is registered; an empty
        ``content`` when the file is missing or unreadable.
        """
        vault = self.selected_vault()
        if vault is None:
            logger.debug("No vaults registered in %s", self._registry_path)
            return ResolvedNote()
        return self.read_note(self.locate_todays_note(vault, now=now))

    def render(self, pattern: str, *, now: datetime | None = None) -> str:
        """Format *now* (default: the clock) with a Moment.js *pattern*.

        Raises:
            ValueError: If the pattern or the names locale cannot be rendered.
        """
        when = now if now is not None else self._clock()
        try:
            return format_date(pattern, when, names_locale=self._names_locale)
        except (KeyError, UnknownLocaleError) as exc:
            raise ValueError(str(exc)) from exc

    def _render(self, pattern: str, now: datetime | None) -> str:
        when = now if now is not None else self._clock()
        try:
            return self.render(pattern, now=when)
        except ValueError as exc:
            logger.debug("Cannot render pattern %r (%s); using %s", pattern, exc, DEFAULT_PATTERN)
            return format_date(DEFAULT_PATTERN, when, names_locale=DEFAULT_NAMES_LOCALE)

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def refresh_cache(self, *, now: datetime | None = None) -> ResolvedNote | None:
        """Resolve today's note and publish it as the cached snapshot.

        The only write path to the cache. Safe to call repeatedly. Returns
        the published note, or None if the cache could not be written (the
        previous snapshot then stays in place).
        """
        note = self.read_todays_note(now=now)
        try:
            self._cache.publish(note)
        except OSError as exc:
            logger.warning("Could not write note cache under %s: %s", self._cache.root, exc)
            return None
        logger.info("Cache refreshed: %s", note.filename or "<no vault>")
        return note

    def read_cached_note(self) -> ResolvedNote:
        """The last published snapshot, without touching the vault."""
        return self._cache.read()
