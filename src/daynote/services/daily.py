"""DailyNoteService — vault listing, selection, resolution, and cache ops.

Thin adapter from :class:`VaultResolver` (which never fails) to
:class:`ServiceResult`. The only failures reported here are user-level
ones: an unknown vault name, no vaults registered, or an unwritable
state directory.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from daynote.domain.formats import translate
from daynote.domain.models import ResolvedNote, VaultDescriptor, daily_note_uri
from daynote.services.base import BaseService
from daynote.services.result import ServiceResult


def _vault_data(vault: VaultDescriptor) -> dict[str, Any]:
    return {"name": vault.display_name, "path": vault.path}


def _note_data(note: ResolvedNote) -> dict[str, Any]:
    return {"filename": note.filename, "content": note.content}


class DailyNoteService(BaseService):
    """Operations behind the ``daynote`` commands."""

    def _no_vaults(self, op: str) -> ServiceResult:
        return ServiceResult.failure(
            op,
            "NO_VAULTS",
            "No Obsidian vaults found",
            registry=str(self._resolver.registry_path),
        )

    def list_vaults(self) -> ServiceResult:
        vaults = self._resolver.discover_vaults()
        selected = self._resolver.selected_vault()
        items = [
            {**_vault_data(v), "selected": selected is not None and v.path == selected.path}
            for v in vaults
        ]
        return ServiceResult(ok=True, op="vaults", data={"vaults": items, "count": len(items)})

    def select(self, key: str) -> ServiceResult:
        """Switch to the vault named *key* (display name or path) and refresh."""
        vault = self._resolver.find_vault(key)
        if vault is None:
            if not self._resolver.discover_vaults():
                return self._no_vaults("select")
            return ServiceResult.failure("select", "VAULT_NOT_FOUND", f"No vault named {key!r}")
        if not self._resolver.select_vault(vault):
            return ServiceResult.failure(
                "select", "STATE_UNWRITABLE", f"Could not save selection of {vault.display_name}"
            )
        warnings: list[str] = []
        note = self._resolver.refresh_cache()
        if note is None:
            warnings.append("Cache could not be written; display may be stale")
        return ServiceResult(ok=True, op="select", data=_vault_data(vault), warnings=warnings)

    def today(self, *, now: datetime | None = None) -> ServiceResult:
        """Resolve today's note live from the vault (no cache write)."""
        vault = self._resolver.selected_vault()
        if vault is None:
            return self._no_vaults("today")
        location = self._resolver.locate_todays_note(vault, now=now)
        note = self._resolver.read_note(location)
        warnings: list[str] = []
        if not location.path.is_file():
            warnings.append(f"Today's note does not exist yet: {location.path}")
        data = {
            "vault": vault.display_name,
            "folder": location.settings.folder_path,
            "format": location.settings.date_pattern,
            "path": str(location.path),
            **_note_data(note),
        }
        return ServiceResult(ok=True, op="today", data=data, warnings=warnings)

    def refresh(self) -> ServiceResult:
        note = self._resolver.refresh_cache()
        if note is None:
            return ServiceResult.failure(
                "refresh",
                "CACHE_UNWRITABLE",
                "Could not write the note cache",
                cache=str(self._resolver.cache.root),
            )
        warnings = [] if note.filename else ["No vault selected; cached an empty note"]
        data = {"filename": note.filename, "chars": len(note.content)}
        return ServiceResult(ok=True, op="refresh", data=data, warnings=warnings)

    def cached(self) -> ServiceResult:
        note = self._resolver.read_cached_note()
        warnings = ["Cache is empty; run 'daynote refresh'"] if note.is_empty else []
        return ServiceResult(ok=True, op="cached", data=_note_data(note), warnings=warnings)

    def open_url(self) -> ServiceResult:
        vault = self._resolver.selected_vault()
        if vault is None:
            return self._no_vaults("open")
        return ServiceResult(
            ok=True, op="open", data={"vault": vault.display_name, "url": daily_note_uri(vault)}
        )

    def translate(self, pattern: str, *, now: datetime | None = None) -> ServiceResult:
        """Show the LDML form of a Moment.js *pattern* and a sample rendering."""
        ldml = translate(pattern)
        data: dict[str, Any] = {"pattern": pattern, "ldml": ldml}
        warnings: list[str] = []
        try:
            data["sample"] = self._resolver.render(pattern, now=now)
        except ValueError as exc:
            warnings.append(f"Pattern cannot be rendered: {exc}")
        return ServiceResult(ok=True, op="translate", data=data, warnings=warnings)
