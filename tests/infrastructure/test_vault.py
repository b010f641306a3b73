"""Tests for VaultResolver — discovery, selection, resolution, caching."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from daynote.config.settings import DaynoteSettings
from daynote.domain.models import DailyNoteSettings, ResolvedNote, VaultDescriptor
from daynote.infrastructure.cache import CacheStore
from daynote.infrastructure.state import SelectionStore
from daynote.infrastructure.vault import VaultResolver


class TestDiscovery:
    def test_sorted_by_name(self, resolver: VaultResolver, make_vault: Callable[..., Path]) -> None:
        make_vault("Notes")
        make_vault("Journal")
        assert [v.display_name for v in resolver.discover_vaults()] == ["Journal", "Notes"]

    def test_no_registry(self, resolver: VaultResolver) -> None:
        assert resolver.discover_vaults() == []

    def test_find_by_name_and_path(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        root = make_vault("Journal")
        assert resolver.find_vault("Journal") == VaultDescriptor(path=str(root))
        assert resolver.find_vault(str(root)) == VaultDescriptor(path=str(root))
        assert resolver.find_vault("Nope") is None


class TestSelection:
    def test_none_without_vaults(self, resolver: VaultResolver) -> None:
        assert resolver.selected_vault() is None

    def test_defaults_to_first_by_name(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        make_vault("Notes")
        journal = make_vault("Journal")
        assert resolver.selected_vault() == VaultDescriptor(path=str(journal))

    def test_persisted_selection_wins(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        make_vault("Journal")
        notes = make_vault("Notes")
        assert resolver.select_vault(VaultDescriptor(path=str(notes))) is True
        assert resolver.selected_vault() == VaultDescriptor(path=str(notes))

    def test_selection_survives_new_resolver(
        self,
        resolver: VaultResolver,
        make_vault: Callable[..., Path],
        registry_path: Path,
        state_dir: Path,
    ) -> None:
        make_vault("Journal")
        notes = make_vault("Notes")
        resolver.select_vault(VaultDescriptor(path=str(notes)))

        fresh = VaultResolver(
            registry_path, SelectionStore.in_dir(state_dir), CacheStore.in_dir(state_dir)
        )
        assert fresh.selected_vault() == VaultDescriptor(path=str(notes))

    def test_stale_selection_falls_back(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        journal = make_vault("Journal")
        resolver.select_vault(VaultDescriptor(path="/gone/Vault"))
        assert resolver.selected_vault() == VaultDescriptor(path=str(journal))

    def test_select_does_not_refresh_cache(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        notes = make_vault("Notes", notes={"2024-03-04.md": "hi"})
        resolver.select_vault(VaultDescriptor(path=str(notes)))
        assert resolver.read_cached_note() == ResolvedNote()

    def test_unwritable_state_returns_false(
        self, registry_path: Path, tmp_path: Path, make_vault: Callable[..., Path]
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        resolver = VaultResolver(
            registry_path, SelectionStore.in_dir(blocker), CacheStore.in_dir(blocker)
        )
        vault = VaultDescriptor(path=str(make_vault("Journal")))
        assert resolver.select_vault(vault) is False


class TestFilename:
    def test_default_pattern(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        vault = VaultDescriptor(path=str(make_vault("Journal")))
        assert resolver.daily_note_settings(vault) == DailyNoteSettings()
        assert resolver.todays_filename(vault) == "2024-03-04"

    def test_configured_pattern(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        root = make_vault("Journal", daily={"format": "dddd, MMMM D"})
        vault = VaultDescriptor(path=str(root))
        assert resolver.todays_filename(vault) == "Monday, March 4"

    def test_explicit_now(self, resolver: VaultResolver, make_vault: Callable[..., Path]) -> None:
        vault = VaultDescriptor(path=str(make_vault("Journal")))
        assert resolver.todays_filename(vault, now=datetime(2025, 12, 31)) == "2025-12-31"

    def test_settings_read_fresh_each_call(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        root = make_vault("Journal", daily={"format": "YYYY"})
        vault = VaultDescriptor(path=str(root))
        assert resolver.todays_filename(vault) == "2024"
        (root / ".obsidian" / "daily-notes.json").write_text('{"format": "MM"}')
        assert resolver.todays_filename(vault) == "03"

    def test_unrenderable_pattern_falls_back(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        root = make_vault("Journal", daily={"format": "hhh"})
        assert resolver.todays_filename(VaultDescriptor(path=str(root))) == "2024-03-04"

    def test_unknown_locale_falls_back(
        self, registry_path: Path, state_dir: Path, make_vault: Callable[..., Path]
    ) -> None:
        resolver = VaultResolver(
            registry_path,
            SelectionStore.in_dir(state_dir),
            CacheStore.in_dir(state_dir),
            names_locale="xx_NOPE",
            clock=lambda: datetime(2024, 3, 4),
        )
        root = make_vault("Journal", daily={"format": "dddd"})
        assert resolver.todays_filename(VaultDescriptor(path=str(root))) == "2024-03-04"

    def test_render_raises_value_error(self, resolver: VaultResolver) -> None:
        with pytest.raises(ValueError):
            resolver.render("hhh")

    def test_note_path_with_folder(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        root = make_vault("Journal", daily={"folder": "Daily/", "format": "YYYY/MM/DD"})
        path = resolver.todays_note_path(VaultDescriptor(path=str(root)))
        assert path == root / "Daily" / "2024" / "03" / "04.md"

    def test_locate_uses_one_settings_read(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        root = make_vault("Journal", daily={"folder": "Daily", "format": "DD.MM.YYYY"})
        location = resolver.locate_todays_note(VaultDescriptor(path=str(root)))
        assert location.settings == DailyNoteSettings(folder="Daily", format="DD.MM.YYYY")
        assert location.filename == "04.03.2024"
        assert location.path == root / "Daily" / "04.03.2024.md"

    def test_note_path_at_root(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        root = make_vault("Journal", daily={"folder": ""})
        assert resolver.todays_note_path(VaultDescriptor(path=str(root))) == root / "2024-03-04.md"


class TestReadTodaysNote:
    def test_reads_note(self, resolver: VaultResolver, make_vault: Callable[..., Path]) -> None:
        make_vault(
            "Journal",
            daily={"folder": "Daily"},
            notes={"Daily/2024-03-04.md": "# Monday\n- [ ] write tests\n"},
        )
        note = resolver.read_todays_note()
        assert note == ResolvedNote(filename="2024-03-04", content="# Monday\n- [ ] write tests\n")

    def test_missing_note_has_filename_but_no_content(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        make_vault("Journal")
        assert resolver.read_todays_note() == ResolvedNote(filename="2024-03-04", content="")

    def test_apostrophe_in_pattern(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        make_vault(
            "Journal",
            daily={"format": "DD MMM 'YY"},
            notes={"04 Mar '24.md": "short year"},
        )
        note = resolver.read_todays_note()
        assert note == ResolvedNote(filename="04 Mar '24", content="short year")

    def test_no_vaults(self, resolver: VaultResolver) -> None:
        assert resolver.read_todays_note() == ResolvedNote()

    def test_uses_selected_vault(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        make_vault("Journal", notes={"2024-03-04.md": "journal"})
        notes = make_vault("Notes", notes={"2024-03-04.md": "notes"})
        resolver.select_vault(VaultDescriptor(path=str(notes)))
        assert resolver.read_todays_note().content == "notes"

    def test_vault_directory_missing(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        root = make_vault("Journal")
        root.rmdir()
        assert resolver.read_todays_note() == ResolvedNote(filename="2024-03-04", content="")


class TestCache:
    def test_read_before_refresh(self, resolver: VaultResolver) -> None:
        assert resolver.read_cached_note() == ResolvedNote()

    def test_refresh_then_read(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        make_vault("Journal", notes={"2024-03-04.md": "today"})
        published = resolver.refresh_cache()
        assert published == ResolvedNote(filename="2024-03-04", content="today")
        assert resolver.read_cached_note() == published

    def test_refresh_tracks_edits(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        root = make_vault("Journal", notes={"2024-03-04.md": "v1"})
        resolver.refresh_cache()
        (root / "2024-03-04.md").write_text("v2")
        assert resolver.read_cached_note().content == "v1"
        resolver.refresh_cache()
        assert resolver.read_cached_note().content == "v2"

    def test_refresh_is_idempotent(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        make_vault("Journal", notes={"2024-03-04.md": "same"})
        first = resolver.refresh_cache()
        second = resolver.refresh_cache()
        assert first == second == resolver.read_cached_note()

    def test_refresh_follows_date(
        self, resolver: VaultResolver, make_vault: Callable[..., Path]
    ) -> None:
        make_vault("Journal", notes={"2024-03-04.md": "mon", "2024-03-05.md": "tue"})
        resolver.refresh_cache()
        resolver.refresh_cache(now=datetime(2024, 3, 5, 0, 0, 1))
        assert resolver.read_cached_note() == ResolvedNote(filename="2024-03-05", content="tue")

    def test_refresh_without_vaults_caches_empty(self, resolver: VaultResolver) -> None:
        assert resolver.refresh_cache() == ResolvedNote()
        assert resolver.read_cached_note() == ResolvedNote()

    def test_unwritable_cache_returns_none(
        self, registry_path: Path, tmp_path: Path, make_vault: Callable[..., Path]
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        resolver = VaultResolver(
            registry_path, SelectionStore.in_dir(blocker), CacheStore.in_dir(blocker)
        )
        make_vault("Journal")
        assert resolver.refresh_cache() is None
        assert resolver.read_cached_note() == ResolvedNote()


class TestFromSettings:
    def test_uses_configured_paths(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        settings = DaynoteSettings.from_cli(
            paths={"registry": tmp_path / "reg.json", "state_dir": tmp_path / "state"},
            format={"names_locale": "fr_FR"},
        )
        resolver = VaultResolver.from_settings(settings)
        assert resolver.registry_path == tmp_path / "reg.json"
        assert resolver.cache.root == tmp_path / "state" / "cache"
        assert resolver.render("dddd", now=datetime(2024, 3, 4)) == "lundi"
