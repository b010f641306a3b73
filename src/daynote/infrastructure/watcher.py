"""Vault watcher — keeps the note cache fresh while running.

Two triggers call :meth:`VaultResolver.refresh_cache`:

- filesystem events anywhere under the selected vault (watchdog), coalesced
  so a burst of saves produces one refresh after ``debounce_seconds`` of quiet;
- a timer that fires just after local midnight so the filename follows
  the date even when nothing on disk changes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime, time, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

if TYPE_CHECKING:
    from daynote.domain.models import ResolvedNote, VaultDescriptor
    from daynote.infrastructure.vault import VaultResolver

logger = logging.getLogger(__name__)

ROLLOVER_SLACK_SECONDS = 1.0
_IGNORED_PARTS = frozenset({".git", ".trash"})


def seconds_until_midnight(now: datetime) -> float:
    """Seconds from *now* until just after the next local midnight.

    Naive *now* is local time. Both ends are made aware so a DST change
    in between is counted in real seconds.
    """
    local = now.astimezone()
    midnight = datetime.combine(local.date() + timedelta(days=1), time.min).astimezone()
    return max((midnight - local).total_seconds(), 0.0) + ROLLOVER_SLACK_SECONDS


class Debouncer:
    """Run *callback* once, *delay* seconds after the last :meth:`trigger`."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self._delay = delay
        self._callback = callback
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fire(self) -> None:
        with self._lock:
            # A newer timer armed while this one was firing stays cancellable.
            if self._timer is not threading.current_thread():
                return
            self._timer = None
        self._callback()


class _VaultEventHandler(FileSystemEventHandler):
    """Forward file events under the vault to a :class:`Debouncer`."""

    def __init__(self, root: Path, debouncer: Debouncer) -> None:
        super().__init__()
        # FSEvents reports resolved paths (/private/var for /var).
        self._roots = (root, root.resolve())
        self._debouncer = debouncer

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type in ("opened", "closed_no_write"):
            return
        rel = self._relative(Path(str(event.src_path)))
        if rel is None:
            return
        if any(part in _IGNORED_PARTS for part in rel.parts):
            return
        logger.debug("Vault change: %s %s", event.event_type, rel)
        self._debouncer.trigger()

    def _relative(self, path: Path) -> Path | None:
        for root in self._roots:
            try:
                return path.relative_to(root)
            except ValueError:
                continue
        return None


class VaultWatcher:
    """Watch the selected vault and refresh the cache on change and at midnight.

    Usage::

        with VaultWatcher(resolver, debounce_seconds=1.0):
            wait_forever()
    """

    def __init__(
        self,
        resolver: VaultResolver,
        *,
        debounce_seconds: float = 1.0,
        rollover: bool = True,
        on_refresh: Callable[[ResolvedNote | None], None] | None = None,
        observer_factory: Callable[[], Any] = Observer,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._resolver = resolver
        self._rollover = rollover
        self._on_refresh = on_refresh
        self._observer_factory = observer_factory
        self._clock = clock
        self._debouncer = Debouncer(debounce_seconds, self.refresh)
        self._refresh_lock = threading.Lock()
        self._observer: Any | None = None
        self._rollover_timer: threading.Timer | None = None
        self._vault: VaultDescriptor | None = None
        self._running = False

    @property
    def vault(self) -> VaultDescriptor | None:
        """The vault currently being watched."""
        return self._vault

    def refresh(self) -> ResolvedNote | None:
        """Refresh the cache now (serialized across triggers)."""
        with self._refresh_lock:
            note = self._resolver.refresh_cache()
        if self._on_refresh is not None:
            self._on_refresh(note)
        return note

    def start(self) -> VaultDescriptor | None:
        """Refresh once, then begin watching the selected vault."""
        self._running = True
        self._vault = self._resolver.selected_vault()
        self.refresh()
        if self._vault is not None:
            self._start_observer(Path(self._vault.path))
        if self._rollover:
            self._arm_rollover()
        return self._vault

    def stop(self) -> None:
        self._running = False
        self._debouncer.cancel()
        if self._rollover_timer is not None:
            self._rollover_timer.cancel()
            self._rollover_timer = None
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def switch(self, vault: VaultDescriptor) -> None:
        """Select *vault*, refresh, and move the watch to it."""
        self.stop()
        self._resolver.select_vault(vault)
        self.start()

    def __enter__(self) -> VaultWatcher:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _start_observer(self, root: Path) -> None:
        observer = self._observer_factory()
        handler = _VaultEventHandler(root, self._debouncer)
        try:
            observer.schedule(handler, str(root), recursive=True)
            observer.start()
        except OSError as exc:
            logger.warning("Cannot watch %s: %s", root, exc)
            return
        self._observer = observer
        logger.debug("Watching %s", root)

    def _arm_rollover(self) -> None:
        delay = seconds_until_midnight(self._clock())
        self._rollover_timer = threading.Timer(delay, self._on_midnight)
        self._rollover_timer.daemon = True
        self._rollover_timer.start()
        logger.debug("Next rollover refresh in %.0fs", delay)

    def _on_midnight(self) -> None:
        if not self._running:
            return
        logger.debug("Midnight rollover")
        self.refresh()
        self._arm_rollover()
