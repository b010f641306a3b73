"""Two-slot note cache shared between the refresher and display readers.

Layout under the cache directory::

    current -> gen-1760000000000000000-ab12cd   (symlink)
    gen-1760000000000000000-ab12cd/
        note.txt       # note body
        filename.txt   # resolved filename, no extension

INVARIANT: A reader never observes content from one refresh paired with
the filename from another. Each publish writes both slots into a fresh
generation directory, then swaps the ``current`` symlink with
``os.replace``. Readers resolve the link once and read both slots from
that generation. Last writer wins; nothing is read-modify-written.
"""

from __future__ import annotations

import logging
import os
import secrets
import shutil
import time
from pathlib import Path

from daynote.domain.models import ResolvedNote

logger = logging.getLogger(__name__)

CACHE_DIRNAME = "cache"
CURRENT_LINK = "current"
CONTENT_FILE = "note.txt"
FILENAME_FILE = "filename.txt"
GENERATION_PREFIX = "gen-"

# Superseded generations younger than this are left for in-flight readers.
PRUNE_GRACE_SECONDS = 10.0
_READ_ATTEMPTS = 3


def _write_synced(path: Path, content: str) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write(content)
        fh.flush()
        os.fsync(fh.fileno())


class CacheStore:
    """Atomic snapshot store for the latest :class:`ResolvedNote`."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @classmethod
    def in_dir(cls, state_dir: Path) -> CacheStore:
        return cls(state_dir / CACHE_DIRNAME)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def current(self) -> Path:
        """The published snapshot (a symlink to the live generation)."""
        return self._root / CURRENT_LINK

    def publish(self, note: ResolvedNote) -> None:
        """Replace the cached snapshot with *note*.

        On failure the previous snapshot stays published.

        Raises:
            OSError: If the cache directory cannot be written.
        """
        self._root.mkdir(parents=True, exist_ok=True)
        name = f"{GENERATION_PREFIX}{time.time_ns()}-{secrets.token_hex(3)}"
        generation = self._root / name
        link_tmp = self._root / f".{CURRENT_LINK}.{name}"
        try:
            generation.mkdir()
            _write_synced(generation / CONTENT_FILE, note.content)
            _write_synced(generation / FILENAME_FILE, note.filename)
            os.symlink(name, link_tmp, target_is_directory=True)
            os.replace(link_tmp, self.current)
        except BaseException:
            link_tmp.unlink(missing_ok=True)
            shutil.rmtree(generation, ignore_errors=True)
            raise
        logger.debug("Published cache generation %s (%s)", name, note.filename)
        self.prune()

    def read(self) -> ResolvedNote:
        """Return the published snapshot, or an empty note if there is none.

        Never raises. If a generation disappears between resolving the link
        and reading it, the link is resolved again.
        """
        for _ in range(_READ_ATTEMPTS):
            try:
                generation = self._root / os.readlink(self.current)
                content = (generation / CONTENT_FILE).read_text(encoding="utf-8")
                filename = (generation / FILENAME_FILE).read_text(encoding="utf-8")
            except FileNotFoundError:
                if not self.current.is_symlink():
                    logger.debug("No cache published under %s", self._root)
                    return ResolvedNote()
                continue
            except (OSError, UnicodeDecodeError) as exc:
                logger.debug("Unreadable cache under %s: %s", self._root, exc)
                return ResolvedNote()
            return ResolvedNote(filename=filename, content=content)
        logger.debug("Cache under %s kept moving; returning empty note", self._root)
        return ResolvedNote()

    def prune(self, *, grace: float = PRUNE_GRACE_SECONDS) -> int:
        """Delete superseded generations older than *grace* seconds.

        Returns the number of generations removed. Failures are logged.
        """
        try:
            live = os.readlink(self.current)
        except OSError:
            live = None
        cutoff = time.time() - grace
        removed = 0
        try:
            candidates = list(self._root.glob(f"{GENERATION_PREFIX}*"))
        except OSError:
            return 0
        for generation in candidates:
            if generation.name == live:
                continue
            try:
                if generation.stat().st_mtime > cutoff:
                    continue
                shutil.rmtree(generation)
                removed += 1
            except OSError as exc:
                logger.debug("Could not prune %s: %s", generation, exc)
        return removed
