"""Command: keep the cache fresh until interrupted."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import click

from daynote.commands._base import DaynoteCommand

if TYPE_CHECKING:
    from daynote.commands._context import AppContext
    from daynote.domain.models import ResolvedNote


@click.command(
    cls=DaynoteCommand,
    examples="""\
  daynote watch                          # refresh on every vault change
  daynote watch --debounce 3             # wait for 3s of quiet
  daynote watch --no-rollover            # skip the midnight refresh""",
)
@click.option(
    "--debounce",
    type=click.FloatRange(min=0.0),
    default=None,
    help="Seconds of quiet before refreshing (default from config).",
)
@click.option("--rollover/--no-rollover", default=None, help="Refresh at local midnight.")
@click.pass_obj
def watch(app: AppContext, debounce: float | None, rollover: bool | None) -> None:
    """Watch the selected vault and refresh the cache on change."""
    from daynote.infrastructure.watcher import VaultWatcher

    config = app.settings.watch
    quiet = app.settings.quiet

    def report(note: ResolvedNote | None) -> None:
        if quiet:
            return
        if note is None:
            click.echo("WARNING: cache could not be written", err=True)
        else:
            click.echo(f"refreshed {note.filename or '(no vault)'} ({len(note.content)} chars)")

    watcher = VaultWatcher(
        app.resolver,
        debounce_seconds=config.debounce_seconds if debounce is None else debounce,
        rollover=config.rollover if rollover is None else rollover,
        on_refresh=report,
    )
    stop = threading.Event()
    with watcher:
        if watcher.vault is None:
            click.echo("WARNING: no vaults found; watching for midnight only", err=True)
        elif not quiet:
            click.echo(f"watching {watcher.vault.path} (Ctrl-C to stop)")
        try:
            stop.wait()
        except KeyboardInterrupt:
            pass
