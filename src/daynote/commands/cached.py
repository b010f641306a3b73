"""Command: read the cached note without touching the vault."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from daynote.commands._base import DaynoteCommand

if TYPE_CHECKING:
    from daynote.commands._context import AppContext


@click.command(
    cls=DaynoteCommand,
    examples="""\
  daynote cached
  daynote -q cached              # bare body, for status bars and widgets
  daynote --json cached""",
)
@click.pass_obj
def cached(app: AppContext) -> None:
    """Show the last cached note (what display surfaces see)."""
    app.emit(app.service.cached())
