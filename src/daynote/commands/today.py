"""Command: resolve today's note directly from the vault."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from daynote.commands._base import DaynoteCommand

if TYPE_CHECKING:
    from daynote.commands._context import AppContext


@click.command(
    cls=DaynoteCommand,
    examples="""\
  daynote today                  # note in a panel
  daynote -v today               # plus vault, folder, format, path
  daynote -q today | wc -w       # bare note body""",
)
@click.pass_obj
def today(app: AppContext) -> None:
    """Show today's note, read live from the selected vault."""
    app.emit(app.service.today())
