"""Command: list registered vaults."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from daynote.commands._base import DaynoteCommand

if TYPE_CHECKING:
    from daynote.commands._context import AppContext


@click.command(
    cls=DaynoteCommand,
    examples="""\
  daynote vaults                 # table of vaults, * marks the selected one
  daynote -q vaults              # names only
  daynote --json vaults""",
)
@click.pass_obj
def vaults(app: AppContext) -> None:
    """List Obsidian vaults, sorted by name."""
    app.emit(app.service.list_vaults())
