"""Command: switch the selected vault."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from daynote.commands._base import DaynoteCommand

if TYPE_CHECKING:
    from daynote.commands._context import AppContext


@click.command(
    cls=DaynoteCommand,
    examples="""\
  daynote select Journal                 # by vault name
  daynote select ~/Documents/Journal     # by absolute path""",
)
@click.argument("vault")
@click.pass_obj
def select(app: AppContext, vault: str) -> None:
    """Select VAULT (name or path) and refresh the cache."""
    app.emit(app.service.select(vault))
