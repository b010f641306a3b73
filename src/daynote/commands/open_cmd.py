"""Command: open today's note in Obsidian."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from daynote.commands._base import DaynoteCommand

if TYPE_CHECKING:
    from daynote.commands._context import AppContext


@click.command(
    "open",
    cls=DaynoteCommand,
    examples="""\
  daynote open                   # launches obsidian://daily?vault=...
  daynote open --print           # only print the URL""",
)
@click.option("--print", "print_only", is_flag=True, help="Print the URL instead of opening it.")
@click.pass_obj
def open_cmd(app: AppContext, print_only: bool) -> None:
    """Open today's note in Obsidian."""
    result = app.service.open_url()
    if result.ok and not print_only:
        click.launch(result.data["url"])
    app.emit(result)
