"""Command: show how a Moment.js pattern translates and renders."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from daynote.commands._base import DaynoteCommand

if TYPE_CHECKING:
    from daynote.commands._context import AppContext


@click.command(
    cls=DaynoteCommand,
    examples="""\
  daynote translate "dddd, MMMM D"
  daynote translate "[Week of] MMM D"
  daynote translate YYYY-MM-DD""",
)
@click.argument("pattern")
@click.pass_obj
def translate(app: AppContext, pattern: str) -> None:
    """Translate PATTERN to LDML and render it for now."""
    app.emit(app.service.translate(pattern))
