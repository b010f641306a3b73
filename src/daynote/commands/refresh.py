"""Command: one-shot cache refresh."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from daynote.commands._base import DaynoteCommand

if TYPE_CHECKING:
    from daynote.commands._context import AppContext


@click.command(
    cls=DaynoteCommand,
    examples="""\
  daynote refresh
  daynote -q refresh             # from cron or a launch agent""",
)
@click.pass_obj
def refresh(app: AppContext) -> None:
    """Re-read today's note and replace the cached copy."""
    app.emit(app.service.refresh())
