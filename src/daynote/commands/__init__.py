"""Subcommand modules for daynote.

Provides register_commands() which uses deferred imports to keep
``daynote --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from daynote.commands.cached import cached
    from daynote.commands.open_cmd import open_cmd
    from daynote.commands.refresh import refresh
    from daynote.commands.select import select
    from daynote.commands.today import today
    from daynote.commands.translate import translate
    from daynote.commands.vaults import vaults
    from daynote.commands.watch import watch

    cli.add_command(vaults)
    cli.add_command(select)
    cli.add_command(today)
    cli.add_command(refresh)
    cli.add_command(cached)
    cli.add_command(watch)
    cli.add_command(open_cmd)
    cli.add_command(translate)
