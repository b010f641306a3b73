"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy resolver construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from daynote.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from daynote.config.settings import DaynoteSettings
    from daynote.infrastructure.vault import VaultResolver
    from daynote.services.daily import DailyNoteService
    from daynote.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The resolver is built on first use so ``--help`` and ``--version``
    never touch the filesystem.
    """

    def __init__(self, settings: DaynoteSettings) -> None:
        self.settings = settings
        self._resolver: VaultResolver | None = None

        from daynote.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def resolver(self) -> VaultResolver:
        """The vault resolver (created lazily on first access)."""
        if self._resolver is None:
            from daynote.infrastructure.vault import VaultResolver

            self._resolver = VaultResolver.from_settings(self.settings)
        return self._resolver

    @property
    def service(self) -> DailyNoteService:
        from daynote.services.daily import DailyNoteService

        return DailyNoteService(self.resolver)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
