"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Project initialization, the session
gate, and centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerlint.output.formatters import OutputSettings, format_result
from layerlint.services.gate import SessionGate

if TYPE_CHECKING:
    from layerlint.config.settings import LayerlintSettings
    from layerlint.infrastructure.project import Project
    from layerlint.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The project is lazily
    initialized on first use so ``--help`` and ``--version`` never load
    plugins.
    """

    def __init__(self, settings: LayerlintSettings) -> None:
        self.settings = settings
        self.gate = SessionGate()
        self._project: Project | None = None

        # Configure structured logging
        from layerlint.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )

        # Enable telemetry context var when verbose
        if settings.verbose:
            from layerlint.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def project(self) -> Project:
        """The project instance (created lazily on first access)."""
        if self._project is None:
            from layerlint.config.logging import bind_project
            from layerlint.infrastructure.project import Project

            self._project = Project(self.settings)
            bind_project(self._project.root)
            self._project.init_plugins()
        return self._project

    def emit(self, result: ServiceResult, *, fail: bool = False) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
          With *fail* (violations above the threshold) the output still
          goes to stdout but the process exits with code 1.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            if fail:
                raise SystemExit(1)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
