"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The workspace is created lazily so ``--help`` never
reads the graph or root manifest.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wsmanifest.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from wsmanifest.config.settings import WsSettings
    from wsmanifest.infrastructure.workspace import Workspace
    from wsmanifest.services.result import ServiceResult


class AppContext:
    """Settings, the lazy Workspace, and result emission."""

    def __init__(self, settings: WsSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from wsmanifest.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            workspace_root=settings.workspace_root,
        )

        if settings.verbose:
            from wsmanifest.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            from wsmanifest.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult; failures go to stderr and exit 1."""
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
