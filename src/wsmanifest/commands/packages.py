"""Command: build standalone manifests for workspace projects."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from wsmanifest.commands._base import WsmCommand
from wsmanifest.services.packages import BuildOptions, PackagingService

if TYPE_CHECKING:
    from wsmanifest.commands._context import AppContext


@click.command(
    cls=WsmCommand,
    examples="""\
  wsmanifest packages
  wsmanifest packages --all
  wsmanifest packages --base origin/main
  wsmanifest --json packages --all --cwd /srv/build""",
)
@click.option("--all", "all_projects", is_flag=True, help="Package every project, not only affected ones.")
@click.option("--base", default=None, help="Git ref to compare against (default: workspace.default_base).")
@click.option(
    "--cwd",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Base directory for output dirs (default: current directory).",
)
@click.pass_obj
def packages(app: AppContext, all_projects: bool, base: str | None, cwd: Path | None) -> None:
    """Compute a manifest and output directory for each project."""
    options = BuildOptions(only_affected=not all_projects, base=base, cwd=cwd or Path.cwd())
    app.emit(PackagingService(app.workspace).build_packages(options))
