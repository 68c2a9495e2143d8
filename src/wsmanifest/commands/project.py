"""Commands inspecting a single project: closure and manifest."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from wsmanifest.commands._base import WsmCommand
from wsmanifest.services.packages import PackagingService

if TYPE_CHECKING:
    from wsmanifest.commands._context import AppContext


@click.command(
    cls=WsmCommand,
    examples="""\
  wsmanifest closure api
  wsmanifest -q closure api
  wsmanifest --json closure api""",
)
@click.argument("project")
@click.pass_obj
def closure(app: AppContext, project: str) -> None:
    """List the external packages (with peers) a project needs."""
    app.emit(PackagingService(app.workspace).resolve_closure(project))


@click.command(
    cls=WsmCommand,
    examples="""\
  wsmanifest manifest api
  wsmanifest --json manifest api --cwd dist""",
)
@click.argument("project")
@click.option(
    "--cwd",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Base directory for the output dir (default: current directory).",
)
@click.pass_obj
def manifest(app: AppContext, project: str, cwd: Path | None) -> None:
    """Show the synthesized manifest of one project."""
    app.emit(PackagingService(app.workspace).synthesize(project, cwd=cwd))
