"""Subcommand modules for wsmanifest.

register_commands() uses deferred imports to keep ``wsmanifest --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from wsmanifest.commands.packages import packages
    from wsmanifest.commands.project import closure, manifest

    cli.add_command(packages)
    cli.add_command(closure)
    cli.add_command(manifest)
