"""Rich Console factory and theme for wsmanifest output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Rich disables color outside a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

WSM_THEME = Theme(
    {
        "wsm.ok": "bold green",
        "wsm.error": "bold red",
        "wsm.op": "bold cyan",
        "wsm.key": "dim",
        "wsm.project": "bold blue",
        "wsm.path": "dim",
        "wsm.package": "green",
        "wsm.dev": "yellow",
        "wsm.internal": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    return Console(
        file=StringIO(),
        theme=WSM_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
