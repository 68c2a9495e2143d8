"""Output mode selection for ServiceResult.

``--json`` serializes the result verbatim, ``--quiet`` prints one line per
item, and the default is Rich rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wsmanifest.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        from wsmanifest.output.renderers import render_quiet

        return render_quiet(result)

    from wsmanifest.output.renderers import render_result

    return render_result(result, verbose=settings.verbose)
