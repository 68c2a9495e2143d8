"""Operation-specific Rich renderers for ServiceResult.

Dispatched by ``result.op``; unknown ops use a generic key-value layout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from wsmanifest.domain.manifest import INTERNAL_VERSION
from wsmanifest.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from wsmanifest.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string."""
    console = create_console()
    if result.ok:
        _status_line(console, result)
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: one project dir or package per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    if result.op == "build_packages":
        return "\n".join(item["dir"] for item in result.data.get("items", []))
    if result.op == "resolve_closure":
        return "\n".join(f"{k}@{v}" for k, v in result.data.get("packages", {}).items())
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="wsm.ok"), Text(f"  {result.op}", style="wsm.op"))


def _render_error(result: ServiceResult, console: Console) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text("ERROR", style="wsm.error"),
        Text(f"  {result.op}{code}", style="wsm.op"),
        Text(": "),
        Text(msg),
    )


def _render_meta(console: Console, result: ServiceResult) -> None:
    telemetry = (result.meta or {}).get("telemetry")
    if telemetry:
        console.print(Text("  telemetry:", style="dim"))
        _render_span(console, telemetry, indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    notes = ", ".join(f"{k}={v}" for k, v in span.get("annotations", {}).items())
    line = f"{' ' * indent}{span.get('duration_ms', 0.0):>8.2f}ms  {span.get('name', '?')}"
    console.print(f"{line}  ({notes})" if notes else line, style="dim")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _dependency_table(manifest: dict[str, Any]) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Package", no_wrap=True)
    table.add_column("Version")
    table.add_column("Kind")
    for name, version in manifest.get("dependencies", {}).items():
        if version == INTERNAL_VERSION and name.startswith("@"):
            table.add_row(Text(name, style="wsm.internal"), version, "internal")
        else:
            table.add_row(Text(name, style="wsm.package"), version, "runtime")
    for name, version in manifest.get("devDependencies", {}).items():
        table.add_row(Text(name, style="wsm.dev"), version, "dev")
    return table


# ── Op renderers ──────────────────────────────────────────────────────


def _render_packages(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("  No projects to package.")
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Project", style="wsm.project", no_wrap=True)
    table.add_column("Package")
    table.add_column("Deps", justify="right")
    table.add_column("Dev", justify="right")
    table.add_column("Dir", style="wsm.path")
    for item in items:
        manifest = item["manifest"]
        table.add_row(
            item["project"],
            f"{manifest['name']}@{manifest['version']}",
            str(len(manifest.get("dependencies", {}))),
            str(len(manifest.get("devDependencies", {}))),
            item["dir"],
        )
    console.print(table)


def _render_closure(result: ServiceResult, console: Console) -> None:
    console.print(Text(f"  {result.data['project']}", style="wsm.project"), f"{result.data['count']} packages")
    for name, version in result.data.get("packages", {}).items():
        console.print(Text(f"    {name}", style="wsm.package"), version)


def _render_manifest(result: ServiceResult, console: Console) -> None:
    manifest = result.data["manifest"]
    console.print(Text("  name: ", style="wsm.key"), f"{manifest['name']}@{manifest['version']}")
    console.print(Text("  dir: ", style="wsm.key"), Text(result.data["dir"], style="wsm.path"))
    console.print(_dependency_table(manifest))


def _render_generic(result: ServiceResult, console: Console) -> None:
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="wsm.key"), Text(str(value)))


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "build_packages": _render_packages,
    "resolve_closure": _render_closure,
    "synthesize_manifest": _render_manifest,
}
