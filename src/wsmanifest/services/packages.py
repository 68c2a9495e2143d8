"""Package set building: one standalone manifest per workspace project.

:func:`build_package_set` is the pure orchestration core: for each target,
in input order, resolve its closure, synthesize its manifest and resolve its
output directory. :class:`PackagingService` wires it to a
:class:`Workspace`: root manifest, graph, optional change detection and path
cleaning.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from wsmanifest.config.logging import project_context
from wsmanifest.domain.errors import UnknownProjectError, WorkspaceError
from wsmanifest.domain.manifest import ResultEntry
from wsmanifest.domain.types import NodeKind
from wsmanifest.infrastructure.paths import clean_path
from wsmanifest.services.base import BaseService
from wsmanifest.services.closure import resolve_closure
from wsmanifest.services.result import ServiceResult
from wsmanifest.services.synthesize import synthesize_manifest
from wsmanifest.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from wsmanifest.domain.manifest import Manifest
    from wsmanifest.infrastructure.graph.engine import DependencyGraph
    from wsmanifest.infrastructure.peers import PeerMetadataSource


class BuildOptions(BaseModel):
    """Options for :meth:`PackagingService.build_packages`.

    Attributes:
        only_affected: Restrict targets to projects touched by pending changes.
        cwd: Base for resolving relative project roots into output dirs.
        base: Git ref to diff against; None uses ``workspace.default_base``.
    """

    model_config = {"frozen": True}

    only_affected: bool = True
    cwd: Path = Field(default_factory=Path.cwd)
    base: str | None = None


def select_targets(graph: DependencyGraph, affected: set[str] | None = None) -> list[str]:
    """Workspace projects to package, in graph declaration order.

    With *affected*, keeps the affected projects plus every workspace
    project they depend on; otherwise every workspace project.
    """
    projects = graph.workspace_projects()
    if affected is None:
        return [p.name for p in projects]
    wanted = graph.dependencies_of(affected)
    return [p.name for p in projects if p.name in wanted]


def build_package_set(
    targets: Iterable[str],
    graph: DependencyGraph,
    root_manifest: Manifest,
    scope: str,
    resolve_dir: Callable[[str], Path],
    peers: PeerMetadataSource,
    *,
    workspace_root: Path | None = None,
) -> list[ResultEntry]:
    """Build ``{manifest, dir}`` entries for *targets*, preserving their order.

    Repeated target names are built once, at their first position.

    Raises:
        UnknownProjectError: A target is not a workspace node of *graph*.
    """
    entries: list[ResultEntry] = []
    done: set[str] = set()
    for name in targets:
        if name in done:
            continue
        done.add(name)

        node = graph.node(name)
        if node is None or node.kind is not NodeKind.WORKSPACE:
            msg = f"Project '{name}' is not a workspace project"
            raise UnknownProjectError(msg)

        with project_context(name):
            closure = resolve_closure(name, graph, peers)
            manifest = synthesize_manifest(
                name, closure, graph, root_manifest, scope, workspace_root=workspace_root
            )
        entries.append(ResultEntry(project=name, manifest=manifest, dir=resolve_dir(node.root or "")))
    return entries


def _entry_data(entry: ResultEntry) -> dict[str, Any]:
    return {
        "project": entry.project,
        "dir": str(entry.dir),
        "manifest": entry.manifest.to_json_dict(),
    }


class PackagingService(BaseService):
    """Closure, manifest and package-set operations on a workspace."""

    @traced
    def build_packages(self, options: BuildOptions | None = None) -> ServiceResult:
        """Build standalone manifests for the (affected) workspace projects."""
        options = options or BuildOptions()
        ws = self._workspace
        op = "build_packages"

        try:
            root_manifest = ws.root_manifest
            with trace_span("load_graph") as span:
                graph = ws.graph
                if span:
                    span.annotate("nodes", len(graph))

            affected: set[str] | None = None
            if options.only_affected:
                with trace_span("affected"):
                    affected = ws.change_detector(options.base).affected_projects(graph)
            targets = select_targets(graph, affected)

            with trace_span("build") as span:
                entries = build_package_set(
                    targets,
                    graph,
                    root_manifest,
                    ws.scope,
                    lambda root: clean_path(root, options.cwd),
                    ws.peers,
                    workspace_root=ws.root,
                )
                if span:
                    span.annotate("projects", len(entries))
        except WorkspaceError as exc:
            return self._error_result(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": len(entries),
                "only_affected": options.only_affected,
                "items": [_entry_data(e) for e in entries],
            },
        )

    @traced
    def resolve_closure(self, project: str) -> ServiceResult:
        """External packages (including peers) required by one project."""
        op = "resolve_closure"
        try:
            graph = self._workspace.graph
            if project not in graph:
                msg = f"Project '{project}' not found in graph"
                raise UnknownProjectError(msg)
            closure = resolve_closure(project, graph, self._workspace.peers)
        except WorkspaceError as exc:
            return self._error_result(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"project": project, "count": len(closure), "packages": closure},
        )

    @traced
    def synthesize(self, project: str, *, cwd: Path | None = None) -> ServiceResult:
        """Synthesized manifest and output directory of one project."""
        op = "synthesize_manifest"
        ws = self._workspace
        try:
            entries = build_package_set(
                [project],
                ws.graph,
                ws.root_manifest,
                ws.scope,
                lambda root: clean_path(root, cwd),
                ws.peers,
                workspace_root=ws.root,
            )
        except WorkspaceError as exc:
            return self._error_result(op, exc)

        return ServiceResult(ok=True, op=op, data=_entry_data(entries[0]))
