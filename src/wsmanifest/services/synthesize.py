"""Manifest synthesis: existing ``package.json`` + closure + internal deps.

Classification rule: a closure package goes to ``devDependencies`` iff the
workspace root manifest lists it there; everything else is a runtime
dependency. Closure placement overrides whatever an existing manifest had,
and the key is removed from the other mapping.

Direct workspace dependencies become ``"@scope/<project>": "*"`` runtime
entries. Only direct edges count, not the transitive closure.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from wsmanifest.domain.manifest import INTERNAL_VERSION, SCAFFOLD_VERSION, Manifest, scoped_package_name
from wsmanifest.domain.types import NodeKind
from wsmanifest.infrastructure.manifests import MANIFEST_FILENAME, read_manifest

if TYPE_CHECKING:
    from wsmanifest.domain.types import PackageClosure
    from wsmanifest.infrastructure.graph.engine import DependencyGraph

logger = logging.getLogger(__name__)


def load_or_scaffold(
    project_name: str,
    graph: DependencyGraph,
    scope: str,
    *,
    workspace_root: Path | None = None,
) -> Manifest:
    """Existing manifest at the project's source root, or a default one."""
    node = graph.node(project_name)
    if node is not None and node.source_root is not None:
        base = workspace_root or Path.cwd()
        existing = read_manifest(
            base / node.source_root / MANIFEST_FILENAME,
            defaults={"name": scoped_package_name(scope, project_name), "version": SCAFFOLD_VERSION},
        )
        if existing is not None:
            logger.debug("Reusing existing manifest for %s", project_name)
            return existing
    return Manifest.scaffold(scope, project_name)


def internal_dependencies(project_name: str, graph: DependencyGraph, scope: str) -> list[str]:
    """Scoped names of the workspace projects *project_name* depends on directly."""
    names: list[str] = []
    for edge in graph.dependencies(project_name):
        target = graph.node(edge.target)
        if target is None or target.kind is not NodeKind.WORKSPACE:
            continue
        if target.name == project_name:
            continue
        names.append(scoped_package_name(scope, target.name))
    return names


def synthesize_manifest(
    project_name: str,
    closure: PackageClosure,
    graph: DependencyGraph,
    root_manifest: Manifest,
    scope: str,
    *,
    workspace_root: Path | None = None,
) -> Manifest:
    """Build the standalone manifest of one project.

    Args:
        project_name: Graph name of the project.
        closure: Its resolved external packages (see ``resolve_closure``).
        graph: The workspace project graph.
        root_manifest: Workspace root manifest, used for classification only.
        scope: npm scope for scaffolded names and internal entries.
        workspace_root: Base for relative source roots (default: CWD).
    """
    manifest = load_or_scaffold(project_name, graph, scope, workspace_root=workspace_root)

    dev_names = root_manifest.dev_dependencies.keys()
    runtime = [(pkg, ver) for pkg, ver in closure.items() if pkg not in dev_names]
    dev = [(pkg, ver) for pkg, ver in closure.items() if pkg in dev_names]
    internal = [(name, INTERNAL_VERSION) for name in internal_dependencies(project_name, graph, scope)]

    return (
        manifest.with_dependencies(runtime)
        .with_dependencies(dev, dev=True)
        .with_dependencies(internal)
    )
