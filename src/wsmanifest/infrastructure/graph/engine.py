"""DependencyGraph: immutable NetworkX snapshot of the workspace project graph.

Built once per invocation from Nx project-graph JSON (the output of
``nx graph --file=graph.json``), then only read. Node payloads live in the
``node`` attribute. An edge whose target was never declared still creates a
bare NetworkX node; :meth:`DependencyGraph.node` reports those as None so
traversals treat them as dead ends.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import networkx as nx

from wsmanifest.domain.errors import GraphUnavailableError
from wsmanifest.domain.types import (
    EXTERNAL_PREFIX,
    DependencyEdge,
    NodeKind,
    ProjectNode,
    external_node_name,
)

logger = logging.getLogger(__name__)

type _Graph = nx.DiGraph


class DependencyGraph:
    """Read-only project graph with ordered adjacency."""

    def __init__(self, nodes: Iterable[ProjectNode], edges: Iterable[DependencyEdge]) -> None:
        g: _Graph = nx.DiGraph()
        # Nodes first so declaration order is preserved for workspace_projects().
        for node in nodes:
            g.add_node(node.name, node=node)
        for edge in edges:
            g.add_edge(edge.source, edge.target)
        self._graph: _Graph = nx.freeze(g)

    @property
    def graph(self) -> _Graph:
        """The underlying frozen DiGraph."""
        return self._graph

    def __contains__(self, name: object) -> bool:
        return self.node(name) is not None if isinstance(name, str) else False

    def __len__(self) -> int:
        return sum(1 for _ in self.nodes())

    def node(self, name: str) -> ProjectNode | None:
        """Return the declared node for *name*, or None if absent or dangling."""
        attrs = self._graph.nodes.get(name)
        if attrs is None:
            return None
        return attrs.get("node")

    def nodes(self) -> Iterator[ProjectNode]:
        """Declared nodes in declaration order."""
        for _, node in self._graph.nodes(data="node"):
            if node is not None:
                yield node

    def dependencies(self, name: str) -> list[DependencyEdge]:
        """Outgoing edges of *name* in declaration order (empty if unknown)."""
        if name not in self._graph:
            return []
        return [DependencyEdge(source=name, target=t) for t in self._graph.successors(name)]

    def workspace_projects(self) -> list[ProjectNode]:
        """Workspace (non-external) nodes in declaration order."""
        return [n for n in self.nodes() if n.kind is NodeKind.WORKSPACE]

    def external_node_for(self, package_name: str) -> ProjectNode | None:
        """Look up the external node for an npm package name."""
        node = self.node(external_node_name(package_name))
        if node is None or not node.is_external:
            return None
        return node

    def dependents_of(self, names: Iterable[str]) -> set[str]:
        """All names that transitively depend on any of *names* (inclusive)."""
        result: set[str] = set()
        for name in names:
            if name in self._graph:
                result.add(name)
                result.update(nx.ancestors(self._graph, name))
        return result

    def dependencies_of(self, names: Iterable[str]) -> set[str]:
        """All names transitively reachable from any of *names* (inclusive)."""
        result: set[str] = set()
        for name in names:
            if name in self._graph:
                result.add(name)
                result.update(nx.descendants(self._graph, name))
        return result

    @classmethod
    def from_nx_json(cls, data: dict[str, Any]) -> DependencyGraph:
        """Build a graph from decoded Nx project-graph JSON.

        Accepts the ``{"graph": {...}}`` wrapper written by ``nx graph --file``
        as well as a bare ``{"nodes", "externalNodes", "dependencies"}`` dict.
        Raises ``ValueError`` for structurally invalid input.
        """
        payload = data.get("graph", data)
        if not isinstance(payload, dict) or not isinstance(payload.get("nodes"), dict):
            msg = "project graph has no 'nodes' object"
            raise ValueError(msg)

        nodes: list[ProjectNode] = []
        for name, raw in payload["nodes"].items():
            nodes.append(_parse_node(name, raw, external=False))
        for name, raw in (payload.get("externalNodes") or {}).items():
            nodes.append(_parse_node(name, raw, external=True))

        edges: list[DependencyEdge] = []
        for source, deps in (payload.get("dependencies") or {}).items():
            if not isinstance(deps, list):
                msg = f"dependencies of {source!r} must be a list"
                raise ValueError(msg)
            for dep in deps:
                target = dep.get("target") if isinstance(dep, dict) else dep
                if not isinstance(target, str):
                    msg = f"invalid dependency entry for {source!r}: {dep!r}"
                    raise ValueError(msg)
                edges.append(DependencyEdge(source=source, target=target))

        return cls(nodes, edges)


def _parse_node(name: str, raw: Any, *, external: bool) -> ProjectNode:
    """Translate one Nx node entry into a :class:`ProjectNode`."""
    if not isinstance(raw, dict):
        msg = f"node {name!r} must be an object"
        raise ValueError(msg)
    data = raw.get("data") or {}
    if external or raw.get("type") == "npm":
        package_name = data.get("packageName") or name.removeprefix(EXTERNAL_PREFIX)
        return ProjectNode.external(package_name, str(data.get("version", "")), name=name)
    root = data.get("root", "")
    return ProjectNode.workspace(name, root=root, source_root=data.get("sourceRoot") or root)


def load_project_graph(path: Path) -> DependencyGraph:
    """Load the workspace project graph from an Nx graph JSON file.

    Raises:
        GraphUnavailableError: The file is missing, unreadable or invalid.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            msg = "top-level value must be an object"
            raise ValueError(msg)
        graph = DependencyGraph.from_nx_json(raw)
    except (OSError, ValueError) as exc:
        msg = f"Cannot load project graph from {path}: {exc}"
        raise GraphUnavailableError(msg) from exc
    logger.debug("Loaded project graph from %s (%d nodes)", path, len(graph))
    return graph
