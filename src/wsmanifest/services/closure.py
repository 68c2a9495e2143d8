"""Dependency closure resolution over the project graph.

Two traversals, each with its own visited set:

- :func:`resolve_closure` walks project dependencies depth-first and records
  every reachable external (npm) package.
- :func:`collect_peers` expands the declared ``peerDependencies`` of one
  external package, following peer-of-peer chains.

INVARIANT: a node is processed at most once per top-level call, so cycles
terminate and the work is bounded by the number of graph nodes. Closure
values are fixed at first write.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wsmanifest.domain.types import PackageClosure
    from wsmanifest.infrastructure.graph.engine import DependencyGraph
    from wsmanifest.infrastructure.peers import PeerMetadataSource

logger = logging.getLogger(__name__)


def collect_peers(
    project_name: str,
    graph: DependencyGraph,
    peers: PeerMetadataSource,
) -> PackageClosure:
    """Collect the transitive peer dependencies of an external node.

    Returns ``{}`` when *project_name* is absent or not external. A failed
    metadata lookup ends that branch quietly; peers are advisory.
    """
    closure: PackageClosure = {}
    seen: set[str] = set()
    # (node name, record it) pairs; the start node itself is never recorded.
    stack: list[tuple[str, bool]] = [(project_name, False)]

    while stack:
        name, record = stack.pop()
        node = graph.node(name)
        if node is None or not node.is_external:
            continue
        assert node.package_name is not None
        if record:
            assert node.version is not None
            closure.setdefault(node.package_name, node.version)
        if name in seen:
            continue
        seen.add(name)

        declared = peers.load_declared_peers(node.package_name)
        if declared is None:
            continue

        found: list[str] = []
        for peer_name in sorted(declared):
            peer = graph.external_node_for(peer_name)
            if peer is None:
                logger.debug("Peer %s of %s is not in the graph", peer_name, node.package_name)
                continue
            found.append(peer.name)
        # Reversed so each peer's own peers are recorded before its next sibling.
        stack.extend((peer, True) for peer in reversed(found))

    return closure


def resolve_closure(
    project_name: str,
    graph: DependencyGraph,
    peers: PeerMetadataSource,
) -> PackageClosure:
    """Return every external package reachable from *project_name*.

    Depth-first over outgoing edges; each external node contributes its own
    ``package -> version`` plus its peers. Edges to undeclared nodes are
    dead ends.
    """
    closure: PackageClosure = {}
    seen: set[str] = set()
    stack = [project_name]

    while stack:
        name = stack.pop()
        if name in seen:
            continue
        seen.add(name)

        node = graph.node(name)
        if node is not None and node.is_external:
            assert node.package_name is not None and node.version is not None
            closure.setdefault(node.package_name, node.version)
            for package, version in collect_peers(name, graph, peers).items():
                closure.setdefault(package, version)
        elif node is None and name != project_name:
            logger.debug("Dangling dependency %s reached from %s", name, project_name)

        # Reversed so the next pop is the first declared dependency.
        stack.extend(reversed([edge.target for edge in graph.dependencies(name)]))

    logger.debug(
        "Resolved closure of %s: %d packages over %d nodes",
        project_name,
        len(closure),
        len(seen),
    )
    return closure
