"""Workspace graph vocabulary: node kinds, project nodes and edges.

Two node kinds from the project graph:
- Workspace: a project living in the repository (has a source root).
- External: a package resolved from the npm registry (has a version).

External nodes are keyed ``npm:<package>`` in the graph, which is how peer
dependency names are mapped back onto graph nodes.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

EXTERNAL_PREFIX = "npm:"


class NodeKind(StrEnum):
    """Kinds of project graph nodes."""

    WORKSPACE = "workspace"
    EXTERNAL = "external"


class ProjectNode(BaseModel):
    """A single node of the project graph.

    External nodes carry ``package_name``/``version``; workspace nodes carry
    ``source_root``/``root``. The other pair is left as None.
    """

    model_config = {"frozen": True}

    name: str
    kind: NodeKind
    package_name: str | None = None
    version: str | None = None
    source_root: str | None = None
    root: str | None = None

    @property
    def is_external(self) -> bool:
        return self.kind is NodeKind.EXTERNAL

    @classmethod
    def workspace(cls, name: str, *, root: str, source_root: str | None = None) -> ProjectNode:
        """Build a workspace node; ``source_root`` defaults to ``root``."""
        return cls(
            name=name,
            kind=NodeKind.WORKSPACE,
            root=root,
            source_root=source_root if source_root is not None else root,
        )

    @classmethod
    def external(cls, package_name: str, version: str, *, name: str | None = None) -> ProjectNode:
        """Build an external node keyed ``npm:<package_name>`` unless *name* is given."""
        return cls(
            name=name or external_node_name(package_name),
            kind=NodeKind.EXTERNAL,
            package_name=package_name,
            version=version,
        )


class DependencyEdge(BaseModel):
    """Directed ``source -> target`` dependency between two project names."""

    model_config = {"frozen": True}

    source: str
    target: str


def external_node_name(package_name: str) -> str:
    """Return the graph key of an external package (``react`` -> ``npm:react``)."""
    return f"{EXTERNAL_PREFIX}{package_name}"


# Package name -> version. First write wins; keys are unique.
type PackageClosure = dict[str, str]
