"""Shared pytest fixtures and graph-building helpers for wsmanifest tests."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from wsmanifest.config.settings import WsSettings
from wsmanifest.domain.manifest import Manifest
from wsmanifest.domain.types import DependencyEdge, ProjectNode
from wsmanifest.infrastructure.graph.engine import DependencyGraph
from wsmanifest.infrastructure.peers import FixturePeerSource
from wsmanifest.infrastructure.workspace import Workspace
from wsmanifest.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` in CLI tests enables telemetry on the shared context."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Graph helpers
# ---------------------------------------------------------------------------


def project(name: str, root: str | None = None, source_root: str | None = None) -> ProjectNode:
    """Workspace node rooted at ``libs/<name>`` unless *root* is given."""
    return ProjectNode.workspace(name, root=root or f"libs/{name}", source_root=source_root)


def npm(package: str, version: str) -> ProjectNode:
    """External node keyed ``npm:<package>``."""
    return ProjectNode.external(package, version)


def make_graph(nodes: list[ProjectNode], deps: dict[str, list[str]] | None = None) -> DependencyGraph:
    """Graph from nodes and a ``source -> [targets]`` adjacency dict."""
    edges = [
        DependencyEdge(source=source, target=target)
        for source, targets in (deps or {}).items()
        for target in targets
    ]
    return DependencyGraph(nodes, edges)


def nx_graph_json(graph: DependencyGraph) -> dict[str, Any]:
    """Serialize a graph in the ``nx graph --file`` layout."""
    nodes: dict[str, Any] = {}
    external: dict[str, Any] = {}
    for node in graph.nodes():
        if node.is_external:
            external[node.name] = {
                "type": "npm",
                "name": node.name,
                "data": {"packageName": node.package_name, "version": node.version},
            }
        else:
            nodes[node.name] = {
                "name": node.name,
                "type": "lib",
                "data": {"root": node.root, "sourceRoot": node.source_root},
            }
    dependencies = {
        name: [{"source": name, "target": e.target, "type": "static"} for e in graph.dependencies(name)]
        for name in [*nodes, *external]
    }
    return {"graph": {"nodes": nodes, "externalNodes": external, "dependencies": dependencies}}


@pytest.fixture
def scenario_graph() -> DependencyGraph:
    """A -> (B, npm:x); B -> npm:x; x@2.0.0."""
    return make_graph(
        [project("A"), project("B"), npm("x", "2.0.0")],
        {"A": ["B", "npm:x"], "B": ["npm:x"]},
    )


@pytest.fixture
def root_manifest() -> Manifest:
    return Manifest(name="acme-workspace", version="1.0.0")


# ---------------------------------------------------------------------------
# On-disk workspace
# ---------------------------------------------------------------------------


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def workspace_root(tmp_path: Path, scenario_graph: DependencyGraph) -> Path:
    """Workspace on disk: config, root package.json and graph.json.

    Uses the scenario graph and the ``acme`` scope.
    """
    (tmp_path / "wsmanifest.toml").write_text('[workspace]\nnpm_scope = "acme"\n', encoding="utf-8")
    write_json(
        tmp_path / "package.json",
        {"name": "acme", "version": "1.0.0", "devDependencies": {"jest": "29.0.0"}},
    )
    write_json(tmp_path / "graph.json", nx_graph_json(scenario_graph))
    return tmp_path


@pytest.fixture
def workspace(workspace_root: Path) -> Workspace:
    """Workspace over *workspace_root* with fixture peers and no git."""
    settings = WsSettings.from_cli(workspace_root=workspace_root)
    return Workspace(settings, peers=FixturePeerSource())


@pytest.fixture
def _in_workspace(workspace_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the on-disk workspace so the CLI discovers its config."""
    monkeypatch.chdir(workspace_root)
