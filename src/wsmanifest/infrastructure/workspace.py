"""Workspace: the single dependency injected into every service.

Owns the lazily loaded project graph and root manifest plus the peer
metadata and change-detection adapters. Loading happens on first access so
``--help`` never touches the filesystem. Tests inject fixtures through the
constructor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wsmanifest.infrastructure.changes import GitChangeDetector
from wsmanifest.infrastructure.graph.engine import load_project_graph
from wsmanifest.infrastructure.manifests import load_root_manifest
from wsmanifest.infrastructure.peers import NodeModulesPeerSource

if TYPE_CHECKING:
    from pathlib import Path

    from wsmanifest.config.settings import WsSettings
    from wsmanifest.domain.manifest import Manifest
    from wsmanifest.infrastructure.changes import ChangeDetector
    from wsmanifest.infrastructure.graph.engine import DependencyGraph
    from wsmanifest.infrastructure.peers import PeerMetadataSource

logger = logging.getLogger(__name__)


class Workspace:
    """Per-invocation view of one workspace."""

    def __init__(
        self,
        settings: WsSettings,
        *,
        graph: DependencyGraph | None = None,
        root_manifest: Manifest | None = None,
        peers: PeerMetadataSource | None = None,
        change_detector: ChangeDetector | None = None,
    ) -> None:
        self.settings = settings
        self._graph = graph
        self._root_manifest = root_manifest
        self._peers = peers
        self._change_detector = change_detector

    @property
    def root(self) -> Path:
        return self.settings.workspace_root

    @property
    def scope(self) -> str:
        return self.settings.workspace.npm_scope

    @property
    def graph(self) -> DependencyGraph:
        """The project graph, loaded on first access.

        Raises:
            GraphUnavailableError: The graph file is missing or invalid.
        """
        if self._graph is None:
            self._graph = load_project_graph(self.settings.graph_path)
        return self._graph

    @property
    def root_manifest(self) -> Manifest:
        """The workspace root manifest, loaded on first access.

        Raises:
            RootManifestError: The root ``package.json`` is missing or invalid.
        """
        if self._root_manifest is None:
            self._root_manifest = load_root_manifest(self.settings.root_manifest_path)
        return self._root_manifest

    @property
    def peers(self) -> PeerMetadataSource:
        if self._peers is None:
            self._peers = NodeModulesPeerSource(self.settings.modules_dir)
        return self._peers

    def change_detector(self, base: str | None = None) -> ChangeDetector:
        """Injected detector, else git against *base* or the configured default."""
        if self._change_detector is not None:
            return self._change_detector
        return GitChangeDetector(self.root, base or self.settings.workspace.default_base)
