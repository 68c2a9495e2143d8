"""Peer dependency metadata sources.

The peer collector only needs one capability: given an npm package name,
return the names it declares under ``peerDependencies``, or None when that
information is unavailable. Production reads installed packages from
``node_modules``; tests use :class:`FixturePeerSource`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class PeerMetadataSource(Protocol):
    """Capability: look up an installed package's declared peers."""

    def load_declared_peers(self, package_name: str) -> frozenset[str] | None:
        """Return declared peer names, or None if the lookup failed."""
        ...


class NodeModulesPeerSource:
    """Read ``peerDependencies`` from ``<root>/node_modules/<pkg>/package.json``.

    Lookups are memoized; the filesystem is treated as a snapshot.
    """

    def __init__(self, modules_dir: Path) -> None:
        self._modules_dir = modules_dir
        self._cache: dict[str, frozenset[str] | None] = {}

    def load_declared_peers(self, package_name: str) -> frozenset[str] | None:
        if package_name not in self._cache:
            self._cache[package_name] = self._read(package_name)
        return self._cache[package_name]

    def _read(self, package_name: str) -> frozenset[str] | None:
        # Scoped names (@scope/pkg) map onto nested directories.
        path = self._modules_dir.joinpath(*package_name.split("/"), "package.json")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.debug("No peer metadata for %s: %s", package_name, exc)
            return None
        if not isinstance(data, dict):
            return None
        peers = data.get("peerDependencies")
        if peers is None:
            return frozenset()
        if not isinstance(peers, dict):
            logger.debug("Malformed peerDependencies in %s", path)
            return None
        return frozenset(peers)


class FixturePeerSource:
    """In-memory peer metadata; packages missing from the mapping fail lookup."""

    def __init__(self, peers: Mapping[str, Iterable[str]] | None = None) -> None:
        self._peers = {name: frozenset(deps) for name, deps in (peers or {}).items()}
        self.lookups: list[str] = []

    def load_declared_peers(self, package_name: str) -> frozenset[str] | None:
        self.lookups.append(package_name)
        return self._peers.get(package_name)
