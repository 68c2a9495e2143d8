"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, wsmanifest.toml only contains
overrides. Nx workspaces usually need none: ``npm_scope`` and
``default_base`` come from ``nx.json`` when it declares them.
"""

from __future__ import annotations

from pydantic import BaseModel


class WorkspaceConfig(BaseModel):
    """[workspace] section."""

    model_config = {"frozen": True}

    npm_scope: str = "workspace"
    default_base: str = "master"
    graph_file: str = "graph.json"
    root_manifest: str = "package.json"


class PeersConfig(BaseModel):
    """[peers] section."""

    model_config = {"frozen": True}

    modules_dir: str = "node_modules"

