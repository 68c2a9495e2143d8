"""Config file discovery.

Walk-up finder locates wsmanifest.toml, similar to how git finds .git/.
Supports WSMANIFEST_CONFIG env var and --config CLI flag overrides.

An Nx workspace's ``nx.json`` also contributes ``npmScope`` and
``affected.defaultBase``, so a workspace without wsmanifest.toml still gets
its real scope.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "wsmanifest.toml"
CONFIG_ENV_VAR = "WSMANIFEST_CONFIG"
NX_JSON_FILENAME = "nx.json"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for wsmanifest.toml.

    Returns the path to the config file, or None if not found.
    Checks WSMANIFEST_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def nx_workspace_settings(nx_json: dict[str, Any]) -> dict[str, Any]:
    """Map the decoded ``nx.json`` onto the ``[workspace]`` section.

    ``affected.defaultBase`` takes precedence over the newer top-level
    ``defaultBase``. Keys Nx leaves out are left out here too.
    """
    section: dict[str, Any] = {}
    scope = nx_json.get("npmScope")
    if isinstance(scope, str) and scope:
        section["npm_scope"] = scope

    affected = nx_json.get("affected")
    base = affected.get("defaultBase") if isinstance(affected, dict) else None
    base = base or nx_json.get("defaultBase")
    if isinstance(base, str) and base:
        section["default_base"] = base

    return {"workspace": section} if section else {}


def read_nx_json(workspace_root: Path) -> dict[str, Any] | None:
    """Decode ``<workspace_root>/nx.json``; None when the file is absent.

    Raises:
        ValueError: The file is not a JSON object.
    """
    path = workspace_root / NX_JSON_FILENAME
    if not path.is_file():
        return None
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        msg = f"{path} does not contain a JSON object"
        raise ValueError(msg)
    return data
