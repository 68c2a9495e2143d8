"""Reading ``package.json`` files.

Per-project manifests are best-effort: :func:`read_manifest` returns None
when the file is absent or unusable so the synthesizer can branch on
presence. The workspace root manifest is required; :func:`load_root_manifest`
raises :class:`RootManifestError` instead.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from wsmanifest.domain.errors import RootManifestError
from wsmanifest.domain.manifest import Manifest

MANIFEST_FILENAME = "package.json"

logger = logging.getLogger(__name__)


def _read_json_object(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        msg = f"{path} does not contain a JSON object"
        raise ValueError(msg)
    return data


def read_manifest(path: Path, defaults: Mapping[str, Any] | None = None) -> Manifest | None:
    """Read an optional manifest; None if missing, unreadable or malformed.

    Keys in *defaults* fill in what the file leaves out, so a project
    ``package.json`` without ``name`` is still reused.
    """
    try:
        data = {**(defaults or {}), **_read_json_object(path)}
        return Manifest.from_json_dict(data)
    except FileNotFoundError:
        return None
    except (OSError, ValueError, ValidationError) as exc:
        logger.debug("Ignoring unreadable manifest %s: %s", path, exc)
        return None


def load_root_manifest(path: Path) -> Manifest:
    """Load the workspace root manifest.

    A root ``package.json`` without ``name`` is accepted; the workspace
    directory name stands in for it.

    Raises:
        RootManifestError: The file is missing or malformed.
    """
    try:
        data = _read_json_object(path)
        data.setdefault("name", path.parent.name)
        return Manifest.from_json_dict(data)
    except (OSError, ValueError, ValidationError) as exc:
        msg = f"Cannot read workspace root manifest {path}: {exc}"
        raise RootManifestError(msg) from exc
