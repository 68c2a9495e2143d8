"""Path normalization for output directories."""

from __future__ import annotations

import os
from pathlib import Path


def clean_path(path: str | Path, cwd: Path | None = None) -> Path:
    """Return *path* as an absolute, normalized path.

    ``~`` is expanded; relative paths are anchored at *cwd* (default: the
    process working directory). Symlinks are not resolved.
    """
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = (cwd or Path.cwd()) / p
    return Path(os.path.normpath(p))
