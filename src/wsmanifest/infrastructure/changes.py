"""Git-based change detection: which workspace projects does a changeset touch?

A project is affected when a changed file lives under its ``root``, or when
it transitively depends on an affected project. A changed file outside every
project root (``package.json``, ``nx.json``, lockfiles) affects the whole
workspace.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Protocol

from wsmanifest.domain.errors import ChangeDetectionError

if TYPE_CHECKING:
    from wsmanifest.infrastructure.graph.engine import DependencyGraph

logger = logging.getLogger(__name__)


class ChangeDetector(Protocol):
    """Capability: compute the names of affected workspace projects."""

    def affected_projects(self, graph: DependencyGraph) -> set[str]: ...


def projects_touched_by(files: list[str], graph: DependencyGraph) -> set[str]:
    """Map workspace-relative file paths onto workspace project names.

    The deepest matching root wins so nested projects are attributed
    correctly. Returns every workspace project if a file matches no root.
    """
    roots: list[tuple[PurePosixPath, str]] = []
    for project in graph.workspace_projects():
        if project.root and project.root != ".":
            roots.append((PurePosixPath(project.root), project.name))
    roots.sort(key=lambda r: len(r[0].parts), reverse=True)

    touched: set[str] = set()
    for file in files:
        path = PurePosixPath(file)
        owner = next((name for root, name in roots if path.is_relative_to(root)), None)
        if owner is None:
            logger.debug("Global change %s affects every project", file)
            return {p.name for p in graph.workspace_projects()}
        touched.add(owner)
    return touched


class GitChangeDetector:
    """Affected projects from ``git diff`` against a base ref."""

    def __init__(self, workspace_root: Path, base: str) -> None:
        self._root = workspace_root
        self._base = base

    def changed_files(self) -> list[str]:
        """Files changed since the merge base plus uncommitted changes."""
        committed = self._run_git("diff", "--name-only", "--relative", f"{self._base}...HEAD")
        working = self._run_git("diff", "--name-only", "--relative", "HEAD")
        untracked = self._run_git("ls-files", "--others", "--exclude-standard")
        files: dict[str, None] = {}
        for output in (committed, working, untracked):
            for line in output.splitlines():
                if line.strip():
                    files[line.strip()] = None
        return list(files)

    def affected_projects(self, graph: DependencyGraph) -> set[str]:
        files = self.changed_files()
        touched = projects_touched_by(files, graph)
        affected = graph.dependents_of(touched)
        logger.debug(
            "Change detection against %s: %d files, %d affected projects",
            self._base,
            len(files),
            len(affected),
        )
        return affected

    def _run_git(self, *args: str) -> str:
        """Run a git command in the workspace root, raising on failure."""
        try:
            proc = subprocess.run(
                ["git", *args],
                cwd=self._root,
                capture_output=True,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            stderr = getattr(exc, "stderr", "") or ""
            msg = f"git {' '.join(args)} failed: {stderr.strip() or exc}"
            raise ChangeDetectionError(msg) from exc
        return proc.stdout
