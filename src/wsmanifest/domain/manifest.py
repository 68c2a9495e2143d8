"""Manifest model: the ``package.json`` shape produced for each project.

INVARIANT: ``dependencies`` and ``devDependencies`` are disjoint. Every
builder method removes the key from the opposite mapping before writing.

Manifests are frozen; builders return a new copy, inputs are never mutated.
Unknown ``package.json`` keys (``scripts``, ``main``, ...) are kept as
extra fields so a reused manifest round-trips.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

INTERNAL_VERSION = "*"
SCAFFOLD_VERSION = "0.0.0"


def scoped_package_name(scope: str, project_name: str) -> str:
    """Return ``@scope/project``; *scope* may already carry the ``@``."""
    return f"@{scope.lstrip('@')}/{project_name}"


class Manifest(BaseModel):
    """A project's package manifest."""

    model_config = {"frozen": True, "extra": "allow", "populate_by_name": True}

    name: str
    version: str = SCAFFOLD_VERSION
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")

    # Key order of the package.json this manifest was read from.
    _key_order: tuple[str, ...] = PrivateAttr(default=())

    @classmethod
    def scaffold(cls, scope: str, project_name: str) -> Manifest:
        """Default manifest for a project that ships no ``package.json``."""
        return cls(name=scoped_package_name(scope, project_name), version=SCAFFOLD_VERSION)

    @classmethod
    def from_json_dict(cls, data: dict[str, Any]) -> Manifest:
        """Validate a decoded ``package.json``.

        ``null`` dependency fields are treated as missing.
        """
        cleaned = {k: v for k, v in data.items() if not (k in _DEP_FIELDS and v is None)}
        manifest = cls.model_validate(cleaned)
        manifest._key_order = tuple(cleaned)
        return manifest

    def with_dependency(self, name: str, version: str, *, dev: bool = False) -> Manifest:
        """Return a copy with *name* set in exactly one dependency mapping."""
        return self.with_dependencies([(name, version)], dev=dev)

    def with_dependencies(self, entries: Iterable[tuple[str, str]], *, dev: bool = False) -> Manifest:
        """Bulk variant of :meth:`with_dependency`; later entries win."""
        deps = dict(self.dependencies)
        dev_deps = dict(self.dev_dependencies)
        target, other = (dev_deps, deps) if dev else (deps, dev_deps)
        for name, version in entries:
            other.pop(name, None)
            target[name] = version
        return self.model_copy(update={"dependencies": deps, "dev_dependencies": dev_deps})

    def to_json_dict(self) -> dict[str, Any]:
        """Plain dict ready for ``json.dump``.

        Keys of a manifest read from disk keep their original order; keys it
        lacked (and every key of a scaffold) follow in field order.
        """
        data = self.model_dump(by_alias=True, mode="json")
        ordered = {key: data[key] for key in self._key_order if key in data}
        ordered.update(data)
        return ordered


_DEP_FIELDS = frozenset({"dependencies", "devDependencies"})


class ResultEntry(BaseModel):
    """One built package: the manifest and its absolute output directory."""

    model_config = {"frozen": True}

    project: str
    manifest: Manifest
    dir: Path
