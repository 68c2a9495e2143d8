"""Tests for the Manifest model and its copy-on-write builders."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from wsmanifest.domain.manifest import Manifest, scoped_package_name


class TestScopedPackageName:
    def test_plain_scope(self) -> None:
        assert scoped_package_name("acme", "util") == "@acme/util"

    def test_scope_with_at_sign(self) -> None:
        assert scoped_package_name("@acme", "util") == "@acme/util"


class TestScaffold:
    def test_defaults(self) -> None:
        m = Manifest.scaffold("acme", "api")
        assert m.name == "@acme/api"
        assert m.version == "0.0.0"
        assert m.dependencies == {}
        assert m.dev_dependencies == {}


class TestFromJsonDict:
    def test_alias_and_extras_preserved(self) -> None:
        m = Manifest.from_json_dict(
            {
                "name": "api",
                "version": "1.2.3",
                "scripts": {"start": "node main.js"},
                "devDependencies": {"jest": "29.0.0"},
            }
        )
        assert m.dev_dependencies == {"jest": "29.0.0"}
        assert m.dependencies == {}
        data = m.to_json_dict()
        assert data["scripts"] == {"start": "node main.js"}
        assert data["devDependencies"] == {"jest": "29.0.0"}

    def test_source_key_order_kept(self) -> None:
        m = Manifest.from_json_dict(
            {
                "name": "api",
                "main": "main.js",
                "dependencies": {"react": "18.2.0"},
                "scripts": {"start": "node main.js"},
                "version": "1.0.0",
            }
        )
        updated = m.with_dependency("jest", "29.0.0", dev=True)
        assert list(updated.to_json_dict()) == [
            "name",
            "main",
            "dependencies",
            "scripts",
            "version",
            "devDependencies",
        ]

    def test_scaffold_uses_field_order(self) -> None:
        data = Manifest.scaffold("acme", "api").to_json_dict()
        assert list(data) == ["name", "version", "dependencies", "devDependencies"]

    def test_null_dependency_fields_default_to_empty(self) -> None:
        m = Manifest.from_json_dict({"name": "api", "dependencies": None})
        assert m.dependencies == {}

    def test_invalid_dependency_mapping_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Manifest.from_json_dict({"name": "api", "dependencies": ["react"]})


class TestBuilders:
    def test_with_dependency_returns_copy(self) -> None:
        original = Manifest.scaffold("acme", "api")
        updated = original.with_dependency("react", "18.2.0")
        assert updated.dependencies == {"react": "18.2.0"}
        assert original.dependencies == {}

    def test_dev_placement_removes_runtime_entry(self) -> None:
        m = Manifest(name="api", dependencies={"jest": "28.0.0", "react": "18.2.0"})
        updated = m.with_dependency("jest", "29.0.0", dev=True)
        assert updated.dependencies == {"react": "18.2.0"}
        assert updated.dev_dependencies == {"jest": "29.0.0"}

    def test_runtime_placement_removes_dev_entry(self) -> None:
        m = Manifest(name="api", devDependencies={"lodash": "4.0.0"})
        updated = m.with_dependency("lodash", "4.17.21")
        assert updated.dependencies == {"lodash": "4.17.21"}
        assert updated.dev_dependencies == {}

    def test_overwrites_existing_version(self) -> None:
        m = Manifest(name="api", dependencies={"react": "17.0.0"})
        assert m.with_dependency("react", "18.2.0").dependencies == {"react": "18.2.0"}

    def test_bulk_keeps_order(self) -> None:
        m = Manifest(name="api").with_dependencies([("b", "1"), ("a", "2")])
        assert list(m.dependencies) == ["b", "a"]

    def test_frozen(self) -> None:
        m = Manifest(name="api")
        with pytest.raises(ValidationError):
            m.name = "other"  # type: ignore[misc]
