"""Tests for package.json readers."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.conftest import write_json
from wsmanifest.domain.errors import RootManifestError
from wsmanifest.infrastructure.manifests import load_root_manifest, read_manifest


class TestReadManifest:
    def test_reads_existing(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "package.json", {"name": "@acme/api", "version": "2.0.0"})
        m = read_manifest(path)
        assert m is not None
        assert m.name == "@acme/api"
        assert m.dependencies == {}

    def test_missing_returns_none(self, tmp_path: Path) -> None:
        assert read_manifest(tmp_path / "package.json") is None

    def test_malformed_json_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("{", encoding="utf-8")
        assert read_manifest(path) is None

    def test_non_object_returns_none(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "package.json", ["a"])
        assert read_manifest(path) is None

    def test_missing_name_without_defaults_returns_none(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "package.json", {"version": "1.0.0"})
        assert read_manifest(path) is None

    def test_defaults_fill_missing_keys(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "package.json", {"version": "1.0.0", "private": True})
        m = read_manifest(path, defaults={"name": "@acme/api", "version": "0.0.0"})
        assert m is not None
        assert m.name == "@acme/api"
        assert m.version == "1.0.0"
        assert m.to_json_dict()["private"] is True


class TestLoadRootManifest:
    def test_loads_dev_dependencies(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "package.json", {"name": "ws", "devDependencies": {"jest": "29"}})
        assert load_root_manifest(path).dev_dependencies == {"jest": "29"}

    def test_name_defaults_to_directory(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "package.json", {"private": True})
        assert load_root_manifest(path).name == tmp_path.name

    def test_missing_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(RootManifestError):
            load_root_manifest(tmp_path / "package.json")

    def test_malformed_is_fatal(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("not json", encoding="utf-8")
        with pytest.raises(RootManifestError) as exc_info:
            load_root_manifest(path)
        assert exc_info.value.code == "ROOT_MANIFEST_INVALID"

    def test_bad_dev_dependencies_is_fatal(self, tmp_path: Path) -> None:
        path = write_json(tmp_path / "package.json", {"name": "ws", "devDependencies": "jest"})
        with pytest.raises(RootManifestError):
            load_root_manifest(path)
