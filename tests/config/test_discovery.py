"""Tests for config discovery and nx.json reading."""

from pathlib import Path

import pytest

from tests.conftest import write_json
from wsmanifest.config.discovery import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    find_config,
    nx_workspace_settings,
    read_nx_json,
)


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[workspace]\nnpm_scope = "acme"\n')
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "apps" / "api" / "src"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config(tmp_path) is None



class TestNxWorkspaceSettings:
    def test_scope_and_affected_base(self) -> None:
        nx_json = {"npmScope": "acme", "affected": {"defaultBase": "main"}}
        assert nx_workspace_settings(nx_json) == {
            "workspace": {"npm_scope": "acme", "default_base": "main"}
        }

    def test_top_level_default_base(self) -> None:
        assert nx_workspace_settings({"defaultBase": "develop"}) == {
            "workspace": {"default_base": "develop"}
        }

    def test_affected_base_wins(self) -> None:
        nx_json = {"affected": {"defaultBase": "main"}, "defaultBase": "develop"}
        assert nx_workspace_settings(nx_json)["workspace"]["default_base"] == "main"

    def test_nothing_relevant(self) -> None:
        assert nx_workspace_settings({"tasksRunnerOptions": {}}) == {}


class TestReadNxJson:
    def test_absent_returns_none(self, tmp_path: Path) -> None:
        assert read_nx_json(tmp_path) is None

    def test_reads_object(self, tmp_path: Path) -> None:
        write_json(tmp_path / "nx.json", {"npmScope": "acme"})
        assert read_nx_json(tmp_path) == {"npmScope": "acme"}

    def test_non_object_rejected(self, tmp_path: Path) -> None:
        write_json(tmp_path / "nx.json", ["acme"])
        with pytest.raises(ValueError):
            read_nx_json(tmp_path)
