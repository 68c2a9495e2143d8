"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs (CLI flags passed by Click)
  2. Env vars (``WSMANIFEST_*`` prefix, ``__`` for nested sections)
  3. TOML file (``wsmanifest.toml`` discovered via walk-up)
  4. ``nx.json`` at the workspace root (``npmScope``, ``affected.defaultBase``)
  5. Code defaults (baked into the section models)
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from wsmanifest.config.discovery import NX_JSON_FILENAME, find_config, nx_workspace_settings, read_nx_json
from wsmanifest.config.models import PeersConfig, WorkspaceConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``wsmanifest.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class NxJsonSettingsSource(PydanticBaseSettingsSource):
    """Read ``npmScope`` and ``affected.defaultBase`` from the workspace ``nx.json``."""

    def __init__(self, settings_cls: type[BaseSettings], workspace_root: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if workspace_root is None:
            return
        try:
            nx_json = read_nx_json(workspace_root)
        except (OSError, ValueError) as exc:
            msg = f"Invalid {NX_JSON_FILENAME} in {workspace_root}: {exc}"
            raise click.ClickException(msg) from exc
        if nx_json is not None:
            self._data = nx_workspace_settings(nx_json)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path and workspace root handed to settings_customise_sources during
# construction.
_tls = threading.local()


class WsSettings(BaseSettings):
    """Unified, frozen settings for one wsmanifest invocation.

    Attributes:
        workspace_root: Directory holding ``wsmanifest.toml`` (or CWD if
            no config was found). Relative config paths resolve here.
        config_path: The config file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "WSMANIFEST_",
        "env_nested_delimiter": "__",
    }

    workspace_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    peers: PeersConfig = Field(default_factory=PeersConfig)

    @property
    def graph_path(self) -> Path:
        return self.workspace_root / self.workspace.graph_file

    @property
    def root_manifest_path(self) -> Path:
        return self.workspace_root / self.workspace.root_manifest

    @property
    def modules_dir(self) -> Path:
        return self.workspace_root / self.peers.modules_dir

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML and nx.json sources between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        workspace_root = getattr(_tls, "workspace_root", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
            NxJsonSettingsSource(settings_cls, workspace_root),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        workspace_root: Path | None = None,
        **cli_flags: Any,
    ) -> WsSettings:
        """Construct settings from a CLI invocation.

        Discovers ``wsmanifest.toml`` via walk-up (or explicit *config_path*)
        and resolves *workspace_root* from the config file's parent.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(workspace_root)

        resolved_root = workspace_root
        if resolved_root is None:
            resolved_root = toml_path.parent.resolve() if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        _tls.workspace_root = resolved_root
        try:
            return cls(
                workspace_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
            _tls.workspace_root = None
