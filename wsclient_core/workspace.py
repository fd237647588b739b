"""Locate the ``.wsclient`` workspace and answer layered settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping

from .config import CONFIG_FILE_NAME, ConfigStore
from .descriptions.store import SERVICES_FILENAME
from .paths import UserDirs

DEFAULT_WORKSPACE_NAME = ".wsclient"
WORKSPACE_ENV = "WSCLIENT_DIR"
SETTINGS_ENV_PREFIX = "WSCLIENT_"

DEFAULT_SETTINGS: Mapping[str, str] = {
    "log_level": "WARNING",
    "services_file": SERVICES_FILENAME,
}


def _start(start_dir: Path | str | None) -> Path:
    return (Path(start_dir) if start_dir else Path.cwd()).resolve()


@dataclass(frozen=True)
class WorkspaceLayout:
    """Paths inside one workspace.

    ``services_file`` may point outside the workspace when the
    ``services_file`` setting is absolute.
    """

    root: Path
    plugins_dir: Path
    config_file: Path
    services_file: Path

    @classmethod
    def from_root(
        cls, root: Path, *, services_file: Path | str = SERVICES_FILENAME
    ) -> "WorkspaceLayout":
        root = Path(root).resolve()
        services = Path(services_file).expanduser()
        return cls(
            root=root,
            plugins_dir=root / "plugins",
            config_file=root / CONFIG_FILE_NAME,
            services_file=services if services.is_absolute() else root / services,
        )

    def ensure(self) -> None:
        self.plugins_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.touch(exist_ok=True)


class WorkspaceResolver:
    """Finds the workspace for a directory and resolves settings for it.

    A setting is taken from the first layer that defines it: CLI overrides,
    ``WSCLIENT_<KEY>`` environment variables, the workspace ``config.toml``,
    the user ``config.toml``, then :data:`DEFAULT_SETTINGS`. The workspace
    itself can be pinned with ``WSCLIENT_DIR`` or a ``workspace_dir`` CLI
    override.
    """

    def __init__(
        self,
        *,
        cli_overrides: Mapping[str, str] | None = None,
        env: Mapping[str, str] | None = None,
        user_dirs: UserDirs | None = None,
        workspace_name: str = DEFAULT_WORKSPACE_NAME,
    ) -> None:
        self.cli_overrides = dict(cli_overrides or {})
        self.env = os.environ if env is None else env
        self.user_dirs = user_dirs or UserDirs()
        self.workspace_name = workspace_name

    def find_workspace(self, start_dir: Path | str | None = None) -> Path | None:
        pinned = self._pinned_root()
        if pinned is not None:
            return pinned if pinned.is_dir() else None
        start = _start(start_dir)
        for directory in (start, *start.parents):
            candidate = directory / self.workspace_name
            if candidate.is_dir():
                return candidate
        return None

    def ensure_workspace(self, start_dir: Path | str | None = None) -> Path:
        """Return the workspace root for ``start_dir``, creating it when missing."""
        root = (
            self._pinned_root()
            or self.find_workspace(start_dir)
            or _start(start_dir) / self.workspace_name
        )
        layout = self.layout(root)
        layout.ensure()
        return layout.root

    def layout(self, root: Path) -> WorkspaceLayout:
        services_file = self.resolve_setting("services_file", workspace_root=root)
        return WorkspaceLayout.from_root(root, services_file=services_file or SERVICES_FILENAME)

    def resolve_setting(
        self,
        key: str,
        start_dir: Path | str | None = None,
        *,
        workspace_root: Path | None = None,
    ) -> str | None:
        root = workspace_root if workspace_root is not None else self.find_workspace(start_dir)
        for layer in self._layers(root):
            value = layer.get(key)
            if value not in (None, ""):
                return str(value)
        return None

    def _layers(self, workspace_root: Path | None) -> Iterator[Any]:
        yield self.cli_overrides
        yield {
            name[len(SETTINGS_ENV_PREFIX):].lower(): value
            for name, value in self.env.items()
            if name.startswith(SETTINGS_ENV_PREFIX)
        }
        if workspace_root is not None:
            yield ConfigStore(path=Path(workspace_root) / CONFIG_FILE_NAME)
        yield ConfigStore(path=self.user_dirs.config_dir() / CONFIG_FILE_NAME)
        yield DEFAULT_SETTINGS

    def _pinned_root(self) -> Path | None:
        value = self.cli_overrides.get("workspace_dir") or self.env.get(WORKSPACE_ENV)
        return Path(value).expanduser().resolve() if value else None
