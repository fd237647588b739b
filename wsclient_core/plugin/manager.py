"""Find plugin folders, load them once, and feed their endpoint types into the hooks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence

from wsclient_core.endpoints import EndpointTypeDefinition
from wsclient_core.hooks import ENDPOINT_TYPES, HookRegistry

from .context import PluginContext
from .errors import PluginLoadError, PluginManifestError
from .loader import load_plugin
from .manifest import MANIFEST_FILE_NAME, PluginManifest

logger = logging.getLogger(__name__)


class PluginStatus(Enum):
    DISCOVERED = "discovered"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class Plugin:
    """A plugin folder and the outcome of loading it."""

    manifest: PluginManifest
    path: Path
    source: str
    status: PluginStatus = PluginStatus.DISCOVERED
    endpoint_types: tuple[EndpointTypeDefinition, ...] = ()
    error: str | None = None

    @property
    def id(self) -> str:
        return self.manifest.id

    def endpoint_type_map(self) -> dict[str, EndpointTypeDefinition]:
        return {definition.name: definition for definition in self.endpoint_types}


class PluginManager:
    """Loads the plugins found along ``search_path``.

    ``search_path`` holds ``(source, directory)`` pairs. Each directory child
    with a ``plugin.toml`` whose id matches the folder name is a plugin; an id
    found earlier in the search path shadows later ones. A plugin that fails
    to load is kept with status ``failed`` and does not stop the others.
    """

    def __init__(
        self,
        hooks: HookRegistry,
        search_path: Sequence[tuple[str, Path]],
        *,
        workspace_root: Path,
    ) -> None:
        self.hooks = hooks
        self.search_path = tuple((source, Path(directory)) for source, directory in search_path)
        self.workspace_root = workspace_root
        self._plugins: dict[str, Plugin] | None = None

    @property
    def plugins(self) -> tuple[Plugin, ...]:
        return tuple((self._plugins or {}).values())

    def ids(self) -> tuple[str, ...]:
        return tuple(plugin.id for plugin in self.plugins)

    def get(self, plugin_id: str) -> Plugin | None:
        return (self._plugins or {}).get(plugin_id)

    def discover(self) -> list[Plugin]:
        found: dict[str, Plugin] = {}
        for source, directory in self.search_path:
            for manifest_path in sorted(directory.glob(f"*/{MANIFEST_FILE_NAME}")):
                folder = manifest_path.parent
                try:
                    manifest = PluginManifest.load(manifest_path)
                except PluginManifestError as exc:
                    logger.warning("ignoring plugin folder %s: %s", folder, exc)
                    continue
                if manifest.id != folder.name:
                    logger.warning(
                        "ignoring plugin folder %s: manifest declares id %r", folder, manifest.id
                    )
                    continue
                if manifest.id in found:
                    logger.debug(
                        "%s plugin %s is shadowed by %s", source, manifest.id, found[manifest.id].path
                    )
                    continue
                found[manifest.id] = Plugin(manifest=manifest, path=folder, source=source)
        return list(found.values())

    def load(self) -> tuple[Plugin, ...]:
        """Discover and initialize every plugin; later calls return the same result."""

        if self._plugins is None:
            self._plugins = {}
            for plugin in self.discover():
                self._load(plugin)
                self._plugins[plugin.id] = plugin
        return self.plugins

    def _load(self, plugin: Plugin) -> None:
        context = PluginContext(
            manifest=plugin.manifest,
            plugin_root=plugin.path,
            workspace_root=self.workspace_root,
            hooks=self.hooks,
            logger=logging.getLogger(f"{__name__}.{plugin.id}"),
        )
        try:
            plugin.endpoint_types = load_plugin(context)
        except PluginLoadError as exc:
            plugin.status = PluginStatus.FAILED
            plugin.error = str(exc)
            logger.error("plugin %s failed to load: %s", plugin.id, exc)
            return
        plugin.status = PluginStatus.LOADED
        if plugin.endpoint_types:
            self.hooks.implement(ENDPOINT_TYPES, plugin.endpoint_type_map)
        logger.info(
            "loaded %s plugin %s (%d endpoint types)",
            plugin.source,
            plugin.id,
            len(plugin.endpoint_types),
        )
