"""Application object that wires together the wsclient core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from wsclient_core.builtins import register_builtin_hooks
from wsclient_core.client import ServiceClient
from wsclient_core.config import ConfigStore
from wsclient_core.descriptions import (
    DefaultServiceProvider,
    ServiceCatalog,
    ServiceDescription,
    ServiceDescriptionStore,
)
from wsclient_core.endpoints import EndpointTypeRegistry
from wsclient_core.hooks import SERVICE_DELETE, SERVICE_INSERT, SERVICE_UPDATE, HookRegistry
from wsclient_core.paths import UserDirs
from wsclient_core.plugin import PluginManager
from wsclient_core.workspace import WorkspaceResolver


@dataclass(frozen=True)
class AppStatus:
    workspace: Path
    plugins: Sequence[str]
    endpoint_types: Sequence[str]
    services: Sequence[str]


class WSClientApp:
    """Entry point that glues the workspace, hooks, plugins and services."""

    def __init__(
        self,
        *,
        start_dir: Path | str | None = None,
        user_dirs: UserDirs | None = None,
        hooks: HookRegistry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger("wsclient_core.app")
        self.user_dirs = user_dirs or UserDirs()
        self.workspace_resolver = WorkspaceResolver(user_dirs=self.user_dirs)
        normalized_start = Path(start_dir) if isinstance(start_dir, str) else start_dir
        workspace_root = self.workspace_resolver.ensure_workspace(normalized_start)
        self.layout = self.workspace_resolver.layout(workspace_root)
        self.config = ConfigStore(path=self.layout.config_file)
        self.hooks = hooks or HookRegistry()
        self.endpoint_types = EndpointTypeRegistry()
        self.plugin_manager = PluginManager(
            self.hooks,
            search_path=(
                ("workspace", self.layout.plugins_dir),
                ("user", self.user_dirs.plugins_dir()),
            ),
            workspace_root=self.layout.root,
        )
        self.store = ServiceDescriptionStore(self.hooks, self.layout.services_file)
        self.defaults = DefaultServiceProvider(self.hooks)
        self.catalog = ServiceCatalog(self.store, self.defaults)
        self.client = ServiceClient(
            self.catalog,
            self.endpoint_types,
            options=self.config.endpoint_options(),
        )
        self._bootstrapped = False

    def _forget_endpoint(self, service: ServiceDescription) -> None:
        self.client.forget(service.name)

    def bootstrap(self) -> AppStatus:
        if not self._bootstrapped:
            register_builtin_hooks(self.hooks)
            self.hooks.implement(SERVICE_INSERT, self._forget_endpoint)
            self.hooks.implement(SERVICE_UPDATE, self._forget_endpoint)
            self.hooks.implement(SERVICE_DELETE, self._forget_endpoint)
            self.plugin_manager.load()
            self.endpoint_types.collect(self.hooks)
            self._bootstrapped = True
            self.logger.debug("bootstrapped workspace %s", self.layout.root)
        return self.status()

    def status(self) -> AppStatus:
        return AppStatus(
            workspace=self.layout.root,
            plugins=self.plugin_manager.ids(),
            endpoint_types=self.endpoint_types.names(),
            services=tuple(self.catalog.all()),
        )
