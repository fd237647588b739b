"""Core runtime pieces for the wsclient web service client."""

from .app import AppStatus, WSClientApp
from .client import ServiceClient
from .config import ConfigStore, default_config_path
from .descriptions import (
    DefaultServiceProvider,
    ServiceCatalog,
    ServiceDescription,
    ServiceDescriptionStore,
    ServiceStatus,
)
from .endpoints import EndpointTypeDefinition, EndpointTypeRegistry
from .hooks import HookRegistry
from .paths import UserDirs
from .plugin import PluginManager
from .workspace import WorkspaceLayout, WorkspaceResolver

__all__ = [
    "AppStatus",
    "WSClientApp",
    "ConfigStore",
    "default_config_path",
    "DefaultServiceProvider",
    "EndpointTypeDefinition",
    "EndpointTypeRegistry",
    "HookRegistry",
    "PluginManager",
    "ServiceCatalog",
    "ServiceClient",
    "ServiceDescription",
    "ServiceDescriptionStore",
    "ServiceStatus",
    "UserDirs",
    "WorkspaceLayout",
    "WorkspaceResolver",
]
