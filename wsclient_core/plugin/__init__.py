"""Plugin discovery and loading."""

from .context import PluginContext
from .errors import PluginError, PluginLoadError, PluginManifestError
from .loader import endpoint_types_in, load_plugin
from .manager import Plugin, PluginManager, PluginStatus
from .manifest import MANIFEST_FILE_NAME, PluginManifest

__all__ = [
    "MANIFEST_FILE_NAME",
    "Plugin",
    "PluginContext",
    "PluginManager",
    "PluginManifest",
    "PluginStatus",
    "PluginError",
    "PluginLoadError",
    "PluginManifestError",
    "endpoint_types_in",
    "load_plugin",
]
