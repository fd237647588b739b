"""Plugin-specific error types."""


class PluginError(Exception):
    """Base type for plugin-related failures."""


class PluginManifestError(PluginError):
    """Raised when the plugin manifest cannot be loaded or validated."""


class PluginLoadError(PluginError):
    """Raised when a plugin entrypoint cannot be imported or initialized."""
