"""Native features for wsclient."""

from .endpoints import RestEndpoint, WebHookEndpoint

__all__ = ["RestEndpoint", "WebHookEndpoint"]
