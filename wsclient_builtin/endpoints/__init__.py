"""Endpoint types shipped with wsclient."""

from .http import HttpEndpoint
from .rest import RestEndpoint
from .webhook import WebHookEndpoint

__all__ = ["HttpEndpoint", "RestEndpoint", "WebHookEndpoint"]
