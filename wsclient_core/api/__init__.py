"""Convenience imports for wsclient API helpers."""

from .abc import EndpointBase, EndpointOptions
from .decorators import endpoint_type

__all__ = [
    "EndpointBase",
    "EndpointOptions",
    "endpoint_type",
]
