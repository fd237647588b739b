"""Convenience exports for the endpoint type registry."""

from .entry import EndpointTypeDefinition
from .errors import (
    EndpointCallError,
    EndpointTypeDefinitionError,
    EndpointTypeError,
    EndpointTypeNotFoundError,
    EndpointTypeRegistryFrozenError,
)
from .registry import EndpointTypeRegistry

__all__ = [
    "EndpointTypeDefinition",
    "EndpointTypeRegistry",
    "EndpointTypeError",
    "EndpointTypeDefinitionError",
    "EndpointTypeNotFoundError",
    "EndpointTypeRegistryFrozenError",
    "EndpointCallError",
]
