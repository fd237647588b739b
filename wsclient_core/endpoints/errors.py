"""Custom errors raised by the endpoint type registry."""

from __future__ import annotations


class EndpointTypeError(Exception):
    """Base class for endpoint type errors."""


class EndpointTypeDefinitionError(EndpointTypeError, ValueError):
    """Raised when an endpoint type definition is malformed."""


class EndpointTypeNotFoundError(EndpointTypeError, KeyError):
    """Raised when an endpoint type cannot be resolved."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class EndpointTypeRegistryFrozenError(EndpointTypeError):
    """Raised when registering or altering after the registry was frozen."""


class EndpointCallError(Exception):
    """Raised when a remote endpoint invocation fails."""

    def __init__(self, service: str, operation: str, message: str) -> None:
        super().__init__(f"{service}.{operation}: {message}")
        self.service = service
        self.operation = operation
