"""Errors raised while storing, resolving or invoking service descriptions."""

from __future__ import annotations


class ServiceDescriptionError(Exception):
    """Base class for service description errors."""


class ServiceNotFoundError(ServiceDescriptionError, KeyError):
    """Raised when no service description matches an id or name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class DuplicateServiceError(ServiceDescriptionError):
    """Raised when an id or name is already taken by another record."""


class InvalidServiceDescriptionError(ServiceDescriptionError, ValueError):
    """Raised when a description fails validation."""


class OperationNotFoundError(ServiceDescriptionError):
    """Raised when invoking an operation the description does not declare."""

    def __init__(self, service: str, operation: str) -> None:
        super().__init__(f"service {service!r} has no operation {operation!r}")
        self.service = service
        self.operation = operation
