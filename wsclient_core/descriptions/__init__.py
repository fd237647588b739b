"""Service descriptions: records, persistence, defaults and the combined catalog."""

from .catalog import ServiceCatalog
from .defaults import DefaultServiceProvider
from .errors import (
    DuplicateServiceError,
    InvalidServiceDescriptionError,
    OperationNotFoundError,
    ServiceDescriptionError,
    ServiceNotFoundError,
)
from .models import ServiceDescription, ServiceStatus, is_valid_name
from .store import SERVICES_FILENAME, ServiceDescriptionStore

__all__ = [
    "SERVICES_FILENAME",
    "ServiceCatalog",
    "ServiceDescription",
    "ServiceDescriptionStore",
    "ServiceStatus",
    "DefaultServiceProvider",
    "ServiceDescriptionError",
    "ServiceNotFoundError",
    "DuplicateServiceError",
    "InvalidServiceDescriptionError",
    "OperationNotFoundError",
    "is_valid_name",
]
