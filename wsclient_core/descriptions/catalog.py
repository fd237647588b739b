"""Combined view over default and stored service descriptions."""

from __future__ import annotations

import logging

from .defaults import DefaultServiceProvider
from .errors import ServiceDescriptionError, ServiceNotFoundError
from .models import ServiceDescription, ServiceStatus
from .store import ServiceDescriptionStore

logger = logging.getLogger(__name__)


class ServiceCatalog:
    """Stored records shadow defaults of the same name."""

    def __init__(self, store: ServiceDescriptionStore, defaults: DefaultServiceProvider) -> None:
        self.store = store
        self.defaults = defaults

    def all(self) -> dict[str, ServiceDescription]:
        services = self.defaults.provide_defaults()
        for stored in self.store.load().values():
            if stored.name in services:
                stored.status = ServiceStatus.OVERRIDDEN
                if stored.module is None:
                    stored.module = services[stored.name].module
            services[stored.name] = stored
        return dict(sorted(services.items()))

    def get(self, name: str) -> ServiceDescription:
        service = self.all().get(name)
        if service is None:
            raise ServiceNotFoundError(f"service {name!r} does not exist")
        return service

    def revert(self, name: str) -> ServiceDescription:
        """Drop the stored override of a default and return the default again."""

        service = self.get(name)
        if service.status != ServiceStatus.OVERRIDDEN:
            raise ServiceDescriptionError(f"service {name!r} is not an overridden default")
        self.store.delete(service)
        logger.info("reverted service %s to its default", name)
        return self.get(name)
