"""Invoke operations of configured services through their endpoint types."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from wsclient_core.api.abc import EndpointBase, EndpointOptions
from wsclient_core.descriptions import OperationNotFoundError, ServiceCatalog
from wsclient_core.endpoints import EndpointTypeRegistry

logger = logging.getLogger(__name__)


class ServiceClient:
    """Resolves a service to its endpoint implementation and calls it."""

    def __init__(
        self,
        catalog: ServiceCatalog,
        endpoint_types: EndpointTypeRegistry,
        *,
        options: EndpointOptions | None = None,
    ) -> None:
        self.catalog = catalog
        self.endpoint_types = endpoint_types
        self.options = options or EndpointOptions()
        self._endpoints: dict[str, EndpointBase] = {}

    def endpoint(self, name: str) -> EndpointBase:
        cached = self._endpoints.get(name)
        if cached is not None:
            return cached
        service = self.catalog.get(name)
        definition = self.endpoint_types.resolve(service.type)
        endpoint = definition.implementation(service, self.options)
        self._endpoints[name] = endpoint
        return endpoint

    def invoke(
        self,
        name: str,
        operation: str,
        arguments: Mapping[str, Any] | None = None,
    ) -> Any:
        endpoint = self.endpoint(name)
        if operation not in endpoint.service.operations:
            raise OperationNotFoundError(name, operation)
        logger.debug("invoking %s.%s", name, operation)
        return endpoint.call(operation, dict(arguments or {}))

    def forget(self, name: str) -> None:
        """Drop the cached endpoint of ``name`` after its description changed."""
        endpoint = self._endpoints.pop(name, None)
        if endpoint is not None:
            endpoint.clear_cache()

    def clear_cache(self) -> None:
        for endpoint in self._endpoints.values():
            endpoint.clear_cache()
        self._endpoints.clear()
