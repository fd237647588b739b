"""Built-in service descriptions contributed through hooks."""

from __future__ import annotations

import copy
import logging
from typing import Mapping

from wsclient_core.hooks import DEFAULT_SERVICES, DEFAULT_SERVICES_ALTER, HookRegistry

from .errors import InvalidServiceDescriptionError
from .models import ServiceDescription, ServiceStatus, is_valid_name

logger = logging.getLogger(__name__)


class DefaultServiceProvider:
    """Gathers ``default_services`` contributions and runs the alter pipeline."""

    def __init__(self, hooks: HookRegistry) -> None:
        self.hooks = hooks

    def provide_defaults(self) -> dict[str, ServiceDescription]:
        collected: dict[str, ServiceDescription] = {}
        for handler, contributed in self.hooks.contributions(DEFAULT_SERVICES):
            module = getattr(handler, "__module__", None)
            for name, service in contributed.items():
                if not isinstance(service, ServiceDescription):
                    raise InvalidServiceDescriptionError(
                        f"default service {name!r} is not a ServiceDescription"
                    )
                service = copy.deepcopy(service)
                service.id = None
                service.status = ServiceStatus.DEFAULT
                if service.module is None:
                    service.module = module
                if name in collected:
                    logger.debug("default service %s overridden by %s", name, service.module)
                collected[name] = service
        return self.alter_defaults(collected)

    def alter_defaults(
        self, services: Mapping[str, ServiceDescription]
    ) -> dict[str, ServiceDescription]:
        """Let contributors override or drop defaults; keys stay valid names."""

        altered = self.hooks.alter(DEFAULT_SERVICES_ALTER, services)
        for name, service in altered.items():
            if not is_valid_name(name):
                raise InvalidServiceDescriptionError(f"invalid default service key {name!r}")
            if not isinstance(service, ServiceDescription) or service.name != name:
                raise InvalidServiceDescriptionError(
                    f"default service key {name!r} does not match its description"
                )
            service.validate()
        return altered
