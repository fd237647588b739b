"""Process-wide registry of endpoint types."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Mapping

from wsclient_core.hooks import ENDPOINT_TYPES, ENDPOINT_TYPES_ALTER, HookRegistry

from .entry import EndpointTypeDefinition
from .errors import (
    EndpointTypeDefinitionError,
    EndpointTypeNotFoundError,
    EndpointTypeRegistryFrozenError,
)

logger = logging.getLogger(__name__)

Alteration = Callable[[Mapping[str, EndpointTypeDefinition]], Mapping[str, EndpointTypeDefinition]]


class EndpointTypeRegistry:
    """Collects endpoint types, lets late contributors alter them, then freezes."""

    def __init__(self) -> None:
        self._definitions: dict[str, EndpointTypeDefinition] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, definitions: Mapping[str, EndpointTypeDefinition]) -> None:
        """Merge ``definitions``; an existing name is overwritten by the newcomer."""

        self._ensure_mutable()
        validated = self._validate(definitions)
        for name, definition in validated.items():
            previous = self._definitions.get(name)
            if previous is not None and previous != definition:
                logger.warning(
                    "endpoint type %s from %s overrides the one from %s",
                    name,
                    definition.origin,
                    previous.origin,
                )
            self._definitions[name] = definition

    def alter(self, alteration: Alteration) -> None:
        """Replace the merged set with ``alteration(snapshot)``."""

        self._ensure_mutable()
        result = alteration(self.definitions())
        if not isinstance(result, Mapping):
            raise EndpointTypeDefinitionError("endpoint type alteration must return a mapping")
        self._definitions = self._validate(result)

    def freeze(self) -> None:
        self._frozen = True

    def resolve(self, name: str) -> EndpointTypeDefinition:
        definition = self._definitions.get(name)
        if definition is None:
            raise EndpointTypeNotFoundError(f"endpoint type {name!r} is not registered.")
        return definition

    def definitions(self) -> Mapping[str, EndpointTypeDefinition]:
        """Read-only view of the registered definitions, sorted by name."""

        return MappingProxyType(dict(sorted(self._definitions.items())))

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._definitions))

    def collect(self, hooks: HookRegistry) -> None:
        """Register every ``endpoint_types`` contribution, alter, then freeze."""

        for handler, contributed in hooks.contributions(ENDPOINT_TYPES):
            origin = getattr(handler, "__module__", None) or "builtin"
            self.register(
                {
                    name: EndpointTypeDefinition.from_mapping(name, data, origin=origin)
                    for name, data in contributed.items()
                }
            )
        self.alter(lambda snapshot: hooks.alter(ENDPOINT_TYPES_ALTER, snapshot))
        self.freeze()
        logger.debug("collected endpoint types: %s", ", ".join(self.names()) or "none")

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise EndpointTypeRegistryFrozenError("endpoint type registry is frozen.")

    @staticmethod
    def _validate(
        definitions: Mapping[str, EndpointTypeDefinition],
    ) -> dict[str, EndpointTypeDefinition]:
        validated: dict[str, EndpointTypeDefinition] = {}
        for name, definition in definitions.items():
            if not isinstance(definition, EndpointTypeDefinition):
                raise EndpointTypeDefinitionError(
                    f"endpoint type {name!r} is not an EndpointTypeDefinition"
                )
            if name != definition.name:
                raise EndpointTypeDefinitionError(
                    f"endpoint type key {name!r} does not match definition name {definition.name!r}"
                )
            validated[name] = definition
        return validated
