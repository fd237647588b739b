"""Endpoint type descriptor contributed by extensions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Type

from wsclient_core.api.abc import EndpointBase

from .errors import EndpointTypeDefinitionError


@dataclass(frozen=True)
class EndpointTypeDefinition:
    """Immutable descriptor for a registered endpoint type."""

    name: str
    label: str
    implementation: Type[EndpointBase]
    origin: str = "builtin"

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self._validate_component("name", self.name))
        object.__setattr__(self, "label", self._validate_component("label", self.label))
        if not isinstance(self.implementation, type) or not issubclass(
            self.implementation, EndpointBase
        ):
            raise EndpointTypeDefinitionError(
                f"implementation of endpoint type {self.name!r} must subclass EndpointBase."
            )

    @staticmethod
    def _validate_component(label: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise EndpointTypeDefinitionError(f"{label} cannot be empty.")
        return value.strip()

    @classmethod
    def from_mapping(
        cls,
        name: str,
        data: Mapping[str, Any] | "EndpointTypeDefinition",
        *,
        origin: str = "builtin",
    ) -> "EndpointTypeDefinition":
        """Accept either a definition or a ``{"label", "class"}`` mapping."""

        if isinstance(data, EndpointTypeDefinition):
            return data
        if not isinstance(data, Mapping):
            raise EndpointTypeDefinitionError(
                f"endpoint type {name!r} must be a definition or a mapping"
            )
        implementation = data.get("class", data.get("implementation"))
        if implementation is None:
            raise EndpointTypeDefinitionError(f"endpoint type {name!r} has no class")
        return cls(
            name=name,
            label=str(data.get("label") or ""),
            implementation=implementation,
            origin=str(data.get("origin") or origin),
        )
