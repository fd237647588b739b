"""Abstract base class every endpoint type implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from wsclient_core.descriptions.models import ServiceDescription


@dataclass(frozen=True)
class EndpointOptions:
    """Transport defaults handed to endpoints by the service client."""

    timeout: float = 10.0
    max_retries: int = 2


class EndpointBase(ABC):
    """Base interface for remote endpoint implementations."""

    def __init__(
        self,
        service: "ServiceDescription",
        options: EndpointOptions | None = None,
    ) -> None:
        self.service = service
        self.options = options or EndpointOptions()

    @abstractmethod
    def call(self, operation: str, arguments: Mapping[str, Any]) -> Any:
        """Invoke ``operation`` on the remote service."""

    def action_info(self) -> dict[str, dict[str, Any]]:
        """Describe the operations this endpoint can invoke."""

        return {
            name: {
                "label": str(settings.get("label") or name),
                "parameters": dict(settings.get("parameters") or {}),
            }
            for name, settings in sorted(self.service.operations.items())
        }

    def clear_cache(self) -> None:
        """Drop any cached remote state (connections, discovered metadata)."""
