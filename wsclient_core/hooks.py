"""Explicit hook registry used by the wsclient core services."""

from __future__ import annotations

import copy
import logging
from collections import defaultdict
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, DefaultDict, Iterator, Mapping

__all__ = [
    "HookError",
    "HookHandler",
    "HookRegistry",
    "STANDARD_HOOKS",
    "ENDPOINT_TYPES",
    "ENDPOINT_TYPES_ALTER",
    "SERVICE_LOAD",
    "SERVICE_PRESAVE",
    "SERVICE_INSERT",
    "SERVICE_UPDATE",
    "SERVICE_DELETE",
    "DEFAULT_SERVICES",
    "DEFAULT_SERVICES_ALTER",
]

ENDPOINT_TYPES = "endpoint_types"
ENDPOINT_TYPES_ALTER = "endpoint_types_alter"
SERVICE_LOAD = "service_load"
SERVICE_PRESAVE = "service_presave"
SERVICE_INSERT = "service_insert"
SERVICE_UPDATE = "service_update"
SERVICE_DELETE = "service_delete"
DEFAULT_SERVICES = "default_services"
DEFAULT_SERVICES_ALTER = "default_services_alter"

STANDARD_HOOKS = (
    ENDPOINT_TYPES,
    ENDPOINT_TYPES_ALTER,
    SERVICE_LOAD,
    SERVICE_PRESAVE,
    SERVICE_INSERT,
    SERVICE_UPDATE,
    SERVICE_DELETE,
    DEFAULT_SERVICES,
    DEFAULT_SERVICES_ALTER,
)

HookHandler = Callable[..., Any]

logger = logging.getLogger(__name__)


class HookError(Exception):
    """Raised when a hook implementation breaks the hook contract."""


@dataclass(frozen=True)
class _HookImplementation:
    priority: int
    order: int
    handler: HookHandler


class HookRegistry:
    """Ordered handler lists per extension point with deterministic delivery."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, list[_HookImplementation]] = defaultdict(list)
        self._sequence: DefaultDict[str, int] = defaultdict(int)

    def implement(self, hook: str, handler: HookHandler, *, priority: int = 0) -> None:
        """Register ``handler`` for ``hook``; higher priorities run first."""
        order = self._sequence[hook]
        self._sequence[hook] = order + 1
        self._handlers[hook].append(
            _HookImplementation(priority=priority, order=order, handler=handler)
        )

    def implementations(self, hook: str) -> tuple[HookHandler, ...]:
        ordered = sorted(
            self._handlers.get(hook, ()),
            key=lambda item: (-item.priority, item.order),
        )
        return tuple(item.handler for item in ordered)

    def invoke(self, hook: str, *args: Any, **kwargs: Any) -> list[Any]:
        """Call every implementation and collect the non-``None`` results."""
        results: list[Any] = []
        for handler in self.implementations(hook):
            result = handler(*args, **kwargs)
            if result is not None:
                results.append(result)
        return results

    def contributions(
        self, hook: str, *args: Any
    ) -> Iterator[tuple[HookHandler, Mapping[Any, Any]]]:
        """Yield ``(handler, mapping)`` for every implementation that returns one.

        Handlers returning ``None`` are skipped; any other non-mapping result
        raises :class:`HookError`.
        """
        for handler in self.implementations(hook):
            result = handler(*args)
            if result is None:
                continue
            if not isinstance(result, Mapping):
                raise HookError(f"{hook} implementations must return a mapping")
            yield handler, result

    def alter(self, hook: str, data: Mapping[Any, Any], *context: Any) -> dict[Any, Any]:
        """Pass ``data`` through every implementation of ``hook``.

        Each implementation receives a read-only snapshot and returns the
        mapping handed to the next one. The caller's ``data`` is never
        mutated.
        """
        current = dict(data)
        for handler in self.implementations(hook):
            snapshot = MappingProxyType(copy.deepcopy(current))
            result = handler(snapshot, *context)
            if not isinstance(result, Mapping):
                raise HookError(
                    f"{hook} implementation {getattr(handler, '__qualname__', handler)!r} "
                    "must return a mapping"
                )
            current = dict(result)
        return current
