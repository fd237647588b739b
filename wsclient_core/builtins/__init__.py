"""Helper utilities for registering built-in wsclient hook implementations."""

from __future__ import annotations

from typing import Any

from wsclient_core.hooks import ENDPOINT_TYPES, HookRegistry

__all__ = ["builtin_endpoint_types", "register_builtin_hooks"]


def builtin_endpoint_types() -> dict[str, dict[str, Any]]:
    """Endpoint types shipped with wsclient, keyed by type name."""

    from wsclient_builtin.endpoints import RestEndpoint, WebHookEndpoint

    return {
        "rest": {"label": "REST", "class": RestEndpoint},
        "web_hook": {"label": "Web hooks", "class": WebHookEndpoint},
    }


def register_builtin_hooks(hooks: HookRegistry) -> None:
    """Register the built-in implementations; they run before plugin ones."""

    hooks.implement(ENDPOINT_TYPES, builtin_endpoint_types, priority=100)
