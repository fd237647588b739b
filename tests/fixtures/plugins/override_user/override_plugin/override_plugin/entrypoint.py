"""Entrypoint for the user override fixture."""

from __future__ import annotations

from typing import Any, Mapping

from wsclient_core.api import EndpointBase, endpoint_type


@endpoint_type(name="override_user", label="Override (user)")
class OverrideEndpoint(EndpointBase):
    def call(self, operation: str, arguments: Mapping[str, Any]) -> Any:
        return "user"


class OverrideEntrypoint:
    def init(self, ctx) -> None:
        self.context = ctx
