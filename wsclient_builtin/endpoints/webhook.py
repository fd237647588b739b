"""Web hook endpoint type: every operation is an event posted to one URL."""

from __future__ import annotations

from typing import Any, Mapping

from wsclient_core.api import endpoint_type

from .http import HttpEndpoint


@endpoint_type(name="web_hook", label="Web hooks")
class WebHookEndpoint(HttpEndpoint):
    def call(self, operation: str, arguments: Mapping[str, Any]) -> Any:
        payload = {"event": operation, "data": dict(arguments)}
        response = self._send(operation, "POST", self.service.url, json=payload)
        return self._decode(response)
