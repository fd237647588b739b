"""REST endpoint type."""

from __future__ import annotations

from string import Formatter
from typing import Any, Mapping
from urllib.parse import quote

from wsclient_core.api import endpoint_type
from wsclient_core.endpoints import EndpointCallError

from .http import HttpEndpoint

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@endpoint_type(name="rest", label="REST")
class RestEndpoint(HttpEndpoint):
    """Maps operations onto ``METHOD service-url/path`` requests.

    An operation is configured with ``method`` (default ``GET``) and ``path``,
    a format string such as ``users/{id}``. Arguments named in the path are
    substituted; the remaining ones are sent as the query string for
    ``GET``/``DELETE`` and as a JSON body otherwise.
    """

    def call(self, operation: str, arguments: Mapping[str, Any]) -> Any:
        settings = self.service.operations.get(operation, {})
        method = str(settings.get("method") or "GET").upper()
        url, remaining = self._build_url(operation, str(settings.get("path") or ""), arguments)

        if method in _BODY_METHODS:
            response = self._send(operation, method, url, json=remaining)
        else:
            response = self._send(operation, method, url, params=remaining)
        return self._decode(response)

    def _build_url(
        self,
        operation: str,
        path: str,
        arguments: Mapping[str, Any],
    ) -> tuple[str, dict[str, Any]]:
        remaining = dict(arguments)
        placeholders = [field for _, field, _, _ in Formatter().parse(path) if field is not None]
        values: dict[str, str] = {}
        for placeholder in placeholders:
            if not placeholder.isidentifier():
                raise EndpointCallError(
                    self.service.name,
                    operation,
                    f"path placeholder {{{placeholder}}} must be an argument name",
                )
            if placeholder not in remaining:
                raise EndpointCallError(
                    self.service.name, operation, f"missing path argument {placeholder!r}"
                )
            values[placeholder] = quote(str(remaining.pop(placeholder)), safe="")
        base = self.service.url.rstrip("/")
        resolved = path.format(**values).lstrip("/")
        return (f"{base}/{resolved}" if resolved else base), remaining
