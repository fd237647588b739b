"""Shared requests plumbing for the built-in HTTP endpoint types."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import requests
from requests.auth import HTTPBasicAuth
from requests.exceptions import HTTPError, RequestException

from wsclient_core.api import EndpointBase
from wsclient_core.endpoints import EndpointCallError

logger = logging.getLogger(__name__)

_TRANSIENT_ERRORS = (requests.ConnectionError, requests.Timeout)


class HttpEndpoint(EndpointBase):
    """Endpoint base that sends requests with the description's headers and auth.

    Connection failures and timeouts are retried up to ``options.max_retries``
    times. An HTTP error status fails the call on the first response, so a
    rejected request is never sent twice.
    """

    _session: requests.Session | None = None

    def _http(self) -> requests.Session:
        if self._session is None:
            session = requests.Session()
            headers, auth = self._build_session_auth()
            session.headers.update(headers)
            session.auth = auth
            self._session = session
        return self._session

    def clear_cache(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def _build_session_auth(self) -> tuple[dict[str, str], HTTPBasicAuth | None]:
        settings = self.service.settings
        headers = {str(k): str(v) for k, v in (settings.get("headers") or {}).items()}
        auth_entry = settings.get("auth")
        auth_object: HTTPBasicAuth | None = None

        if isinstance(auth_entry, Mapping):
            auth_type = str(auth_entry.get("type", "")).lower()
            if auth_type == "basic":
                username = auth_entry.get("username") or ""
                password = auth_entry.get("password") or ""
                auth_object = HTTPBasicAuth(username, password)
            elif auth_type == "bearer":
                token = auth_entry.get("token")
                if token:
                    headers.setdefault("Authorization", f"Bearer {token}")
        elif isinstance(auth_entry, str):
            headers.setdefault("Authorization", f"Bearer {auth_entry}")

        return headers, auth_object

    def _timeout(self) -> float:
        timeout = self.service.settings.get("timeout")
        return float(timeout) if timeout else self.options.timeout

    def _send(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> requests.Response:
        attempts = max(0, self.options.max_retries) + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self._http().request(
                    method,
                    url,
                    params=params or None,
                    json=json,
                    timeout=self._timeout(),
                )
                response.raise_for_status()
                return response
            except HTTPError as exc:
                raise EndpointCallError(self.service.name, operation, str(exc)) from exc
            except _TRANSIENT_ERRORS as exc:
                if attempt == attempts:
                    raise EndpointCallError(self.service.name, operation, str(exc)) from exc
                logger.debug(
                    "%s %s failed (attempt %d/%d): %s", method, url, attempt, attempts, exc
                )
                time.sleep(min(attempt * 0.1, 1.0))
            except RequestException as exc:
                raise EndpointCallError(self.service.name, operation, str(exc)) from exc
        raise EndpointCallError(self.service.name, operation, "no request was sent")

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        content_type = response.headers.get("Content-Type", "")
        if "json" in content_type:
            return response.json()
        return response.text
