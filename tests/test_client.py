"""Tests for resolving services to endpoints and invoking operations."""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping

import pytest

from wsclient_core.api import EndpointBase, EndpointOptions
from wsclient_core.client import ServiceClient
from wsclient_core.descriptions import (
    DefaultServiceProvider,
    OperationNotFoundError,
    ServiceCatalog,
    ServiceDescription,
    ServiceDescriptionStore,
    ServiceNotFoundError,
)
from wsclient_core.endpoints import (
    EndpointTypeDefinition,
    EndpointTypeNotFoundError,
    EndpointTypeRegistry,
)
from wsclient_core.hooks import HookRegistry


class RecordingEndpoint(EndpointBase):
    instances: list["RecordingEndpoint"] = []

    def __init__(self, service, options=None) -> None:
        super().__init__(service, options)
        self.cleared = False
        RecordingEndpoint.instances.append(self)

    def call(self, operation: str, arguments: Mapping[str, Any]) -> Any:
        return {"service": self.service.name, "operation": operation, "arguments": dict(arguments)}

    def clear_cache(self) -> None:
        self.cleared = True


@pytest.fixture(autouse=True)
def _reset_instances():
    RecordingEndpoint.instances.clear()
    yield
    RecordingEndpoint.instances.clear()


def _client(*, options: EndpointOptions | None = None) -> ServiceClient:
    hooks = HookRegistry()
    store = ServiceDescriptionStore(hooks)
    store.insert(
        ServiceDescription(
            name="master",
            label="Master",
            url="http://master.example.com",
            type="recording",
            operations={"ping": {"label": "Ping", "parameters": {"value": {"type": "text"}}}},
        )
    )
    store.insert(
        ServiceDescription(name="orphan", label="Orphan", url="http://x.example.com", type="soap")
    )
    registry = EndpointTypeRegistry()
    registry.register(
        {
            "recording": EndpointTypeDefinition(
                name="recording", label="Recording", implementation=RecordingEndpoint
            )
        }
    )
    registry.freeze()
    catalog = ServiceCatalog(store, DefaultServiceProvider(hooks))
    return ServiceClient(catalog, registry, options=options)


def test_invoke_delegates_to_endpoint() -> None:
    client = _client()
    result = client.invoke("master", "ping", {"value": "1"})
    assert result == {"service": "master", "operation": "ping", "arguments": {"value": "1"}}


def test_endpoint_is_cached_and_receives_options() -> None:
    options = EndpointOptions(timeout=2.5, max_retries=4)
    client = _client(options=options)

    first = client.endpoint("master")
    assert client.endpoint("master") is first
    assert first.options == options
    assert len(RecordingEndpoint.instances) == 1


def test_unknown_operation_is_rejected() -> None:
    client = _client()
    with pytest.raises(OperationNotFoundError):
        client.invoke("master", "missing")


def test_unknown_service_and_type_raise() -> None:
    client = _client()
    with pytest.raises(ServiceNotFoundError):
        client.invoke("missing", "ping")
    with pytest.raises(EndpointTypeNotFoundError):
        client.endpoint("orphan")


def test_action_info_describes_operations() -> None:
    client = _client()
    assert client.endpoint("master").action_info() == {
        "ping": {"label": "Ping", "parameters": {"value": {"type": "text"}}}
    }


def test_forget_and_clear_cache_drop_endpoints() -> None:
    client = _client()
    first = client.endpoint("master")

    client.forget("master")
    assert first.cleared
    second = client.endpoint("master")
    assert second is not first

    client.clear_cache()
    assert second.cleared
    assert client.endpoint("master") is not second


def test_updated_description_is_used_after_forget() -> None:
    client = _client()
    client.endpoint("master")
    stored = client.catalog.store.load_by_name("master")
    client.catalog.store.update(dataclasses.replace(stored, url="http://new.example.com"))

    client.forget("master")
    assert client.endpoint("master").service.url == "http://new.example.com"
