"""Unit tests for endpoint type definitions and the registry."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import pytest

from wsclient_core.api import EndpointBase, endpoint_type
from wsclient_core.endpoints import (
    EndpointTypeDefinition,
    EndpointTypeDefinitionError,
    EndpointTypeNotFoundError,
    EndpointTypeRegistry,
    EndpointTypeRegistryFrozenError,
)
from wsclient_core.hooks import ENDPOINT_TYPES, ENDPOINT_TYPES_ALTER, HookRegistry


class _DummyEndpoint(EndpointBase):
    def call(self, operation: str, arguments: Mapping[str, Any]) -> Any:
        return operation


class _OtherEndpoint(_DummyEndpoint):
    pass


def _definition(name: str, *, origin: str = "core", implementation=_DummyEndpoint) -> EndpointTypeDefinition:
    return EndpointTypeDefinition(
        name=name,
        label=name.upper(),
        implementation=implementation,
        origin=origin,
    )


def test_definition_requires_endpoint_subclass() -> None:
    with pytest.raises(EndpointTypeDefinitionError):
        EndpointTypeDefinition(name="rest", label="REST", implementation=object)


def test_definition_requires_label() -> None:
    with pytest.raises(EndpointTypeDefinitionError):
        EndpointTypeDefinition(name="rest", label=" ", implementation=_DummyEndpoint)


def test_definition_from_mapping_accepts_class_key() -> None:
    definition = EndpointTypeDefinition.from_mapping(
        "soap", {"label": "SOAP", "class": _DummyEndpoint}, origin="plugin"
    )
    assert definition.name == "soap"
    assert definition.implementation is _DummyEndpoint
    assert definition.origin == "plugin"

    with pytest.raises(EndpointTypeDefinitionError):
        EndpointTypeDefinition.from_mapping("soap", {"label": "SOAP"})


def test_register_duplicate_name_last_writer_wins(caplog: pytest.LogCaptureFixture) -> None:
    registry = EndpointTypeRegistry()
    registry.register({"rest": _definition("rest", origin="core")})

    with caplog.at_level(logging.WARNING):
        registry.register({"rest": _definition("rest", origin="plugin", implementation=_OtherEndpoint)})

    resolved = registry.resolve("rest")
    assert resolved.origin == "plugin"
    assert resolved.implementation is _OtherEndpoint
    assert "overrides" in caplog.text
    assert registry.names() == ("rest",)


def test_register_rejects_mismatched_key() -> None:
    registry = EndpointTypeRegistry()
    with pytest.raises(EndpointTypeDefinitionError):
        registry.register({"soap": _definition("rest")})


def test_alter_replaces_merged_set() -> None:
    registry = EndpointTypeRegistry()
    registry.register({"rest": _definition("rest"), "soap": _definition("soap")})

    registry.alter(lambda snapshot: {name: d for name, d in snapshot.items() if name != "soap"})

    assert registry.names() == ("rest",)
    with pytest.raises(EndpointTypeNotFoundError):
        registry.resolve("soap")


def test_freeze_blocks_further_changes() -> None:
    registry = EndpointTypeRegistry()
    registry.register({"rest": _definition("rest")})
    registry.freeze()

    assert registry.frozen
    with pytest.raises(EndpointTypeRegistryFrozenError):
        registry.register({"soap": _definition("soap")})
    with pytest.raises(EndpointTypeRegistryFrozenError):
        registry.alter(lambda snapshot: snapshot)


def test_definitions_view_is_read_only() -> None:
    registry = EndpointTypeRegistry()
    registry.register({"rest": _definition("rest")})
    view = registry.definitions()
    with pytest.raises(TypeError):
        view["soap"] = _definition("soap")  # type: ignore[index]


def test_collect_runs_hooks_alters_and_freezes() -> None:
    hooks = HookRegistry()
    hooks.implement(ENDPOINT_TYPES, lambda: {"rest": {"label": "REST", "class": _DummyEndpoint}})
    hooks.implement(ENDPOINT_TYPES, lambda: {"soap": _definition("soap", origin="plugin")})
    hooks.implement(ENDPOINT_TYPES, lambda: None)

    def relabel(snapshot):
        altered = dict(snapshot)
        altered["rest"] = EndpointTypeDefinition(
            name="rest",
            label="REST (altered)",
            implementation=snapshot["rest"].implementation,
            origin=snapshot["rest"].origin,
        )
        return altered

    hooks.implement(ENDPOINT_TYPES_ALTER, relabel)

    registry = EndpointTypeRegistry()
    registry.collect(hooks)

    assert registry.frozen
    assert registry.names() == ("rest", "soap")
    assert registry.resolve("rest").label == "REST (altered)"
    assert registry.resolve("soap").origin == "plugin"


def test_collect_keeps_names_unique_after_alteration() -> None:
    hooks = HookRegistry()
    hooks.implement(ENDPOINT_TYPES, lambda: {"rest": _definition("rest")})
    hooks.implement(ENDPOINT_TYPES, lambda: {"rest": _definition("rest", origin="late")})
    hooks.implement(
        ENDPOINT_TYPES_ALTER,
        lambda snapshot: {**snapshot, "webhook": _definition("webhook")},
    )

    registry = EndpointTypeRegistry()
    registry.collect(hooks)

    names = [definition.name for definition in registry.definitions().values()]
    assert len(names) == len(set(names))
    assert registry.resolve("rest").origin == "late"


def test_endpoint_type_decorator_marks_class() -> None:
    @endpoint_type(name="echo", label="Echo")
    class EchoEndpoint(_DummyEndpoint):
        pass

    assert EchoEndpoint.__wsclient_endpoint__ == {"name": "echo", "label": "Echo"}

    with pytest.raises(TypeError):
        endpoint_type(object)
