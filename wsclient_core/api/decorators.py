"""Decorator that marks endpoint classes with endpoint type metadata."""

from __future__ import annotations

from typing import Any, Callable, Type

from .abc import EndpointBase

_EndpointCandidate = Type[Any]

METADATA_ATTRIBUTE = "__wsclient_endpoint__"


def _attach_endpoint_metadata(cls: type, *, name: str | None, label: str | None) -> type:
    if not isinstance(cls, type):
        raise TypeError("Decorated object must be a class.")
    if not issubclass(cls, EndpointBase):
        raise TypeError(
            f"{cls.__name__} must subclass EndpointBase to be registered as an endpoint type."
        )

    type_name = name or cls.__name__.lower()
    setattr(
        cls,
        METADATA_ATTRIBUTE,
        {"name": type_name, "label": label or cls.__name__},
    )
    return cls


def endpoint_type(
    cls: _EndpointCandidate | None = None,
    *,
    name: str | None = None,
    label: str | None = None,
) -> Callable[[_EndpointCandidate], _EndpointCandidate] | _EndpointCandidate:
    """Mark ``cls`` as an endpoint type, usable bare or with arguments."""

    def wrap(target: _EndpointCandidate) -> _EndpointCandidate:
        return _attach_endpoint_metadata(target, name=name, label=label)

    if cls is None:
        return wrap
    return wrap(cls)
