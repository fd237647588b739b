"""Service description records and their YAML representation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from .errors import InvalidServiceDescriptionError

_NAME_PATTERN = re.compile(r"^[a-z0-9_]+$")


class ServiceStatus(Enum):
    """Where a service description comes from."""

    CUSTOM = "custom"
    DEFAULT = "default"
    OVERRIDDEN = "overridden"


def is_valid_name(name: Any) -> bool:
    return isinstance(name, str) and bool(_NAME_PATTERN.match(name))


def _ensure_mapping(label: str, data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return {str(key): value for key, value in data.items()}
    raise InvalidServiceDescriptionError(f"expected mapping for {label}")


@dataclass
class ServiceDescription:
    """One configured remote web service."""

    name: str
    label: str
    url: str
    type: str
    id: str | None = None
    operations: dict[str, dict[str, Any]] = field(default_factory=dict)
    settings: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    module: str | None = None
    status: ServiceStatus = ServiceStatus.CUSTOM

    def validate(self) -> None:
        if not is_valid_name(self.name):
            raise InvalidServiceDescriptionError(
                f"invalid service name {self.name!r}; use lowercase letters, digits and '_'"
            )
        if not self.url:
            raise InvalidServiceDescriptionError(f"service {self.name!r} has no url")
        if not self.type:
            raise InvalidServiceDescriptionError(f"service {self.name!r} has no endpoint type")

    @classmethod
    def from_dict(cls, id: str | None, data: Mapping[str, Any]) -> "ServiceDescription":
        raw = _ensure_mapping("service description", data)
        try:
            name = str(raw["name"])
            url = str(raw["url"])
        except KeyError as exc:
            raise InvalidServiceDescriptionError(f"missing '{exc.args[0]}' in service record") from exc

        operations: dict[str, dict[str, Any]] = {}
        for op_name, op_data in _ensure_mapping("operations", raw.get("operations")).items():
            operations[op_name] = _ensure_mapping(f"operation {op_name}", op_data)

        label = raw.get("label", name)
        module = raw.get("module")
        return cls(
            id=id,
            name=name,
            label="" if label is None else str(label),
            url=url,
            type=str(raw.get("type", "rest")),
            operations=operations,
            settings=_ensure_mapping("settings", raw.get("settings")),
            extra=_ensure_mapping("extra", raw.get("extra")),
            module=str(module) if module is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "url": self.url,
            "type": self.type,
        }
        if self.operations:
            data["operations"] = self.operations
        if self.settings:
            data["settings"] = self.settings
        if self.extra:
            data["extra"] = self.extra
        if self.module is not None:
            data["module"] = self.module
        return data
