"""Handle plugin manifest parsing."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from .errors import PluginManifestError

MANIFEST_FILE_NAME = "plugin.toml"


@dataclass(frozen=True)
class PluginManifest:
    """Immutable representation of a ``plugin.toml`` document."""

    id: str
    name: str
    version: str
    entrypoint: str
    requires_wsclient: str

    @classmethod
    def load(cls, path: Path) -> "PluginManifest":
        try:
            with path.open("rb") as handle:
                document = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise PluginManifestError(f"unable to read manifest at {path}") from exc

        plugin_section = document.get("plugin")
        if not isinstance(plugin_section, dict):
            raise PluginManifestError("missing or malformed [plugin] section")

        fields: dict[str, str] = {}
        for key in ("id", "name", "version", "entrypoint", "requires_wsclient"):
            raw_value = plugin_section.get(key)
            if raw_value is None:
                raise PluginManifestError(f"missing '{key}' in manifest")
            if not isinstance(raw_value, str) or not raw_value.strip():
                raise PluginManifestError(f"'{key}' must be a non-empty string")
            fields[key] = raw_value.strip()

        return cls(**fields)
