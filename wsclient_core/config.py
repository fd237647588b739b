"""Settings read from the workspace ``config.toml``."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from platformdirs import user_config_dir

from wsclient_core.api.abc import EndpointOptions

DEFAULT_APP_NAME = "wsclient"
CONFIG_FILE_NAME = "config.toml"

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    """Return the platform-specific default config path."""

    base_dir = Path(user_config_dir(DEFAULT_APP_NAME, appauthor=False))
    return base_dir / CONFIG_FILE_NAME


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


@dataclass
class ConfigStore:
    """Dotted-key view over ``config.toml``; ``[http] timeout`` is ``http.timeout``."""

    path: Path = field(default_factory=default_config_path)
    _store: dict[str, Any] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self._store = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("rb") as handle:
                document = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.warning("ignoring unreadable config %s: %s", self.path, exc)
            return {}
        return _flatten(document)

    def get(self, key: str, default: Any | None = None) -> Any | None:
        return self._store.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    def endpoint_options(self) -> EndpointOptions:
        defaults = EndpointOptions()
        return EndpointOptions(
            timeout=float(self.get("http.timeout", defaults.timeout)),
            max_retries=int(self.get("http.max_retries", defaults.max_retries)),
        )
