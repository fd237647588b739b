"""Runtime context shared with plugins."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from wsclient_core.hooks import HookRegistry

from .manifest import PluginManifest


@dataclass(frozen=True)
class PluginContext:
    """What a plugin entrypoint receives in ``init(ctx)``."""

    manifest: PluginManifest
    plugin_root: Path
    workspace_root: Path
    hooks: HookRegistry
    logger: logging.Logger
