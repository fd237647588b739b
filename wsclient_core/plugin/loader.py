"""Import a plugin package, run its entrypoint and collect its endpoint types."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
import sys
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType
from typing import Iterable, Iterator

from wsclient_core.api.decorators import METADATA_ATTRIBUTE
from wsclient_core.endpoints import EndpointTypeDefinition

from .context import PluginContext
from .errors import PluginLoadError


@contextmanager
def _importable(root: Path) -> Iterator[None]:
    entry = str(root)
    added = entry not in sys.path
    if added:
        sys.path.insert(0, entry)
    try:
        yield
    finally:
        if added and entry in sys.path:
            sys.path.remove(entry)


def _split_entrypoint(plugin_id: str, entrypoint: str) -> tuple[str, str]:
    module_name, _, attribute = entrypoint.partition(":")
    if not module_name or not attribute:
        raise PluginLoadError(
            f"entrypoint of plugin {plugin_id} must look like 'package.module:attribute'"
        )
    return module_name, attribute


def _run_entrypoint(context: PluginContext, module_name: str, attribute: str) -> None:
    plugin_id = context.manifest.id
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise PluginLoadError(f"plugin {plugin_id} cannot import {module_name}: {exc}") from exc
    target = getattr(module, attribute, None)
    if target is None:
        raise PluginLoadError(f"plugin {plugin_id}: {module_name} has no attribute {attribute!r}")
    try:
        if inspect.isclass(target):
            target().init(context)
        else:
            target(context)
    except Exception as exc:
        raise PluginLoadError(f"plugin {plugin_id} unable to initialize: {exc}") from exc


def _package_modules(package_name: str) -> Iterator[ModuleType]:
    package = importlib.import_module(package_name)
    yield package
    for info in pkgutil.walk_packages(getattr(package, "__path__", ()), prefix=f"{package_name}."):
        yield importlib.import_module(info.name)


def endpoint_types_in(
    modules: Iterable[ModuleType], *, origin: str
) -> tuple[EndpointTypeDefinition, ...]:
    """Definitions for every ``@endpoint_type`` class defined in ``modules``."""

    found: list[EndpointTypeDefinition] = []
    for module in modules:
        for _, candidate in inspect.getmembers(module, inspect.isclass):
            if candidate.__module__ != module.__name__:
                continue
            metadata = candidate.__dict__.get(METADATA_ATTRIBUTE)
            if metadata is None:
                continue
            found.append(
                EndpointTypeDefinition(
                    name=metadata["name"],
                    label=metadata["label"],
                    implementation=candidate,
                    origin=origin,
                )
            )
    return tuple(found)


def load_plugin(context: PluginContext) -> tuple[EndpointTypeDefinition, ...]:
    """Initialize the plugin described by ``context`` and return its endpoint types.

    The manifest entrypoint is ``module:attribute``. A class is instantiated
    and its ``init(ctx)`` called; any other callable is called with ``ctx``.
    Every module of the entrypoint's top-level package is then imported and
    scanned, so endpoint classes need not be referenced by the entrypoint.
    Any failure surfaces as :class:`PluginLoadError`.
    """

    manifest = context.manifest
    module_name, attribute = _split_entrypoint(manifest.id, manifest.entrypoint)
    with _importable(context.plugin_root):
        _run_entrypoint(context, module_name, attribute)
        package_name = module_name.partition(".")[0]
        try:
            return endpoint_types_in(_package_modules(package_name), origin=manifest.id)
        except Exception as exc:
            raise PluginLoadError(
                f"plugin {manifest.id} endpoint types could not be collected: {exc}"
            ) from exc
