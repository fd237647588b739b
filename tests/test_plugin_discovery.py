"""Integration tests for plugin discovery and error isolation."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from wsclient_core.endpoints import EndpointTypeNotFoundError, EndpointTypeRegistry
from wsclient_core.hooks import DEFAULT_SERVICES, HookRegistry
from wsclient_core.plugin import (
    PluginManager,
    PluginManifest,
    PluginManifestError,
    PluginStatus,
)

FIXTURE_ROOT = Path(__file__).parent / "fixtures" / "plugins"


def _copy_fixture(name: str, destination: Path) -> None:
    shutil.copytree(FIXTURE_ROOT / name, destination)


def _build_manager(tmp_path: Path, hooks: HookRegistry | None = None) -> PluginManager:
    return PluginManager(
        hooks or HookRegistry(),
        search_path=(
            ("workspace", tmp_path / "workspace_plugins"),
            ("user", tmp_path / "user_plugins"),
        ),
        workspace_root=tmp_path,
    )


def test_missing_plugin_directories_load_nothing(tmp_path: Path) -> None:
    manager = _build_manager(tmp_path)

    assert manager.load() == ()
    assert manager.ids() == ()
    assert manager.get("sample_plugin") is None


def test_sample_plugin_contributes_hooks_and_endpoint_types(tmp_path: Path) -> None:
    _copy_fixture("sample_plugin", tmp_path / "workspace_plugins" / "sample_plugin")
    hooks = HookRegistry()

    manager = _build_manager(tmp_path, hooks)
    manager.load()

    assert manager.ids() == ("sample_plugin",)
    plugin = manager.get("sample_plugin")
    assert plugin.status == PluginStatus.LOADED
    assert plugin.source == "workspace"
    assert [definition.name for definition in plugin.endpoint_types] == ["sample_echo"]

    registry = EndpointTypeRegistry()
    registry.collect(hooks)
    definition = registry.resolve("sample_echo")
    assert definition.origin == "sample_plugin"
    assert definition.label == "Sample echo"
    assert len(hooks.implementations(DEFAULT_SERVICES)) == 1


def test_load_runs_plugins_once(tmp_path: Path) -> None:
    _copy_fixture("sample_plugin", tmp_path / "workspace_plugins" / "sample_plugin")
    hooks = HookRegistry()
    manager = _build_manager(tmp_path, hooks)

    first = manager.load()
    assert manager.load() == first
    assert len(hooks.implementations(DEFAULT_SERVICES)) == 1


def test_workspace_plugin_shadows_user_plugin(tmp_path: Path) -> None:
    _copy_fixture(
        "override_workspace/override_plugin",
        tmp_path / "workspace_plugins" / "override_plugin",
    )
    _copy_fixture("override_user/override_plugin", tmp_path / "user_plugins" / "override_plugin")
    hooks = HookRegistry()

    manager = _build_manager(tmp_path, hooks)
    manager.load()

    assert manager.ids() == ("override_plugin",)
    plugin = manager.get("override_plugin")
    assert plugin.source == "workspace"
    assert plugin.status == PluginStatus.LOADED

    registry = EndpointTypeRegistry()
    registry.collect(hooks)
    assert registry.resolve("override_workspace").origin == "override_plugin"
    with pytest.raises(EndpointTypeNotFoundError):
        registry.resolve("override_user")


def test_failing_plugin_does_not_block_startup(tmp_path: Path) -> None:
    _copy_fixture("failing_plugin", tmp_path / "workspace_plugins" / "failing_plugin")
    _copy_fixture("sample_plugin", tmp_path / "user_plugins" / "sample_plugin")

    manager = _build_manager(tmp_path)
    manager.load()

    assert manager.ids() == ("failing_plugin", "sample_plugin")
    failed = manager.get("failing_plugin")
    assert failed.status == PluginStatus.FAILED
    assert "unable to initialize" in failed.error
    assert failed.endpoint_types == ()
    assert manager.get("sample_plugin").status == PluginStatus.LOADED


def test_folder_id_mismatch_is_skipped(tmp_path: Path) -> None:
    _copy_fixture("sample_plugin", tmp_path / "workspace_plugins" / "renamed")

    manager = _build_manager(tmp_path)
    manager.load()

    assert manager.ids() == ()


def test_malformed_entrypoint_is_recorded_as_failure(tmp_path: Path) -> None:
    folder = tmp_path / "workspace_plugins" / "broken"
    folder.mkdir(parents=True)
    (folder / "plugin.toml").write_text(
        '[plugin]\nid = "broken"\nname = "Broken"\nversion = "0.1.0"\n'
        'entrypoint = "broken_entry"\nrequires_wsclient = ">=0.1"\n',
        encoding="utf-8",
    )

    manager = _build_manager(tmp_path)
    manager.load()

    broken = manager.get("broken")
    assert broken.status == PluginStatus.FAILED
    assert "module:attribute" in broken.error


def test_manifest_requires_all_fields(tmp_path: Path) -> None:
    manifest = tmp_path / "plugin.toml"
    manifest.write_text('[plugin]\nid = "x"\nname = "X"\n', encoding="utf-8")
    with pytest.raises(PluginManifestError):
        PluginManifest.load(manifest)

    manifest.write_text("not = [valid", encoding="utf-8")
    with pytest.raises(PluginManifestError):
        PluginManifest.load(manifest)
