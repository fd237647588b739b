"""Command line surface for managing and invoking web services."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Sequence

import yaml

from wsclient_core.app import WSClientApp
from wsclient_core.descriptions import (
    ServiceDescription,
    ServiceDescriptionError,
    ServiceStatus,
)
from wsclient_core.endpoints import EndpointCallError, EndpointTypeError
from wsclient_core.workspace import WorkspaceResolver

CLI_VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wsclient",
        description="wsclient: configure remote web services and invoke their operations.",
    )
    parser.add_argument("--version", action="version", version=f"wsclient v{CLI_VERSION}")
    parser.add_argument("--dir", dest="start_dir", default=None, help="directory to start workspace lookup from")
    parser.add_argument("--log-level", dest="log_level", default=None, help="logging level (e.g. DEBUG)")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = False

    status_cmd = subparsers.add_parser("status", help="show workspace, plugins and services")
    status_cmd.set_defaults(func=_handle_status)

    types_cmd = subparsers.add_parser("types", help="list registered endpoint types")
    types_cmd.set_defaults(func=_handle_types)

    services = subparsers.add_parser("services", help="manage service descriptions")
    services_sub = services.add_subparsers(dest="services_cmd", required=True)

    list_cmd = services_sub.add_parser("list", help="list default and stored services")
    list_cmd.set_defaults(func=_handle_services_list)

    show_cmd = services_sub.add_parser("show", help="print one service description")
    show_cmd.add_argument("name", help="service name")
    show_cmd.set_defaults(func=_handle_services_show)

    add = services_sub.add_parser("add", help="create or update a service description")
    add.add_argument("--name", required=True, help="machine name (lowercase, digits, '_')")
    add.add_argument("--label", help="human readable label")
    add.add_argument("--url", required=True, help="service base URL")
    add.add_argument("--type", default=None, help="endpoint type (default: rest, or the stored type)")
    add.add_argument(
        "--operation",
        action="append",
        default=[],
        help="operation as NAME=METHOD:PATH (repeatable)",
    )
    add.add_argument("--header", action="append", default=[], help="additional header (KEY=VALUE)")
    add.add_argument(
        "--auth-type",
        default="none",
        choices=["none", "basic", "bearer"],
        help="auth scheme (basic/bearer/none)",
    )
    add.add_argument("--auth-username", help="username for basic auth")
    add.add_argument("--auth-password", help="password for basic auth")
    add.add_argument("--auth-token", help="token for bearer auth")
    add.set_defaults(func=_handle_services_add)

    remove = services_sub.add_parser("remove", help="delete a stored service description")
    remove.add_argument("name", help="service name")
    remove.set_defaults(func=_handle_services_remove)

    revert = services_sub.add_parser("revert", help="drop the stored override of a default service")
    revert.add_argument("name", help="service name")
    revert.set_defaults(func=_handle_services_revert)

    invoke = subparsers.add_parser("invoke", help="invoke an operation of a service")
    invoke.add_argument("service", help="service name")
    invoke.add_argument("operation", help="operation name")
    invoke.add_argument("--arg", action="append", default=[], help="argument (KEY=VALUE)")
    invoke.set_defaults(func=_handle_invoke)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0
    return func(args)


def _configure_logging(args: argparse.Namespace) -> None:
    level = args.log_level
    if level is None:
        start = Path(args.start_dir) if args.start_dir else None
        level = WorkspaceResolver().resolve_setting("log_level", start_dir=start)
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.WARNING))


def _app(args: argparse.Namespace) -> WSClientApp:
    app = WSClientApp(start_dir=args.start_dir)
    app.bootstrap()
    return app


def _handle_status(args: argparse.Namespace) -> int:
    status = _app(args).bootstrap()
    print(f"[wsclient:status] workspace: {status.workspace}")
    print(f"[wsclient:status] plugins: {', '.join(status.plugins) or 'none'}")
    print(f"[wsclient:status] endpoint types: {', '.join(status.endpoint_types) or 'none'}")
    print(f"[wsclient:status] services: {', '.join(status.services) or 'none'}")
    return 0


def _handle_types(args: argparse.Namespace) -> int:
    app = _app(args)
    for name, definition in app.endpoint_types.definitions().items():
        print(
            f"[wsclient:types] {name}: {definition.label} "
            f"({definition.implementation.__name__}, origin={definition.origin})"
        )
    return 0


def _handle_services_list(args: argparse.Namespace) -> int:
    services = _app(args).catalog.all()
    if not services:
        print("[wsclient:services] no services configured")
        return 0
    for name, service in services.items():
        print(f"[wsclient:services] {name} ({service.type}) {service.url} [{service.status.value}]")
    return 0


def _handle_services_show(args: argparse.Namespace) -> int:
    app = _app(args)
    try:
        service = app.catalog.get(args.name)
    except ServiceDescriptionError as exc:
        print(f"[wsclient:services] error: {exc}")
        return 1
    document = {"id": service.id, "status": service.status.value, **service.to_dict()}
    print(yaml.safe_dump(document, sort_keys=False).rstrip())
    return 0


def _handle_services_add(args: argparse.Namespace) -> int:
    try:
        operations = _parse_operations(args.operation)
        headers = _parse_key_values(args.header)
    except ValueError as exc:
        print(f"[wsclient:services] error: {exc}")
        return 1

    settings: dict[str, Any] = {}
    if headers:
        settings["headers"] = headers
    auth = _build_auth(args)
    if auth:
        settings["auth"] = auth

    app = _app(args)
    existing = app.store.load_by_name(args.name)
    if existing is None:
        description = ServiceDescription(
            name=args.name,
            label=args.label or args.name,
            url=args.url,
            type=args.type or "rest",
            operations=operations,
            settings=settings,
        )
    else:
        description = dataclasses.replace(
            existing,
            label=args.label or existing.label,
            url=args.url,
            type=args.type or existing.type,
            operations=operations or existing.operations,
            settings={**existing.settings, **settings},
        )
    try:
        app.endpoint_types.resolve(description.type)
        saved = app.store.save(description)
    except (ServiceDescriptionError, EndpointTypeError) as exc:
        print(f"[wsclient:services] error: {exc}")
        return 1
    action = "updated" if existing else "created"
    print(f"[wsclient:services] service '{saved.name}' {action} (id={saved.id})")
    return 0


def _handle_services_remove(args: argparse.Namespace) -> int:
    app = _app(args)
    stored = app.store.load_by_name(args.name)
    if stored is None:
        print(f"[wsclient:services] error: service '{args.name}' is not stored")
        return 1
    app.store.delete(stored)
    print(f"[wsclient:services] service '{args.name}' removed")
    return 0


def _handle_services_revert(args: argparse.Namespace) -> int:
    app = _app(args)
    try:
        service = app.catalog.revert(args.name)
    except ServiceDescriptionError as exc:
        print(f"[wsclient:services] error: {exc}")
        return 1
    suffix = " (default)" if service.status == ServiceStatus.DEFAULT else ""
    print(f"[wsclient:services] service '{args.name}' reverted{suffix}")
    return 0


def _handle_invoke(args: argparse.Namespace) -> int:
    try:
        arguments = _parse_key_values(args.arg)
    except ValueError as exc:
        print(f"[wsclient:invoke] error: {exc}")
        return 1
    app = _app(args)
    try:
        result = app.client.invoke(args.service, args.operation, arguments)
    except (ServiceDescriptionError, EndpointTypeError, EndpointCallError) as exc:
        print(f"[wsclient:invoke] error: {exc}")
        return 1
    if isinstance(result, str):
        print(result)
    else:
        print(json.dumps(result, indent=2, sort_keys=True))
    return 0


def _parse_key_values(items: Sequence[str] | None) -> dict[str, str]:
    result: dict[str, str] = {}
    if not items:
        return result
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"invalid key=value pair: {entry}")
        key, value = entry.split("=", 1)
        result[key.strip()] = value.strip()
    return result


def _parse_operations(items: Sequence[str] | None) -> dict[str, dict[str, str]]:
    operations: dict[str, dict[str, str]] = {}
    for name, target in _parse_key_values(items).items():
        method, _, path = target.partition(":")
        if not method:
            raise ValueError(f"operation {name!r} needs METHOD:PATH")
        operations[name] = {"method": method.upper(), "path": path}
    return operations


def _build_auth(args: argparse.Namespace) -> dict[str, str] | None:
    if args.auth_type == "basic":
        return {
            "type": "basic",
            "username": args.auth_username or "",
            "password": args.auth_password or "",
        }
    if args.auth_type == "bearer":
        return {"type": "bearer", "token": args.auth_token or ""}
    return None
