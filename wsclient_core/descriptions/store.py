"""File-backed persistence for service descriptions with lifecycle hooks."""

from __future__ import annotations

import copy
import logging
import uuid
from pathlib import Path
from typing import Iterable

import yaml

from wsclient_core.hooks import (
    SERVICE_DELETE,
    SERVICE_INSERT,
    SERVICE_LOAD,
    SERVICE_PRESAVE,
    SERVICE_UPDATE,
    HookRegistry,
)

from .errors import DuplicateServiceError, ServiceNotFoundError
from .models import ServiceDescription, ServiceStatus

SERVICES_FILENAME = "services.yml"

logger = logging.getLogger(__name__)


class ServiceDescriptionStore:
    """Owns the persisted service descriptions; callers only ever see copies.

    Records live in ``services.yml`` keyed by id. Without a path the store
    keeps its records in memory only.
    """

    def __init__(self, hooks: HookRegistry, path: Path | str | None = None) -> None:
        self.hooks = hooks
        self.path = Path(path).expanduser() if path is not None else None
        self._records: dict[str, ServiceDescription] = self._read()

    def _read(self) -> dict[str, ServiceDescription]:
        if self.path is None or not self.path.exists():
            return {}
        raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        services_raw = raw.get("services") or {}
        records: dict[str, ServiceDescription] = {}
        for service_id, data in services_raw.items():
            records[str(service_id)] = ServiceDescription.from_dict(str(service_id), data)
        return records

    def _commit(self, records: dict[str, ServiceDescription]) -> None:
        """Serialize and write ``records``; in-memory state changes only on success."""

        payload = {
            "services": {
                service_id: record.to_dict()
                for service_id, record in records.items()
            }
        }
        text = yaml.safe_dump(payload, sort_keys=False)
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        self._records = records

    @staticmethod
    def _copy(record: ServiceDescription) -> ServiceDescription:
        duplicate = copy.deepcopy(record)
        duplicate.status = ServiceStatus.CUSTOM
        return duplicate

    # ---------- Reading ----------

    def load(self, ids: Iterable[str] | None = None) -> dict[str, ServiceDescription]:
        """Return copies of the requested records, enriched by load observers."""

        if ids is None:
            selected = list(self._records)
        else:
            selected = [service_id for service_id in ids if service_id in self._records]
        services = {service_id: self._copy(self._records[service_id]) for service_id in selected}
        if services:
            self.hooks.invoke(SERVICE_LOAD, services)
        return services

    def load_by_name(self, name: str) -> ServiceDescription | None:
        for service_id, record in self._records.items():
            if record.name == name:
                return self.load([service_id])[service_id]
        return None

    def ids(self) -> tuple[str, ...]:
        return tuple(self._records)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._records

    # ---------- Writing ----------

    def presave(self, description: ServiceDescription) -> None:
        """Let observers adjust ``description`` right before it is written."""

        self.hooks.invoke(SERVICE_PRESAVE, description)

    def save(self, description: ServiceDescription) -> ServiceDescription:
        if description.id is not None and description.id in self._records:
            return self.update(description)
        return self.insert(description)

    def insert(self, description: ServiceDescription) -> ServiceDescription:
        """Write a new record and notify ``service_insert`` observers."""

        description.validate()
        record = self._copy(description)
        self.presave(record)
        record.validate()
        if record.id is None:
            record.id = uuid.uuid4().hex
        if record.id in self._records:
            raise DuplicateServiceError(f"service id {record.id!r} already exists")
        self._ensure_unique_name(record)

        self._commit({**self._records, record.id: self._copy(record)})
        logger.info("inserted service %s (%s)", record.name, record.id)
        self.hooks.invoke(SERVICE_INSERT, record)
        return record

    def update(self, description: ServiceDescription) -> ServiceDescription:
        """Overwrite an existing record and notify ``service_update`` observers."""

        description.validate()
        if description.id is None or description.id not in self._records:
            raise ServiceNotFoundError(f"service id {description.id!r} does not exist")
        record = self._copy(description)
        self.presave(record)
        record.validate()
        self._ensure_unique_name(record)

        self._commit({**self._records, record.id: self._copy(record)})
        logger.info("updated service %s (%s)", record.name, record.id)
        self.hooks.invoke(SERVICE_UPDATE, record)
        return record

    def delete(self, description: ServiceDescription | str) -> ServiceDescription:
        """Remove a record and notify ``service_delete`` observers."""

        service_id = description if isinstance(description, str) else description.id
        record = self._records.get(service_id) if service_id is not None else None
        if record is None:
            raise ServiceNotFoundError(f"service id {service_id!r} does not exist")
        self._commit({key: value for key, value in self._records.items() if key != service_id})
        logger.info("deleted service %s (%s)", record.name, service_id)
        removed = self._copy(record)
        self.hooks.invoke(SERVICE_DELETE, removed)
        return removed

    def _ensure_unique_name(self, record: ServiceDescription) -> None:
        for service_id, existing in self._records.items():
            if existing.name == record.name and service_id != record.id:
                raise DuplicateServiceError(
                    f"service name {record.name!r} is already used by {service_id!r}"
                )
