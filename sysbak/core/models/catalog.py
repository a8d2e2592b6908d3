"""
Catalog models — availability snapshot, package catalog, install report.

    AvailabilityMap   which managers answered their probe on this host
    Catalog           manager → installed package names, in listing order
    InstallReport     outcome of replaying a catalog on a host
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from sysbak.core.errors import CatalogError
from sysbak.core.models.manager import ManagerId

logger = logging.getLogger(__name__)

_PACKAGE_LIST = TypeAdapter(list[str])


class AvailabilityMap(BaseModel):
    """Snapshot of manager availability, captured once per run."""

    model_config = ConfigDict(frozen=True)

    managers: dict[ManagerId, bool] = Field(default_factory=dict)

    def is_available(self, manager: ManagerId) -> bool:
        return self.managers.get(manager, False)

    def available(self) -> list[ManagerId]:
        """Available managers, in detection order."""
        return [m for m, present in self.managers.items() if present]

    @property
    def any_available(self) -> bool:
        return any(self.managers.values())

    def to_dict(self) -> dict:
        return {
            "detected_package_managers": {
                m.value: present for m, present in self.managers.items()
            },
        }


class NoManagersDetected(BaseModel):
    """Aggregation ran, but no package manager was available to list.

    Returned instead of an empty Catalog so callers can tell
    "checked, nothing found" from "never checked".
    """

    model_config = ConfigDict(frozen=True)

    message: str = "No package managers detected or no packages listed."

    def to_dict(self) -> dict:
        return {"message": self.message}


class Catalog(BaseModel):
    """Installed package names grouped by manager.

    A key being present means the manager was available when the
    catalog was built; it says nothing about the host the catalog is
    later replayed on.
    """

    packages: dict[ManagerId, list[str]] = Field(default_factory=dict)

    def add(self, manager: ManagerId, names: list[str]) -> None:
        self.packages[manager] = list(names)

    def managers(self) -> list[ManagerId]:
        return list(self.packages)

    @property
    def total(self) -> int:
        return sum(len(names) for names in self.packages.values())

    def to_document(self) -> dict[str, list[str]]:
        """The persisted shape: manager id → package names."""
        return {m.value: list(names) for m, names in self.packages.items()}

    @classmethod
    def from_document(cls, data: Any) -> Catalog:
        """Build a Catalog from a decoded JSON document.

        Raises:
            CatalogError: If the document is not an object of string arrays.
        """
        if not isinstance(data, dict):
            raise CatalogError(
                f"Expected a JSON object of package lists, got {type(data).__name__}"
            )

        catalog = cls()
        for key, value in data.items():
            try:
                manager = ManagerId(key)
            except ValueError:
                logger.warning("Skipping unknown package manager '%s' in catalog", key)
                continue
            try:
                names = _PACKAGE_LIST.validate_python(value, strict=True)
            except ValidationError as e:
                raise CatalogError(
                    f"Package list for '{key}' must be an array of strings: {e}"
                ) from e
            catalog.add(manager, names)
        return catalog


@dataclass(frozen=True)
class PackageRef:
    """One package as known to one manager."""

    name: str
    manager: ManagerId

    def __str__(self) -> str:
        return f"{self.name} ({self.manager.value})"


@dataclass
class InstallReport:
    """Three-way result of reconciling a host against a catalog.

    Every pair whose manager is available lands in exactly one of
    already_installed / newly_installed / failed. Pairs whose manager is
    unavailable land in none; the manager is listed in skipped_managers.
    """

    already_installed: list[PackageRef] = field(default_factory=list)
    newly_installed: list[PackageRef] = field(default_factory=list)
    failed: list[PackageRef] = field(default_factory=list)
    skipped_managers: list[ManagerId] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.already_installed) + len(self.newly_installed) + len(self.failed)

    @property
    def all_ok(self) -> bool:
        return not self.failed

    @property
    def status(self) -> str:
        if not self.failed:
            return "ok"
        if self.already_installed or self.newly_installed:
            return "partial"
        return "failed"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "total": self.total,
            "already_installed": [str(p) for p in self.already_installed],
            "newly_installed": [str(p) for p in self.newly_installed],
            "failed": [str(p) for p in self.failed],
            "skipped_managers": [m.value for m in self.skipped_managers],
        }
