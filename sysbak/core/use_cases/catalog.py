"""
Catalog use cases — list what is installed, and save it.

Ties together detection, per-manager listing, the catalog file and
the audit ledger.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from sysbak.adapters.base import Adapter
from sysbak.core.config.loader import SysbakConfig
from sysbak.core.errors import SysbakError
from sysbak.core.models.catalog import AvailabilityMap, Catalog, NoManagersDetected
from sysbak.core.persistence.audit import AuditEntry, AuditWriter, generate_operation_id
from sysbak.core.persistence.catalog_file import save_catalog
from sysbak.core.services.detection import detect_package_managers
from sysbak.core.services.listing import aggregate_packages

logger = logging.getLogger(__name__)


@dataclass
class ListResult:
    """Result of listing every available manager."""

    availability: AvailabilityMap | None = None
    catalog: Catalog | NoManagersDetected | None = None
    error: str | None = None

    @property
    def nothing_detected(self) -> bool:
        return isinstance(self.catalog, NoManagersDetected)

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        if isinstance(self.catalog, Catalog):
            return self.catalog.to_document()
        if self.catalog is not None:
            return self.catalog.to_dict()
        return {}


@dataclass
class SaveResult:
    """Result of saving the catalog document."""

    path: Path | None = None
    catalog: Catalog | None = None
    saved: bool = False
    message: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        result: dict = {"saved": self.saved, "path": str(self.path)}
        if self.catalog is not None:
            result["managers"] = [m.value for m in self.catalog.managers()]
            result["packages"] = self.catalog.total
        if self.message:
            result["message"] = self.message
        return result


def run_list(adapter: Adapter) -> ListResult:
    """Detect package managers and list every available one."""
    result = ListResult()
    try:
        result.availability = detect_package_managers(adapter)
        result.catalog = aggregate_packages(result.availability, adapter)
    except SysbakError as e:
        result.error = str(e)
    return result


def run_save(config: SysbakConfig, adapter: Adapter) -> SaveResult:
    """List every available manager and write the catalog document.

    When no manager is available nothing is written: an empty document
    would later be indistinguishable from a host with no packages.
    """
    result = SaveResult(path=config.catalog_path)
    operation_id = generate_operation_id("save")
    start = time.monotonic()

    listing = run_list(adapter)
    if listing.error:
        result.error = listing.error
    elif isinstance(listing.catalog, Catalog):
        result.catalog = listing.catalog
        try:
            save_catalog(listing.catalog, config.catalog_path)
            result.saved = True
        except SysbakError as e:
            result.error = str(e)
    elif listing.catalog is not None:
        result.message = listing.catalog.message

    if config.audit:
        catalog = result.catalog
        AuditWriter(config.audit_path).write(AuditEntry(
            operation_id=operation_id,
            operation_type="save",
            managers=[m.value for m in catalog.managers()] if catalog else [],
            status="ok" if result.saved else "failed" if result.error else "skipped",
            packages_total=catalog.total if catalog else 0,
            duration_ms=int((time.monotonic() - start) * 1000),
            errors=[result.error] if result.error else [],
        ))

    return result
