"""
Restore use case — install everything a saved catalog lists.

Loads the catalog document, detects this host's managers, reconciles
and records the run in the audit ledger.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from sysbak.adapters.base import Adapter
from sysbak.core.config.loader import SysbakConfig
from sysbak.core.errors import CatalogNotFoundError, SysbakError
from sysbak.core.models.catalog import AvailabilityMap, InstallReport
from sysbak.core.persistence.audit import AuditEntry, AuditWriter, generate_operation_id
from sysbak.core.persistence.catalog_file import load_catalog
from sysbak.core.services.detection import detect_package_managers
from sysbak.core.services.reconcile import ProgressCallback, reconcile

logger = logging.getLogger(__name__)


@dataclass
class RestoreResult:
    """Result of the restore use case."""

    report: InstallReport | None = None
    availability: AvailabilityMap | None = None
    catalog_path: Path | None = None
    operation_id: str = ""
    catalog_missing: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}

        result: dict = {
            "operation_id": self.operation_id,
            "catalog_path": str(self.catalog_path),
        }
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def run_restore(
    config: SysbakConfig,
    adapter: Adapter,
    on_progress: ProgressCallback | None = None,
) -> RestoreResult:
    """Reconcile this host against the saved catalog.

    Args:
        config: Settings (catalog location, elevation, audit).
        adapter: Adapter used for probes, checks and installs.
        on_progress: Optional per-package notification.

    Returns:
        RestoreResult. Catalog and detection errors are returned in
        ``error``; per-package failures are in the report.
    """
    result = RestoreResult(
        catalog_path=config.catalog_path,
        operation_id=generate_operation_id("install"),
    )
    start = time.monotonic()

    try:
        catalog = load_catalog(config.catalog_path)
    except CatalogNotFoundError as e:
        result.catalog_missing = True
        result.error = str(e)
        return result
    except SysbakError as e:
        result.error = str(e)
        return result

    logger.info("Starting package installation process...")
    result.availability = detect_package_managers(adapter)
    report = reconcile(
        catalog,
        result.availability,
        adapter,
        elevation=config.elevation,
        on_progress=on_progress,
    )
    result.report = report

    if config.audit:
        AuditWriter(config.audit_path).write(AuditEntry(
            operation_id=result.operation_id,
            operation_type="install",
            managers=[m.value for m in catalog.managers() if m not in report.skipped_managers],
            status=report.status,
            packages_total=report.total,
            already_installed=len(report.already_installed),
            newly_installed=len(report.newly_installed),
            failed=len(report.failed),
            duration_ms=int((time.monotonic() - start) * 1000),
            errors=[f"Failed to install {ref}" for ref in report.failed],
            context={"skipped_managers": [m.value for m in report.skipped_managers]},
        ))

    return result
