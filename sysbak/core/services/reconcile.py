"""
Reconciler — replay a saved catalog onto the current host.

Flow:
    availability + catalog → per manager: skip or
        per package: installed-check → already installed
                                      → install → newly installed | failed
    → InstallReport

No rollback. Every package is handled independently, in catalog order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sysbak.adapters.base import Adapter
from sysbak.core.models.catalog import (
    AvailabilityMap,
    Catalog,
    InstallReport,
    PackageRef,
)
from sysbak.core.services.install import install_package, is_installed

logger = logging.getLogger(__name__)

# Called as (package, outcome) where outcome is one of
# "already_installed", "newly_installed", "failed".
ProgressCallback = Callable[[PackageRef, str], None]


def reconcile(
    catalog: Catalog,
    availability: AvailabilityMap,
    adapter: Adapter,
    elevation: list[str] | None = None,
    on_progress: ProgressCallback | None = None,
) -> InstallReport:
    """Install every catalog package missing from the host.

    Args:
        catalog: Target state, usually loaded from the catalog document.
        availability: Managers available on this host.
        adapter: Adapter used for checks and installs.
        elevation: Privilege wrapper for managers that need root.
        on_progress: Optional per-package notification.

    Returns:
        InstallReport partitioning every pair of an available manager.
    """
    report = InstallReport()

    for manager in catalog.managers():
        if not availability.is_available(manager):
            logger.info(
                "Skipping package manager '%s' (not detected on this system).", manager,
            )
            report.skipped_managers.append(manager)
            continue

        logger.info("Processing packages for %s...", manager)
        for name in catalog.packages[manager]:
            ref = PackageRef(name=name, manager=manager)

            if is_installed(manager, name, adapter):
                report.already_installed.append(ref)
                outcome = "already_installed"
            elif install_package(manager, name, adapter, elevation=elevation):
                report.newly_installed.append(ref)
                outcome = "newly_installed"
            else:
                report.failed.append(ref)
                outcome = "failed"

            if on_progress is not None:
                on_progress(ref, outcome)

    logger.info(
        "Reconciled %d packages: %d already installed, %d installed, %d failed",
        report.total,
        len(report.already_installed),
        len(report.newly_installed),
        len(report.failed),
    )
    return report
