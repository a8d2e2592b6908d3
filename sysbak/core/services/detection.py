"""
Package manager detection.

Read-only probes: each manager's binary is asked for its version.
A manager is available when the probe spawns and exits 0. Detection
is total over the registry and never raises.
"""

from __future__ import annotations

import logging

from sysbak.adapters.base import Adapter
from sysbak.core.models.catalog import AvailabilityMap
from sysbak.core.services.package_managers import PACKAGE_MANAGERS

logger = logging.getLogger(__name__)


def detect_package_managers(adapter: Adapter) -> AvailabilityMap:
    """Probe every known package manager on the host.

    Args:
        adapter: Adapter used to run the probes.

    Returns:
        AvailabilityMap in registry order.
    """
    logger.info("Detecting package managers...")
    managers = {}

    for manager_id, spec in PACKAGE_MANAGERS.items():
        receipt = adapter.run(*spec.probe_argv())
        if receipt.spawn_failed:
            logger.debug("%s: %s", manager_id, receipt.error)
        elif receipt.failed:
            logger.debug("%s: probe exited %s", manager_id, receipt.return_code)
        managers[manager_id] = receipt.ok

    availability = AvailabilityMap(managers=managers)
    logger.info(
        "Detected: %s",
        ", ".join(m.value for m in availability.available()) or "none",
    )
    return availability
