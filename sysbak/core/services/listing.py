"""
Package listing — per-manager listings and their aggregation.

Listing is best-effort within a manager (a line that does not parse
is dropped) but strict across managers: if any available manager's
list command cannot be run, the whole aggregation fails.
"""

from __future__ import annotations

import logging

from sysbak.adapters.base import Adapter
from sysbak.core.errors import ListingError
from sysbak.core.models.catalog import AvailabilityMap, Catalog, NoManagersDetected
from sysbak.core.models.manager import ManagerId
from sysbak.core.services.package_managers import ManagerSpec, get_spec

logger = logging.getLogger(__name__)


def parse_listing(spec: ManagerSpec, output: str) -> list[str]:
    """Extract package names from a manager's list output."""
    lines = output.splitlines()[spec.header_lines:]
    names = []
    for line in lines:
        if not line.strip():
            continue
        name = spec.parse_line(line)
        if name:
            names.append(name)
    return names


def list_packages(manager: ManagerId, adapter: Adapter) -> list[str]:
    """List installed packages for one manager, in native order.

    Raises:
        ListingError: If the list command cannot be spawned.
    """
    spec = get_spec(manager)
    logger.info("Listing %s packages...", spec.label)

    receipt = adapter.run(*spec.list_argv())
    if receipt.spawn_failed:
        raise ListingError(manager.value, receipt.error or "command not found")
    if receipt.failed:
        # Still parse whatever was printed
        logger.warning(
            "%s list exited with code %s; parsing partial output",
            spec.label, receipt.return_code,
        )

    names = parse_listing(spec, receipt.output)
    logger.debug("%s: %d packages", manager, len(names))
    return names


def aggregate_packages(
    availability: AvailabilityMap,
    adapter: Adapter,
) -> Catalog | NoManagersDetected:
    """Build a Catalog from every available manager.

    Returns:
        Catalog keyed by available managers in detection order, or
        NoManagersDetected when nothing was available.

    Raises:
        ListingError: If any available manager cannot be listed.
    """
    if not availability.any_available:
        logger.info("No package managers available to list")
        return NoManagersDetected()

    catalog = Catalog()
    for manager in availability.available():
        catalog.add(manager, list_packages(manager, adapter))
    return catalog
