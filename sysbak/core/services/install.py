"""
Installed-checks and installs for single packages.

Neither operation raises. An installed-check that cannot run counts as
"not installed"; an install that cannot run counts as a failed install.
The cause is logged, and for checks it is also available on the
Receipt returned by probe_installed().
"""

from __future__ import annotations

import logging

from sysbak.adapters.base import Adapter
from sysbak.core.models.command import Command, Receipt
from sysbak.core.models.manager import ManagerId
from sysbak.core.services.package_managers import get_spec

logger = logging.getLogger(__name__)

DEFAULT_ELEVATION = ["sudo"]


def probe_installed(manager: ManagerId, package: str, adapter: Adapter) -> Receipt:
    """Run the manager's existence query for one package.

    The receipt tells apart "package absent" (status 'failed') from
    "query binary missing" (status 'unavailable').
    """
    spec = get_spec(manager)
    return adapter.execute(Command(argv=spec.check_argv(package), quiet=True))


def is_installed(manager: ManagerId, package: str, adapter: Adapter) -> bool:
    """Check whether a package is installed according to its manager."""
    receipt = probe_installed(manager, package, adapter)
    if receipt.spawn_failed:
        logger.warning(
            "Cannot check %s with %s: %s", package, manager.value, receipt.error,
        )
    return receipt.ok


def install_package(
    manager: ManagerId,
    package: str,
    adapter: Adapter,
    elevation: list[str] | None = None,
) -> bool:
    """Install one package. Returns True on exit status 0.

    Args:
        manager: Manager to install through.
        package: Manager-local package name.
        adapter: Adapter used to run the install.
        elevation: Privilege wrapper prefixed to managers that need
            root (default: ``sudo``). An empty list runs unwrapped.
    """
    spec = get_spec(manager)
    if elevation is None:
        elevation = DEFAULT_ELEVATION

    logger.info("Attempting to install %s with %s...", package, manager.value)
    receipt = adapter.execute(
        Command(argv=spec.install_argv(package, elevation), quiet=True),
    )

    if receipt.ok:
        logger.info("Successfully installed %s.", package)
        return True
    if receipt.spawn_failed:
        logger.error("Error executing install command for %s: %s", package, receipt.error)
    else:
        logger.error("Failed to install %s. Exit code: %s", package, receipt.return_code)
    return False
