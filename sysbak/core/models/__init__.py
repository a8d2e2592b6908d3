"""
Domain models for sysbak.

All models are re-exported here for convenient access:

    from sysbak.core.models import Catalog, ManagerId, Receipt
"""

from sysbak.core.models.catalog import (
    AvailabilityMap,
    Catalog,
    InstallReport,
    NoManagersDetected,
    PackageRef,
)
from sysbak.core.models.command import Command, Receipt
from sysbak.core.models.manager import ManagerId

__all__ = [
    "AvailabilityMap",
    "Catalog",
    "Command",
    "InstallReport",
    "ManagerId",
    "NoManagersDetected",
    "PackageRef",
    "Receipt",
]
