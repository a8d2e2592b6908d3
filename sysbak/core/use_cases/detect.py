"""
Detection use case — which package managers does this host have?
"""

from __future__ import annotations

from dataclasses import dataclass

from sysbak.adapters.base import Adapter
from sysbak.core.models.catalog import AvailabilityMap
from sysbak.core.services.detection import detect_package_managers


@dataclass
class DetectResult:
    """Result of the detect use case."""

    availability: AvailabilityMap

    def to_dict(self) -> dict:
        return self.availability.to_dict()


def run_detect(adapter: Adapter) -> DetectResult:
    """Probe every known package manager on the host."""
    return DetectResult(availability=detect_package_managers(adapter))
