"""
Exception hierarchy for sysbak.

All exceptions inherit from SysbakError (single catch point for the
use cases). Command failures inside detection, installed-checks and
installs are not exceptions: adapters report them through Receipts.
"""

from __future__ import annotations


class SysbakError(Exception):
    """Base exception for all sysbak errors."""


class ConfigError(SysbakError):
    """Raised when sysbak.yml is invalid or unreadable."""


class ListingError(SysbakError):
    """A package manager's list command could not be run."""

    def __init__(self, manager: str, reason: str):
        self.manager = manager
        self.reason = reason
        super().__init__(f"Cannot list packages for {manager}: {reason}")


class CatalogError(SysbakError):
    """The persisted catalog document is unreadable or malformed."""


class CatalogNotFoundError(CatalogError):
    """No catalog document exists at the expected path."""
