"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from sysbak.adapters.mock import MockAdapter
from sysbak.core.config.loader import SysbakConfig
from sysbak.core.models.manager import ManagerId
from sysbak.core.services.package_managers import get_spec


@pytest.fixture
def mock_adapter() -> MockAdapter:
    """A host where nothing can be spawned until configured."""
    return MockAdapter()


@pytest.fixture
def config(tmp_path: Path) -> SysbakConfig:
    """Default settings rooted at a temporary directory."""
    return SysbakConfig(root=tmp_path)


def enable_manager(adapter: MockAdapter, manager: ManagerId, listing: str = "") -> None:
    """Make a manager's probe succeed and its list command print ``listing``."""
    spec = get_spec(manager)
    adapter.set_output(spec.probe_argv(), f"{spec.probe} 1.0")
    adapter.set_output(spec.list_argv(), listing)


def mark_installed(adapter: MockAdapter, manager: ManagerId, *packages: str) -> None:
    """Make the installed-check succeed for each package."""
    spec = get_spec(manager)
    for pkg in packages:
        adapter.set_output(spec.check_argv(pkg), "")


def mark_missing(adapter: MockAdapter, manager: ManagerId, *packages: str) -> None:
    """Make the installed-check exit 1 for each package."""
    spec = get_spec(manager)
    for pkg in packages:
        adapter.set_failure(spec.check_argv(pkg))
