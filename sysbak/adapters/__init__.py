"""Adapters — how sysbak talks to the host.

Public re-exports for convenient access.
"""

from sysbak.adapters.base import Adapter
from sysbak.adapters.mock import MockAdapter
from sysbak.adapters.shell.command import ShellCommandAdapter

__all__ = [
    "Adapter",
    "MockAdapter",
    "ShellCommandAdapter",
]
