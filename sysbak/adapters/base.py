"""
Adapter base — the protocol contract between services and the host.

Package-manager services never spawn processes themselves. They build
a Command and hand it to an Adapter, which runs it and returns a
Receipt. Swapping the adapter (real shell vs. mock) is how the whole
detection / listing / install pipeline is tested without touching the
host.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sysbak.core.models.command import Command, Receipt


class Adapter(ABC):
    """Abstract base class for command adapters.

    Adapters perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def execute(self, command: Command) -> Receipt:
        """Run the command and return a receipt.

        MUST never raise exceptions. A command that cannot be spawned
        yields status='unavailable'; a non-zero exit yields 'failed'.
        """

    def run(self, *argv: str, quiet: bool = False) -> Receipt:
        """Shorthand for ``execute(Command(argv=[...]))``."""
        return self.execute(Command(argv=list(argv), quiet=quiet))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
