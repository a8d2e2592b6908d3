"""
Command and Receipt models — the execution contract.

Commands are argv lists to run on the host. Receipts are their results.
This is the I/O contract between the package-manager services and the
adapters: services send Commands, adapters return Receipts. Never
exceptions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Command(BaseModel):
    """A host command to be executed by an adapter.

    ``quiet`` discards the child's stdout/stderr instead of capturing
    them (used for installs, whose progress output is not parsed).
    """

    argv: list[str]
    quiet: bool = False

    @property
    def binary(self) -> str:
        return self.argv[0] if self.argv else ""

    def __str__(self) -> str:
        return " ".join(self.argv)


class Receipt(BaseModel):
    """Result of running one command.

    Three outcomes are kept apart:
        ok           — spawned and exited 0
        failed       — spawned and exited non-zero
        unavailable  — could not be spawned (missing binary, no exec bit)
    """

    command: list[str]
    status: Literal["ok", "failed", "unavailable"] = "ok"
    return_code: int | None = None

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the command exited successfully."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command ran and signalled failure."""
        return self.status == "failed"

    @property
    def spawn_failed(self) -> bool:
        """Whether the command could not be started at all."""
        return self.status == "unavailable"

    @classmethod
    def success(
        cls,
        command: list[str],
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            command=command,
            status="ok",
            return_code=0,
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        command: list[str],
        return_code: int,
        error: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a receipt for a command that exited non-zero."""
        return cls(
            command=command,
            status="failed",
            return_code=return_code,
            error=error or f"Command exited with code {return_code}",
            **kwargs,
        )

    @classmethod
    def unavailable(
        cls,
        command: list[str],
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a receipt for a command that could not be spawned."""
        return cls(
            command=command,
            status="unavailable",
            error=error,
            **kwargs,
        )
