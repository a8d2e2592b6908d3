"""
Shell command adapter — run host commands and capture their output.

Commands are executed as argv lists, never through a shell. There is
no timeout: a package manager that hangs blocks the caller until it
returns or the process is killed.
"""

from __future__ import annotations

import logging
import subprocess
import time

from sysbak.adapters.base import Adapter
from sysbak.core.models.command import Command, Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute host commands with subprocess."""

    @property
    def name(self) -> str:
        return "shell"

    def execute(self, command: Command) -> Receipt:
        argv = command.argv
        logger.debug("Executing: %s", command)
        start = time.monotonic()

        try:
            if command.quiet:
                result = subprocess.run(
                    argv,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
                stdout, stderr = "", ""
            else:
                result = subprocess.run(
                    argv,
                    capture_output=True,
                    text=True,
                    errors="replace",
                )
                stdout, stderr = result.stdout, result.stderr.strip()
        except (OSError, ValueError) as e:
            # OSError: missing binary or no exec bit.
            # ValueError: argv the OS cannot take (NUL byte, unencodable text).
            logger.debug("Cannot spawn %s: %s", command.binary, e)
            return Receipt.unavailable(
                command=argv,
                error=f"Cannot execute '{command.binary}': {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.returncode == 0:
            return Receipt.success(
                command=argv,
                output=stdout,
                duration_ms=elapsed_ms,
            )
        return Receipt.failure(
            command=argv,
            return_code=result.returncode,
            error=stderr,
            output=stdout,
            duration_ms=elapsed_ms,
        )
