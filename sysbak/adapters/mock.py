"""
Mock adapter — scriptable stand-in for a host's package managers.

Used in tests to simulate detection, listings and installs without
running anything. Responses are matched on the exact argv first, then
on the binary name; anything unmatched behaves like a missing binary
unless a default is configured.
"""

from __future__ import annotations

from sysbak.adapters.base import Adapter
from sysbak.core.models.command import Command, Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default every command fails to spawn, which models a host with
    nothing installed. Configure binaries and commands to change that.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        default_receipt: Receipt | None = None,
    ):
        self._name = adapter_name
        self._default = default_receipt
        self._responses: dict[tuple[str, ...], Receipt] = {}
        self._binaries: dict[str, Receipt] = {}
        self._call_log: list[Command] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[Command]:
        """All commands this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    def calls_to(self, binary: str) -> list[list[str]]:
        """argv of every call whose binary is ``binary``."""
        return [c.argv for c in self._call_log if c.binary == binary]

    def set_response(self, argv: list[str], receipt: Receipt) -> None:
        """Set a custom response for one exact argv."""
        self._responses[tuple(argv)] = receipt

    def set_output(self, argv: list[str], output: str, return_code: int = 0) -> None:
        """Make one exact argv exit with ``return_code`` and print ``output``."""
        if return_code == 0:
            receipt = Receipt.success(command=argv, output=output)
        else:
            receipt = Receipt.failure(command=argv, return_code=return_code, output=output)
        self._responses[tuple(argv)] = receipt

    def set_failure(self, argv: list[str], return_code: int = 1, error: str = "Mock failure") -> None:
        """Configure one exact argv to exit non-zero."""
        self._responses[tuple(argv)] = Receipt.failure(
            command=argv, return_code=return_code, error=error,
        )

    def set_binary(self, binary: str, return_code: int = 0, output: str = "") -> None:
        """Make every otherwise-unmatched call to ``binary`` return this."""
        if return_code == 0:
            receipt = Receipt.success(command=[binary], output=output)
        else:
            receipt = Receipt.failure(command=[binary], return_code=return_code)
        self._binaries[binary] = receipt

    def execute(self, command: Command) -> Receipt:
        self._call_log.append(command)
        argv = command.argv

        receipt = self._responses.get(tuple(argv))
        if receipt is None:
            receipt = self._binaries.get(command.binary, self._default)
        if receipt is None:
            return Receipt.unavailable(
                command=argv,
                error=f"[mock] No such file or directory: '{command.binary}'",
            )
        # Re-stamp with the argv actually executed
        return receipt.model_copy(update={"command": list(argv)})

    def reset(self) -> None:
        """Clear call log and configured responses."""
        self._call_log.clear()
        self._responses.clear()
        self._binaries.clear()
