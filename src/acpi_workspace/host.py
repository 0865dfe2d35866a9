"""Host process boundary used to run the external extraction and apply tools."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

from acpi_workspace.runtime import telemetry


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Exit status plus captured output of a finished command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandExecutor(Protocol):
    """Synchronous command runner; raises ``OSError`` when launch fails."""

    def run(self, argv: Sequence[str]) -> CommandOutcome:
        ...


class SubprocessExecutor:
    """``CommandExecutor`` backed by :func:`subprocess.run`."""

    def run(self, argv: Sequence[str]) -> CommandOutcome:
        command = list(argv)
        with telemetry.span(
            "host::run", component="host", metadata={"command": command[0]}
        ) as handle:
            proc = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
            handle.add_metadata("returncode", proc.returncode)
        return CommandOutcome(
            returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr
        )


__all__ = ["CommandOutcome", "CommandExecutor", "SubprocessExecutor"]
