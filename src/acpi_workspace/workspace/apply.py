"""Batch submission of modified documents to the external apply tool."""

from __future__ import annotations

from typing import Optional

from acpi_workspace.config import APPLY_DELIMITER
from acpi_workspace.host import CommandExecutor, CommandOutcome
from acpi_workspace.runtime import telemetry

from .oplog import OperationLog
from .selection import SelectionList


class ApplyCoordinator:
    """Runs the apply tool over the modified set and logs what it reports."""

    def __init__(
        self,
        executor: CommandExecutor,
        modified: SelectionList[str],
        log: OperationLog,
        *,
        command: str = "acpied-apply",
    ) -> None:
        self.executor = executor
        self.modified = modified
        self.log = log
        self.command = command

    def apply(self) -> Optional[CommandOutcome]:
        """Blocks until the tool exits; returns ``None`` when nothing is modified.

        Success logs each non-empty stdout line. Failure logs every stderr
        line, blank ones included. The modified set is left untouched.
        """

        if not self.modified.items:
            return None

        batch = APPLY_DELIMITER.join(self.modified.items)
        with telemetry.span(
            "apply::run", component="apply", metadata={"documents": batch}
        ) as handle:
            try:
                outcome = self.executor.run([self.command, batch])
            except OSError as exc:
                handle.fail(str(exc))
                self.log.append(str(exc))
                return None
            handle.add_metadata("returncode", outcome.returncode)

        if outcome.ok:
            for line in outcome.stdout.split("\n"):
                if line:
                    self.log.append(line)
        else:
            for line in outcome.stderr.split("\n"):
                self.log.append(line)
        return outcome


__all__ = ["ApplyCoordinator"]
