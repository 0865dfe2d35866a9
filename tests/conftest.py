from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import pytest

from acpi_workspace.config import WorkspaceConfig
from acpi_workspace.host import CommandOutcome

DOCUMENTS: Mapping[str, str] = {
    "dsdt.dsl": "DefinitionBlock (\"\", \"DSDT\", 2)\n{\n    Name (FOO, 1)\n}\n",
    "facp.dsl": "[000h 0000 004h] Signature : \"FACP\"\n",
    "ssdt1.dsl": "Scope (_SB)\n{\n    Method (_OFF) { Return (Zero) }\n}\n",
}


class FakeExecutor:
    """Records argv lists and answers from per-program handlers."""

    def __init__(
        self,
        handlers: Optional[Dict[str, Callable[[Sequence[str]], CommandOutcome]]] = None,
    ) -> None:
        self.calls: List[List[str]] = []
        self.handlers = dict(handlers or {})

    def on(self, program: str, handler: Callable[[Sequence[str]], CommandOutcome]):
        self.handlers[program] = handler
        return self

    def respond(self, program: str, returncode: int, stdout: str = "", stderr: str = ""):
        outcome = CommandOutcome(returncode=returncode, stdout=stdout, stderr=stderr)
        return self.on(program, lambda argv: outcome)

    def fail_launch(self, program: str):
        def _raise(argv: Sequence[str]) -> CommandOutcome:
            raise FileNotFoundError(2, "No such file or directory", argv[0])

        return self.on(program, _raise)

    def calls_to(self, program: str) -> List[List[str]]:
        return [call for call in self.calls if call[0] == program]

    def run(self, argv: Sequence[str]) -> CommandOutcome:
        command = list(argv)
        self.calls.append(command)
        handler = self.handlers.get(command[0])
        if handler is None:
            return CommandOutcome(returncode=0)
        return handler(command)


class FixedClock:
    """Deterministic UTC clock that advances one second per reading."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.current = start or datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current = value + timedelta(seconds=1)
        return value


def make_config(root: Path, **overrides: object) -> WorkspaceConfig:
    config = WorkspaceConfig(
        baseline_dir=root / "origin",
        working_dir=root / "modified",
        log_file=root / "acpied.log",
        init_command=("bash", "/bin/acpied-init"),
        apply_command="acpied-apply",
    )
    return config.with_overrides(**overrides)


def extraction_handler(config: WorkspaceConfig, documents: Mapping[str, str]):
    """Simulates the init tool: fills both directories with identical files."""

    def _extract(argv: Sequence[str]) -> CommandOutcome:
        for directory in (config.baseline_dir, config.working_dir):
            directory.mkdir(parents=True, exist_ok=True)
            for name, text in documents.items():
                (directory / name).write_bytes(text.encode("utf-8"))
        return CommandOutcome(returncode=0, stdout="extracted\n")

    return _extract


@pytest.fixture
def config(tmp_path: Path) -> WorkspaceConfig:
    return make_config(tmp_path)


@pytest.fixture
def executor(config: WorkspaceConfig) -> FakeExecutor:
    return FakeExecutor().on("bash", extraction_handler(config, DOCUMENTS))


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()
