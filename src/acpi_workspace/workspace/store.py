"""Document store backed by the baseline and working directories."""

from __future__ import annotations

from pathlib import Path
from typing import List

from acpi_workspace.config import WorkspaceConfig
from acpi_workspace.errors import DocumentIOError, WorkspaceInitError
from acpi_workspace.host import CommandExecutor
from acpi_workspace.runtime import telemetry

ENCODING = "utf-8"
# surrogateescape keeps undecodable bytes intact on the way back to disk
ERRORS = "surrogateescape"


class DocumentEntry:
    """A single editable document and its immutable baseline snapshot."""

    __slots__ = ("name", "_baseline", "buffer", "working_path", "baseline_path")

    def __init__(
        self,
        name: str,
        baseline: bytes,
        *,
        working_path: Path,
        baseline_path: Path,
        buffer: str | None = None,
    ) -> None:
        self.name = name
        self._baseline = bytes(baseline)
        self.buffer = baseline.decode(ENCODING, ERRORS) if buffer is None else buffer
        self.working_path = working_path
        self.baseline_path = baseline_path

    @property
    def baseline(self) -> bytes:
        return self._baseline

    def __repr__(self) -> str:
        return f"DocumentEntry(name={self.name!r})"


class DocumentStore:
    """Loads the fixed document set and persists working copies."""

    def __init__(self, config: WorkspaceConfig, executor: CommandExecutor) -> None:
        self.config = config
        self.executor = executor

    def load(self) -> List[DocumentEntry]:
        """Run the extraction tool, then build entries for every working file."""

        with telemetry.span(
            "store::load",
            component="store",
            metadata={"working_dir": self.config.working_dir},
        ) as handle:
            self._extract()
            try:
                names = sorted(
                    path.name
                    for path in self.config.working_dir.iterdir()
                    if path.is_file()
                )
            except OSError as exc:
                raise WorkspaceInitError(
                    f"cannot list {self.config.working_dir}: {exc}"
                ) from exc

            entries = [self._entry(name) for name in names]
            handle.add_metadata("documents", len(entries))
        return entries

    def read_working(self, entry: DocumentEntry) -> str:
        return self.read_working_bytes(entry).decode(ENCODING, ERRORS)

    def read_working_bytes(self, entry: DocumentEntry) -> bytes:
        return _read_bytes(entry.working_path)

    def read_baseline_bytes(self, entry: DocumentEntry) -> bytes:
        return _read_bytes(entry.baseline_path)

    def write_working(self, entry: DocumentEntry, text: str) -> None:
        try:
            entry.working_path.write_bytes(text.encode(ENCODING, ERRORS))
        except OSError as exc:
            raise DocumentIOError(
                f"fail to write content to {entry.working_path}: {exc}",
                path=entry.working_path,
            ) from exc

    def _extract(self) -> None:
        command = self.config.init_command
        try:
            outcome = self.executor.run(command)
        except OSError as exc:
            raise WorkspaceInitError(f"fail to execute {command[0]}: {exc}") from exc
        if not outcome.ok:
            raise WorkspaceInitError(
                f"{' '.join(command)} exited with status {outcome.returncode}",
                stderr=outcome.stderr,
            )

    def _entry(self, name: str) -> DocumentEntry:
        baseline_path = self.config.baseline_dir / name
        try:
            baseline = baseline_path.read_bytes()
        except OSError as exc:
            raise WorkspaceInitError(f"missing baseline for {name}: {exc}") from exc
        return DocumentEntry(
            name,
            baseline,
            working_path=self.config.working_dir / name,
            baseline_path=baseline_path,
        )


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise DocumentIOError(f"fail to read {path}: {exc}", path=path) from exc


__all__ = ["DocumentEntry", "DocumentStore"]
