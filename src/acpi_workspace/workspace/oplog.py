"""Operator-facing operation log: bounded ring plus durable append sink."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Deque, List, Optional, Tuple

from acpi_workspace.runtime import telemetry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class LogEntry:
    timestamp: datetime
    message: str

    def format(self) -> str:
        return f"|{self.timestamp.strftime(TIMESTAMP_FORMAT)}| {self.message}"


class OperationLog:
    """Keeps the newest ``capacity`` entries and mirrors every one to ``path``.

    A sink that cannot be opened or written is reported as a telemetry
    warning; the in-memory ring stays authoritative for the session.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        *,
        capacity: int = 100,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.path = path
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._clock = clock

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return tuple(self._entries)

    def lines(self) -> List[str]:
        return [entry.format() for entry in self._entries]

    def append(self, message: str) -> LogEntry:
        entry = LogEntry(timestamp=self._clock().replace(microsecond=0), message=message)
        self._entries.append(entry)
        self._write(entry.format())
        return entry

    def _write(self, line: str) -> None:
        if self.path is None:
            return
        try:
            with open(self.path, "a", encoding="utf-8") as sink:
                sink.write(line + "\n")
        except OSError as exc:
            telemetry.record_event(
                "oplog.sink_failed",
                level="warning",
                data={"path": self.path, "error": exc},
            )

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["LogEntry", "OperationLog"]
