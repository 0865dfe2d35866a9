from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from acpi_workspace.runtime import telemetry
from acpi_workspace.workspace import OperationLog


def test_entry_format_uses_second_precision(clock) -> None:
    log = OperationLog(capacity=10, clock=clock)

    entry = log.append("dsdt.dsl selected")

    assert entry.format() == "|2024-05-01 12:00:00| dsdt.dsl selected"
    assert entry.timestamp.microsecond == 0


def test_ring_keeps_latest_entries_and_file_keeps_all(tmp_path: Path, clock) -> None:
    path = tmp_path / "acpied.log"
    log = OperationLog(path, capacity=100, clock=clock)

    for i in range(150):
        log.append(f"message {i}")

    assert len(log) == 100
    assert [entry.message for entry in log.entries] == [
        f"message {i}" for i in range(50, 150)
    ]
    file_lines = path.read_text(encoding="utf-8").splitlines()
    assert len(file_lines) == 150
    assert file_lines[0].endswith("| message 0")
    assert log.lines()[-1] == file_lines[-1]


def test_log_appends_to_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "acpied.log"
    path.write_text("|2020-01-01 00:00:00| earlier\n", encoding="utf-8")
    fixed = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    log = OperationLog(path, clock=lambda: fixed)

    log.append("later")

    assert path.read_text(encoding="utf-8").splitlines() == [
        "|2020-01-01 00:00:00| earlier",
        "|2024-01-02 03:04:05| later",
    ]


def test_sink_failure_is_reported_not_raised(tmp_path: Path, clock, monkeypatch) -> None:
    events = []
    monkeypatch.setattr(
        telemetry,
        "record_event",
        lambda name, **kwargs: events.append((name, kwargs.get("level"))),
    )
    log = OperationLog(tmp_path / "missing" / "acpied.log", clock=clock)

    log.append("still recorded")

    assert log.lines() == ["|2024-05-01 12:00:00| still recorded"]
    assert events == [("oplog.sink_failed", "warning")]
