from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

import pytest

from acpi_workspace.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.context: dict[str, str] = {}

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        del self.context[key]

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.calls.append(("component", name))
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.calls.append(("profile", name, dict(self.context)))
        yield

    def info_with(self, message: str, pairs: list[tuple[str, str]]) -> None:
        self.calls.append(("info", message, dict(pairs)))

    def error_with(self, message: str, pairs: list[tuple[str, str]]) -> None:
        self.calls.append(("error", message, dict(pairs)))


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_span_scopes_metadata_to_the_block(recorder) -> None:
    with telemetry.span("store::write", component="store", metadata={"name": "dsdt.dsl"}):
        assert recorder.context == {"name": "dsdt.dsl"}

    assert recorder.context == {}
    assert recorder.calls == [
        ("component", "store"),
        ("profile", "store::write", {"name": "dsdt.dsl"}),
    ]


def test_span_logs_failure_and_reraises(recorder) -> None:
    with pytest.raises(OSError):
        with telemetry.span("apply::run", component=True) as handle:
            handle.add_metadata("returncode", 3)
            raise OSError("no such tool")

    assert recorder.calls[-1] == (
        "error",
        "span::fail",
        {
            "span": "apply::run",
            "returncode": "3",
            "component": "apply::run",
            "reason": "no such tool",
        },
    )
    assert recorder.context == {}


def test_record_event_attaches_data(recorder) -> None:
    telemetry.record_event("dirty.marked", data={"document": "facp.dsl"})

    assert recorder.calls == [
        ("info", "event::dirty.marked", {"event": "dirty.marked", "document": "facp.dsl"})
    ]


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="tui")
