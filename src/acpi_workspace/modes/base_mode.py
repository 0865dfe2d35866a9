"""Base classes and shared utilities for workspace modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from acpi_workspace.session import EditSession
from acpi_workspace.workspace import OperationLog

if TYPE_CHECKING:
    from acpi_workspace.workspace import ApplyCoordinator, Workspace


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    session: EditSession
    log: OperationLog
    bus: "ModeBus"
    workspace: Optional["Workspace"] = None
    applier: Optional["ApplyCoordinator"] = None
    extras: Dict[str, object] = field(default_factory=dict)

    def commit_buffer(self) -> bool:
        """Persist the session buffer and refresh the modified set.

        Returns whether the document now differs from its baseline.
        """

        document = self.session.document
        if document is None or self.workspace is None:
            return False
        return self.workspace.commit(document, self.session.buffer.text)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete workspace modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
