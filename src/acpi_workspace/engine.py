"""Workspace engine: the boundary between the input loop and the modes."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from acpi_workspace.config import WorkspaceConfig
from acpi_workspace.errors import DocumentIOError, WorkspaceInitError
from acpi_workspace.host import CommandExecutor
from acpi_workspace.keymaps import (
    KeymapConflictError,
    KeymapRegistry,
    KeymapResolver,
    apply_key_overrides,
    load_default_keymaps,
)
from acpi_workspace.modes import (
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
    SearchMode,
)
from acpi_workspace.modes.mode_manager import ModeManager
from acpi_workspace.runtime import telemetry
from acpi_workspace.session import EditSession
from acpi_workspace.workspace import ApplyCoordinator, OperationLog, Workspace


class WorkspaceEngine:
    """Owns the mode manager and turns recoverable failures into log entries."""

    def __init__(
        self,
        session: EditSession,
        log: OperationLog,
        *,
        workspace: Optional[Workspace] = None,
        applier: Optional[ApplyCoordinator] = None,
        registry: Optional[KeymapRegistry] = None,
        bus: Optional[ModeBus] = None,
    ) -> None:
        if registry is None:
            registry = KeymapRegistry(logger_name="acpi_workspace.keymaps")
            load_default_keymaps(registry)
        self.context = ModeContext(
            session=session,
            log=log,
            bus=bus or ModeBus(),
            workspace=workspace,
            applier=applier,
        )
        self.manager = ModeManager(
            self.context,
            keymap_registry=registry,
            keymap_resolver=KeymapResolver(
                registry, logger_name="acpi_workspace.keymaps"
            ),
            load_defaults=False,
        )
        self.manager.register_mode(NormalMode)
        self.manager.register_mode(InsertMode)
        self.manager.register_mode(SearchMode)
        self.quit_requested = False
        self.last_result: Optional[ModeResult] = None

    @classmethod
    def create(
        cls,
        config: WorkspaceConfig,
        executor: CommandExecutor,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "WorkspaceEngine":
        """Load the workspace and wire every collaborator from ``config``.

        Raises ``WorkspaceInitError`` when the baseline extraction fails or a
        key override names an unknown binding or clashes with another one.
        """

        registry = _build_registry(config)
        workspace = Workspace.load(config, executor)
        if clock is None:
            log = OperationLog(config.log_file, capacity=config.log_capacity)
        else:
            log = OperationLog(
                config.log_file, capacity=config.log_capacity, clock=clock
            )
        applier = ApplyCoordinator(
            executor, workspace.modified, log, command=config.apply_command
        )
        session = EditSession(
            history_size=config.history_size, page_height=config.page_height
        )
        return cls(
            session, log, workspace=workspace, applier=applier, registry=registry
        )

    @property
    def session(self) -> EditSession:
        return self.context.session

    @property
    def workspace(self) -> Optional[Workspace]:
        return self.context.workspace

    @property
    def log(self) -> OperationLog:
        return self.context.log

    @property
    def registry(self) -> KeymapRegistry:
        return self.manager.keymap_registry

    @property
    def mode(self) -> str:
        active = self.manager.active_mode
        return active.name if active else ""

    def handle_key(self, key: KeyInput) -> ModeResult:
        """Dispatch one key; document I/O failures are logged, not raised."""

        try:
            result = self.manager.handle_key(key)
        except DocumentIOError as exc:
            self.log.append(f"error: {exc}")
            telemetry.record_event(
                "engine.io_error", level="warning", data={"error": exc}
            )
            result = ModeResult(consumed=True, status="io_error", message=str(exc))
        if result.status == "quit":
            self.quit_requested = True
        self.last_result = result
        return result


def _build_registry(config: WorkspaceConfig) -> KeymapRegistry:
    registry = KeymapRegistry(logger_name="acpi_workspace.keymaps")
    load_default_keymaps(registry)
    try:
        apply_key_overrides(registry, config.key_overrides)
    except (KeyError, KeymapConflictError) as exc:
        raise WorkspaceInitError(f"invalid key override: {exc}") from exc
    return registry


__all__ = ["WorkspaceEngine"]
