"""Workspace-level commands: batch apply."""

from __future__ import annotations

from acpi_workspace.keymaps import ResolutionMatch
from acpi_workspace.modes.base_mode import ModeContext, ModeResult


def apply_modified(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if context.applier is None:
        return ModeResult(consumed=True, status="noop", message="no_applier")
    outcome = context.applier.apply()
    if outcome is None:
        return ModeResult(consumed=True, status="apply_skipped")
    status = "apply_ok" if outcome.ok else "apply_failed"
    context.bus.emit("apply.finished", outcome.returncode)
    return ModeResult(consumed=True, status=status, message=str(outcome.returncode))


__all__ = ["apply_modified"]
