"""Core action implementations shared across modes."""

from __future__ import annotations

from acpi_workspace.buffer import motions
from acpi_workspace.keymaps import ResolutionMatch
from acpi_workspace.modes.base_mode import ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def append_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Step past the cursor, then enter insert mode."""

    del match
    context.session.buffer.move(motions.forward)
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="exit_insert")


def enter_search_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="search", message="enter_search")


def quit_workspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.bus.emit("workspace.quit", None)
    return ModeResult(consumed=True, status="quit")


__all__ = [
    "append_mode",
    "enter_insert_mode",
    "enter_search_mode",
    "exit_to_normal_mode",
    "quit_workspace",
]
