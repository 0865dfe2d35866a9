"""Search submission and repeat actions."""

from __future__ import annotations

import re

from acpi_workspace.buffer import search_back, search_forward
from acpi_workspace.keymaps import ResolutionMatch
from acpi_workspace.modes.base_mode import ModeContext, ModeResult


def submit_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Install the typed pattern; a bad regex keeps Search mode active."""

    del match
    search = context.session.search
    try:
        pattern = search.commit()
    except re.error as exc:
        context.bus.emit("search.error", str(exc))
        return ModeResult(consumed=True, status="search_error", message=str(exc))
    source = pattern.pattern if pattern is not None else ""
    context.bus.emit("search.submit", source)
    return ModeResult(
        consumed=True, switch_to="normal", status="search_set", message=source
    )


def cancel_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.search.discard()
    return ModeResult(consumed=True, switch_to="normal", message="search_cancel")


def _repeat(context: ModeContext, *, backward: bool) -> ModeResult:
    session = context.session
    pattern = session.search.active
    if pattern is None:
        return ModeResult(consumed=True, status="no_pattern")
    finder = search_back if backward else search_forward
    found = finder(session.buffer.lines, session.buffer.cursor, pattern)
    if found is None:
        return ModeResult(consumed=True, status="not_found", message=pattern.pattern)
    session.buffer.set_cursor(*found)
    return ModeResult(consumed=True, status="found", message=f"{found[0]}:{found[1]}")


def search_next(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _repeat(context, backward=False)


def search_previous(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _repeat(context, backward=True)


__all__ = ["submit_search", "cancel_search", "search_next", "search_previous"]
