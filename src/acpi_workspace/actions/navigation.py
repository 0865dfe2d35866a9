"""Cursor motions and document selection for Normal mode."""

from __future__ import annotations

from typing import Optional, Tuple

from acpi_workspace.buffer import motions
from acpi_workspace.buffer.motions import Motion
from acpi_workspace.keymaps import ResolutionMatch
from acpi_workspace.modes.base_mode import ModeContext, ModeResult
from acpi_workspace.workspace import DocumentEntry


def _move(context: ModeContext, motion: Motion) -> ModeResult:
    row, col = context.session.buffer.move(motion)
    return ModeResult(consumed=True, status="moved", message=f"{row}:{col}")


def cursor_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, motions.back)


def cursor_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, motions.forward)


def cursor_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, motions.up)


def cursor_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, motions.down)


def word_back(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, motions.word_back)


def line_head(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, motions.head)


def line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, motions.end)


def buffer_bottom(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.buffer.move(motions.bottom)
    return _move(context, motions.head)


def page_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    row, col = context.session.buffer.page_down()
    return ModeResult(consumed=True, status="moved", message=f"{row}:{col}")


def page_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    row, col = context.session.buffer.page_up()
    return ModeResult(consumed=True, status="moved", message=f"{row}:{col}")


def _open_document(
    context: ModeContext, opened: Optional[Tuple[DocumentEntry, str]]
) -> ModeResult:
    if opened is None:
        return ModeResult(consumed=True, status="noop", message="no_documents")
    entry, text = opened
    context.session.load(entry, text)
    context.log.append(f"{entry.name} selected")
    context.bus.emit("document.selected", entry.name)
    return ModeResult(consumed=True, status="selected", message=entry.name)


def next_document(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if context.workspace is None:
        return ModeResult(consumed=True, status="noop", message="no_documents")
    return _open_document(context, context.workspace.open_next())


def previous_document(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if context.workspace is None:
        return ModeResult(consumed=True, status="noop", message="no_documents")
    return _open_document(context, context.workspace.open_previous())


__all__ = [
    "cursor_left",
    "cursor_right",
    "cursor_up",
    "cursor_down",
    "word_back",
    "line_head",
    "line_end",
    "buffer_bottom",
    "page_down",
    "page_up",
    "next_document",
    "previous_document",
]
