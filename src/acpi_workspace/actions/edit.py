"""Content edits and chord commands for Normal mode.

Every action that changes the buffer persists it through
``ModeContext.commit_buffer`` before returning, so the modified set is
always current once the key has been handled.
"""

from __future__ import annotations

from acpi_workspace.buffer import motions
from acpi_workspace.keymaps import ResolutionMatch
from acpi_workspace.modes.base_mode import ModeContext, ModeResult


def _persisted(context: ModeContext, status: str, **kwargs: object) -> ModeResult:
    modified = context.commit_buffer()
    return ModeResult(
        consumed=True,
        status=status,
        message="modified" if modified else "clean",
        **kwargs,  # type: ignore[arg-type]
    )


def chord_g(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``gg`` jumps to the top row; a lone ``g`` only arms the chord."""

    del match
    chord = context.session.chord
    if chord.pending("g"):
        chord.clear()
        context.session.buffer.move(motions.top)
        return ModeResult(consumed=True, status="moved", message="top")
    chord.remember("g")
    return ModeResult(consumed=True, status="pending", message="g")


def chord_d(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``dd`` empties the current line but keeps it in place."""

    del match
    chord = context.session.chord
    if not chord.pending("d"):
        chord.remember("d")
        return ModeResult(consumed=True, status="pending", message="d")

    chord.clear()
    buffer = context.session.buffer
    with buffer.transaction("delete_line"):
        buffer.delete_to_line_end()
        buffer.delete_to_line_head()
    return _persisted(context, "deleted")


def chord_w(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``dw`` deletes to the next word start; plain ``w`` moves there."""

    del match
    session = context.session
    if session.chord.pending("d"):
        session.chord.remember("w")
        session.buffer.delete_next_word()
        return _persisted(context, "deleted")

    session.chord.remember("w")
    row, col = session.buffer.move(motions.word_forward)
    return ModeResult(consumed=True, status="moved", message=f"{row}:{col}")


def delete_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.buffer.delete_next_char()
    return _persisted(context, "deleted")


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    undone = context.session.buffer.undo()
    return _persisted(context, "undone" if undone else "nothing_to_undo")


def open_line_below(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.buffer.open_line_below()
    return _persisted(context, "opened", switch_to="insert")


def open_line_above(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.buffer.open_line_above()
    return _persisted(context, "opened", switch_to="insert")


__all__ = [
    "chord_g",
    "chord_d",
    "chord_w",
    "delete_char",
    "undo",
    "open_line_below",
    "open_line_above",
]
