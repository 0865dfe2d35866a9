"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Sequence

from .state import Cursor


class BufferValidationError(RuntimeError):
    """Raised when callers provide out-of-bounds cursor info."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_cursor(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, col = cursor
    if row < 0 or row >= len(lines):
        raise BufferValidationError("Row out of range", cursor=cursor)
    if col < 0 or col > len(lines[row]):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


def clamp_cursor(lines: Sequence[str], row: int, col: int) -> Cursor:
    max_row = max(0, len(lines) - 1)
    row = max(0, min(row, max_row))
    line = lines[row] if lines else ""
    col = max(0, min(col, len(line)))
    return (row, col)
