"""Pure cursor motions over a list of lines.

Each motion takes the current lines and cursor and returns the new cursor.
Columns range over ``0..len(line)`` inclusive; forward/back movement and
word motions cross line boundaries.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Sequence

from .state import Cursor
from .validation import clamp_cursor

Motion = Callable[[Sequence[str], Cursor], Cursor]


class CharKind(Enum):
    SPACE = "space"
    WORD = "word"
    PUNCT = "punct"


def char_kind(ch: str) -> CharKind:
    if ch.isspace():
        return CharKind.SPACE
    if ch.isalnum() or ch == "_":
        return CharKind.WORD
    return CharKind.PUNCT


def next_word_start(line: str, col: int) -> Optional[int]:
    """Column of the first word start after ``col`` on ``line``, if any."""

    for i in range(col + 1, len(line)):
        kind = char_kind(line[i])
        if kind is not CharKind.SPACE and kind is not char_kind(line[i - 1]):
            return i
    return None


def previous_word_start(line: str, col: int) -> Optional[int]:
    """Column of the nearest word start before ``col`` on ``line``, if any."""

    for i in range(min(col, len(line)) - 1, -1, -1):
        kind = char_kind(line[i])
        if kind is CharKind.SPACE:
            continue
        if i == 0 or char_kind(line[i - 1]) is not kind:
            return i
    return None


def forward(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, col = cursor
    if col < len(lines[row]):
        return (row, col + 1)
    if row + 1 < len(lines):
        return (row + 1, 0)
    return cursor


def back(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, col = cursor
    if col > 0:
        return (row, col - 1)
    if row > 0:
        return (row - 1, len(lines[row - 1]))
    return cursor


def up(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, col = cursor
    return clamp_cursor(lines, row - 1, col)


def down(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, col = cursor
    return clamp_cursor(lines, row + 1, col)


def word_forward(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, col = cursor
    target = next_word_start(lines[row], col)
    if target is not None:
        return (row, target)
    if row + 1 < len(lines):
        return (row + 1, 0)
    return (row, len(lines[row]))


def word_back(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, col = cursor
    target = previous_word_start(lines[row], col)
    if target is not None:
        return (row, target)
    if col > 0:
        return (row, 0)
    if row > 0:
        return (row - 1, len(lines[row - 1]))
    return cursor


def head(lines: Sequence[str], cursor: Cursor) -> Cursor:
    del lines
    return (cursor[0], 0)


def end(lines: Sequence[str], cursor: Cursor) -> Cursor:
    row, _ = cursor
    return (row, len(lines[row]))


def top(lines: Sequence[str], cursor: Cursor) -> Cursor:
    return clamp_cursor(lines, 0, cursor[1])


def bottom(lines: Sequence[str], cursor: Cursor) -> Cursor:
    return clamp_cursor(lines, len(lines) - 1, cursor[1])


def page_down(height: int) -> Motion:
    def _page_down(lines: Sequence[str], cursor: Cursor) -> Cursor:
        row, col = cursor
        return clamp_cursor(lines, row + max(1, height), col)

    return _page_down


def page_up(height: int) -> Motion:
    def _page_up(lines: Sequence[str], cursor: Cursor) -> Cursor:
        row, col = cursor
        return clamp_cursor(lines, row - max(1, height), col)

    return _page_up


__all__ = [
    "Motion",
    "CharKind",
    "char_kind",
    "next_word_start",
    "previous_word_start",
    "forward",
    "back",
    "up",
    "down",
    "word_forward",
    "word_back",
    "head",
    "end",
    "top",
    "bottom",
    "page_down",
    "page_up",
]
