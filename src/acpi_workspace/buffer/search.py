"""Regex search over buffer lines with wrap-around."""

from __future__ import annotations

import re
from typing import Optional, Pattern, Sequence

from .state import Cursor


def _starts(pattern: Pattern[str], line: str) -> list[int]:
    return [match.start() for match in pattern.finditer(line)]


def search_forward(
    lines: Sequence[str], cursor: Cursor, pattern: Pattern[str]
) -> Optional[Cursor]:
    """Next match start after ``cursor``, wrapping past the end of the buffer.

    Matches never span lines. Returns ``None`` when nothing matches.
    """

    row, col = cursor
    for start in _starts(pattern, lines[row]):
        if start > col:
            return (row, start)
    for offset in range(1, len(lines)):
        target = (row + offset) % len(lines)
        starts = _starts(pattern, lines[target])
        if starts:
            return (target, starts[0])
    starts = _starts(pattern, lines[row])
    if starts:
        return (row, starts[0])
    return None


def search_back(
    lines: Sequence[str], cursor: Cursor, pattern: Pattern[str]
) -> Optional[Cursor]:
    """Previous match start before ``cursor``, wrapping past the buffer start."""

    row, col = cursor
    for start in reversed(_starts(pattern, lines[row])):
        if start < col:
            return (row, start)
    for offset in range(1, len(lines)):
        target = (row - offset) % len(lines)
        starts = _starts(pattern, lines[target])
        if starts:
            return (target, starts[-1])
    starts = _starts(pattern, lines[row])
    if starts:
        return (row, starts[-1])
    return None


def compile_pattern(text: str) -> Optional[Pattern[str]]:
    """Compile ``text``; an empty pattern clears the search (``None``).

    Raises :class:`re.error` on invalid syntax.
    """

    if not text:
        return None
    return re.compile(text)


__all__ = ["search_forward", "search_back", "compile_pattern"]
