"""Bounded undo history for buffer operations."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Sequence

from .state import Cursor


@dataclass(frozen=True, slots=True)
class UndoEntry:
    label: str
    lines: Sequence[str]
    cursor: Cursor


class UndoTimeline:
    """Linear undo stack that forgets its oldest state past ``capacity``."""

    def __init__(self, capacity: int = 100) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._entries: Deque[UndoEntry] = deque(maxlen=capacity)

    def push(self, entry: UndoEntry) -> None:
        self._entries.append(entry)

    def undo(self) -> Optional[UndoEntry]:
        if not self._entries:
            return None
        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
