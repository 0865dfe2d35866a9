"""Live editing context for the currently selected document."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Pattern

from acpi_workspace.buffer import Buffer, compile_pattern
from acpi_workspace.config import MAX_HISTORY_SIZE, SEARCH_MARKER
from acpi_workspace.workspace import DocumentEntry

NEUTRAL = " "


class EditMode(str, Enum):
    """Editing modes; exactly one is active at a time."""

    NORMAL = "normal"
    INSERT = "insert"
    SEARCH = "search"


@dataclass(slots=True)
class ChordMemory:
    """Single "last key" slot shared by every two-keystroke command.

    Keys outside a chord overwrite the slot with their own token instead of
    resetting it, so an interrupted chord is abandoned rather than cleared.
    """

    last: str = NEUTRAL

    def pending(self, key: str) -> bool:
        return self.last == key

    def remember(self, key: str) -> None:
        self.last = key

    def clear(self) -> None:
        self.last = NEUTRAL


@dataclass(slots=True)
class SearchState:
    """Pattern being typed plus the last pattern committed to the buffer."""

    text: str = ""
    active: Optional[Pattern[str]] = None
    error: Optional[str] = None

    def reset(self) -> None:
        self.text = SEARCH_MARKER
        self.error = None

    def discard(self) -> None:
        self.text = ""
        self.error = None

    def append(self, chunk: str) -> None:
        self.text += chunk
        self.error = None

    def backspace(self) -> None:
        if len(self.text) > len(SEARCH_MARKER):
            self.text = self.text[:-1]
        self.error = None

    @property
    def pattern_text(self) -> str:
        return self.text.lstrip(SEARCH_MARKER)

    def commit(self) -> Optional[Pattern[str]]:
        """Install the typed pattern; raises :class:`re.error` and keeps state."""

        try:
            compiled = compile_pattern(self.pattern_text)
        except re.error as exc:
            self.error = str(exc)
            raise
        self.active = compiled
        self.text = ""
        self.error = None
        return compiled


@dataclass(slots=True)
class EditSession:
    """Buffer, cursor, mode, chord slot, and search state for one document."""

    buffer: Buffer = field(default_factory=Buffer)
    document: Optional[DocumentEntry] = None
    mode: EditMode = EditMode.NORMAL
    chord: ChordMemory = field(default_factory=ChordMemory)
    search: SearchState = field(default_factory=SearchState)
    history_size: int = MAX_HISTORY_SIZE
    page_height: int = 20

    @property
    def has_document(self) -> bool:
        return self.document is not None

    def load(self, entry: DocumentEntry, text: str) -> None:
        """Take over ``entry`` with a fresh buffer and empty undo history."""

        self.document = entry
        self.buffer = Buffer.from_text(
            text,
            name=entry.name,
            history_size=self.history_size,
            page_height=self.page_height,
        )


__all__ = ["EditMode", "ChordMemory", "SearchState", "EditSession", "NEUTRAL"]
