"""High-level buffer façade combining document, cursor state, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, List, Optional, Sequence

from acpi_workspace.runtime import telemetry

from . import motions
from .document import BufferDocument
from .motions import Motion
from .state import BufferState, Cursor
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_cursor, ensure_cursor


class Buffer:
    def __init__(
        self,
        *,
        name: str = "",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
        page_height: int = 20,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.undo_history = undo or UndoTimeline()
        self.page_height = page_height
        self._open_transactions = 0

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "",
        history_size: int = 100,
        page_height: int = 20,
    ) -> "Buffer":
        return cls(
            name=name,
            document=BufferDocument.from_text(text),
            undo=UndoTimeline(history_size),
            page_height=page_height,
        )

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def text(self) -> str:
        return self.document.to_text()

    def transaction(self, label: str) -> "Transaction":
        """Group edits so a single undo step reverts all of them."""

        return Transaction(self, label)

    # -- cursor -----------------------------------------------------------

    def set_cursor(self, row: int, col: int) -> None:
        self.state.set_cursor(*ensure_cursor(self.lines, (row, col)))

    def move(self, motion: Motion) -> Cursor:
        target = motion(self.lines, self.state.cursor)
        self.state.set_cursor(*clamp_cursor(self.lines, *target))
        return self.state.cursor

    def page_down(self) -> Cursor:
        return self.move(motions.page_down(self.page_height))

    def page_up(self) -> Cursor:
        return self.move(motions.page_up(self.page_height))

    # -- edits ------------------------------------------------------------

    def insert_text(self, text: str) -> None:
        with self.transaction("insert_text"):
            for index, chunk in enumerate(text.split("\n")):
                if index:
                    self._split_line()
                if chunk:
                    self._insert_chunk(chunk)

    def insert_newline(self) -> None:
        with self.transaction("insert_newline"):
            self._split_line()

    def delete_prev_char(self) -> bool:
        row, col = self.state.cursor
        if col == 0 and row == 0:
            return False
        with self.transaction("delete_prev_char"):
            lines = self._lines()
            if col > 0:
                line = lines[row]
                lines[row] = line[: col - 1] + line[col:]
                self._commit(lines, (row, col - 1))
            else:
                prev_len = len(lines[row - 1])
                lines[row - 1 : row + 1] = [lines[row - 1] + lines[row]]
                self._commit(lines, (row - 1, prev_len))
        return True

    def delete_next_char(self) -> bool:
        """Delete the character under the cursor, joining lines at line end."""

        row, col = self.state.cursor
        lines = self._lines()
        line = lines[row]
        if col < len(line):
            with self.transaction("delete_next_char"):
                lines[row] = line[:col] + line[col + 1 :]
                self._commit(lines, (row, col))
            return True
        return self._join_next_line("delete_next_char")

    def delete_to_line_end(self) -> bool:
        row, col = self.state.cursor
        lines = self._lines()
        if col >= len(lines[row]):
            return False
        with self.transaction("delete_to_line_end"):
            lines[row] = lines[row][:col]
            self._commit(lines, (row, col))
        return True

    def delete_to_line_head(self) -> bool:
        row, col = self.state.cursor
        if col == 0:
            return False
        with self.transaction("delete_to_line_head"):
            lines = self._lines()
            lines[row] = lines[row][col:]
            self._commit(lines, (row, 0))
        return True

    def delete_next_word(self) -> bool:
        """Delete up to the next word start on this line, or join at line end."""

        row, col = self.state.cursor
        lines = self._lines()
        line = lines[row]
        if col >= len(line):
            return self._join_next_line("delete_next_word")
        target = motions.next_word_start(line, col)
        stop = len(line) if target is None else target
        with self.transaction("delete_next_word"):
            lines[row] = line[:col] + line[stop:]
            self._commit(lines, (row, col))
        return True

    def open_line_below(self) -> None:
        row, _ = self.state.cursor
        with self.transaction("open_line_below"):
            lines = self._lines()
            lines.insert(row + 1, "")
            self._commit(lines, (row + 1, 0))

    def open_line_above(self) -> None:
        row, _ = self.state.cursor
        with self.transaction("open_line_above"):
            lines = self._lines()
            lines.insert(row, "")
            self._commit(lines, (row, 0))

    def undo(self) -> bool:
        entry = self.undo_history.undo()
        if entry is None:
            return False
        with telemetry.span(
            "buffer::undo",
            component=True,
            metadata={"buffer": self.name, "label": entry.label},
        ):
            self.document = self.document.replace(lines=entry.lines)
            self.state.set_cursor(*clamp_cursor(self.lines, *entry.cursor))
            self.state.last_change_tick = self.document.version
        return True

    # -- internals --------------------------------------------------------

    def _lines(self) -> List[str]:
        return list(self.document.snapshot())

    def _commit(self, lines: List[str], cursor: Cursor) -> None:
        self.document = self.document.replace(lines=lines)
        self.state.set_cursor(*clamp_cursor(self.lines, *cursor))
        self.state.last_change_tick = self.document.version

    def _insert_chunk(self, chunk: str) -> None:
        row, col = self.state.cursor
        lines = self._lines()
        line = lines[row]
        lines[row] = line[:col] + chunk + line[col:]
        self._commit(lines, (row, col + len(chunk)))

    def _split_line(self) -> None:
        row, col = self.state.cursor
        lines = self._lines()
        line = lines[row]
        lines[row : row + 1] = [line[:col], line[col:]]
        self._commit(lines, (row + 1, 0))

    def _join_next_line(self, label: str) -> bool:
        row, col = self.state.cursor
        lines = self._lines()
        if row + 1 >= len(lines):
            return False
        with self.transaction(label):
            lines[row : row + 2] = [lines[row] + lines[row + 1]]
            self._commit(lines, (row, col))
        return True


class Transaction(AbstractContextManager["Transaction"]):
    """Records one undo entry for the outermost block that changed content."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_lines: Sequence[str] = ()
        self._before_cursor: Cursor = (0, 0)
        self._outermost = False

    def __enter__(self) -> "Transaction":
        self._outermost = self.buffer._open_transactions == 0
        self.buffer._open_transactions += 1
        self._before_lines = self.buffer.document.snapshot()
        self._before_cursor = self.buffer.state.cursor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.buffer._open_transactions -= 1
        try:
            if (
                exc_type is None
                and self._outermost
                and self.buffer.document.snapshot() != self._before_lines
            ):
                self.buffer.undo_history.push(
                    UndoEntry(
                        label=self.label,
                        lines=self._before_lines,
                        cursor=self._before_cursor,
                    )
                )
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False
