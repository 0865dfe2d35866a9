"""Buffer abstractions, cursor motions, search, and bounded undo."""

from .buffer import Buffer, Transaction
from .document import BufferDocument, detect_newline, split_lines
from .state import BufferState, Cursor
from .undo import UndoEntry, UndoTimeline
from .validation import BufferValidationError, clamp_cursor, ensure_cursor
from . import motions
from .search import compile_pattern, search_back, search_forward

__all__ = [
    "BufferDocument",
    "BufferState",
    "Cursor",
    "UndoTimeline",
    "UndoEntry",
    "Buffer",
    "Transaction",
    "BufferValidationError",
    "clamp_cursor",
    "ensure_cursor",
    "detect_newline",
    "split_lines",
    "motions",
    "compile_pattern",
    "search_forward",
    "search_back",
]
