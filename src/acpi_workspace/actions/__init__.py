"""High-level workspace verbs bound to keys."""

from .core import (
    append_mode,
    enter_insert_mode,
    enter_search_mode,
    exit_to_normal_mode,
    quit_workspace,
)
from .edit import (
    chord_d,
    chord_g,
    chord_w,
    delete_char,
    open_line_above,
    open_line_below,
    undo,
)
from .navigation import (
    buffer_bottom,
    cursor_down,
    cursor_left,
    cursor_right,
    cursor_up,
    line_end,
    line_head,
    next_document,
    page_down,
    page_up,
    previous_document,
    word_back,
)
from .search import cancel_search, search_next, search_previous, submit_search
from .workspace import apply_modified

__all__ = [
    "append_mode",
    "enter_insert_mode",
    "enter_search_mode",
    "exit_to_normal_mode",
    "quit_workspace",
    "chord_d",
    "chord_g",
    "chord_w",
    "delete_char",
    "open_line_above",
    "open_line_below",
    "undo",
    "buffer_bottom",
    "cursor_down",
    "cursor_left",
    "cursor_right",
    "cursor_up",
    "line_end",
    "line_head",
    "next_document",
    "page_down",
    "page_up",
    "previous_document",
    "word_back",
    "cancel_search",
    "search_next",
    "search_previous",
    "submit_search",
    "apply_modified",
]
