"""Built-in keymaps that seed each mode with the workspace bindings."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from acpi_workspace.actions import core as core_actions
from acpi_workspace.actions import edit as edit_actions
from acpi_workspace.actions import navigation as nav_actions
from acpi_workspace.actions import search as search_actions
from acpi_workspace.actions import workspace as workspace_actions

from .models import DOCUMENT_LOADED, ActionRef, Binding, KeySequence
from .registry import KeymapRegistry


def _action(
    action_id: str, handler: Callable[..., object], description: str, **metadata: object
) -> ActionRef:
    return ActionRef(action_id, handler, description=description, metadata=metadata)


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    _action("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    _action("core.append", core_actions.append_mode, "Append after the cursor"),
    _action("core.exit_to_normal", core_actions.exit_to_normal_mode, "Normal mode"),
    _action("core.enter_search", core_actions.enter_search_mode, "Search pattern"),
    _action("core.quit", core_actions.quit_workspace, "Quit the workspace"),
    _action("nav.left", nav_actions.cursor_left, "Cursor left"),
    _action("nav.right", nav_actions.cursor_right, "Cursor right"),
    _action("nav.up", nav_actions.cursor_up, "Cursor up"),
    _action("nav.down", nav_actions.cursor_down, "Cursor down"),
    _action("nav.word_back", nav_actions.word_back, "Previous word"),
    _action("nav.line_head", nav_actions.line_head, "Line head"),
    _action("nav.line_end", nav_actions.line_end, "Line end"),
    _action("nav.bottom", nav_actions.buffer_bottom, "Last line"),
    _action("nav.page_down", nav_actions.page_down, "Page down"),
    _action("nav.page_up", nav_actions.page_up, "Page up"),
    _action("nav.next_document", nav_actions.next_document, "Next document"),
    _action("nav.previous_document", nav_actions.previous_document, "Previous document"),
    _action("edit.chord_g", edit_actions.chord_g, "gg: first line", chord=True),
    _action("edit.chord_d", edit_actions.chord_d, "dd: clear line", chord=True),
    _action("edit.chord_w", edit_actions.chord_w, "w: next word, dw: delete", chord=True),
    _action("edit.delete_char", edit_actions.delete_char, "Delete character"),
    _action("edit.undo", edit_actions.undo, "Undo"),
    _action("edit.open_below", edit_actions.open_line_below, "Open line below"),
    _action("edit.open_above", edit_actions.open_line_above, "Open line above"),
    _action("search.submit", search_actions.submit_search, "Install the pattern"),
    _action("search.cancel", search_actions.cancel_search, "Discard the pattern"),
    _action("search.next", search_actions.search_next, "Next match"),
    _action("search.previous", search_actions.search_previous, "Previous match"),
    _action("workspace.apply", workspace_actions.apply_modified, "Apply modified"),
)

_LOADED = (DOCUMENT_LOADED,)
_DESCRIPTIONS = {action.id: action.description for action in DEFAULT_ACTIONS}


def _binding(
    binding_id: str,
    mode: str,
    key: str,
    action_id: str,
    *,
    when: Sequence[str] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(key),
        action_id=action_id,
        description=_DESCRIPTIONS[action_id],
        when=tuple(when),
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _binding("normal.quit", "normal", "ctrl+c", "core.quit"),
    _binding("normal.apply", "normal", "ctrl+a", "workspace.apply"),
    _binding("normal.next_document", "normal", "DOWN", "nav.next_document"),
    _binding("normal.previous_document", "normal", "UP", "nav.previous_document"),
    _binding("normal.left", "normal", "h", "nav.left", when=_LOADED),
    _binding("normal.right", "normal", "l", "nav.right", when=_LOADED),
    _binding("normal.up", "normal", "k", "nav.up", when=_LOADED),
    _binding("normal.down", "normal", "j", "nav.down", when=_LOADED),
    _binding("normal.word_back", "normal", "b", "nav.word_back", when=_LOADED),
    _binding("normal.line_head", "normal", "0", "nav.line_head", when=_LOADED),
    _binding("normal.line_end", "normal", "$", "nav.line_end", when=_LOADED),
    _binding("normal.bottom", "normal", "G", "nav.bottom", when=_LOADED),
    _binding("normal.page_down", "normal", "PAGEDOWN", "nav.page_down", when=_LOADED),
    _binding("normal.page_up", "normal", "PAGEUP", "nav.page_up", when=_LOADED),
    _binding("normal.chord_g", "normal", "g", "edit.chord_g", when=_LOADED),
    _binding("normal.chord_d", "normal", "d", "edit.chord_d", when=_LOADED),
    _binding("normal.chord_w", "normal", "w", "edit.chord_w", when=_LOADED),
    _binding("normal.delete_char", "normal", "x", "edit.delete_char", when=_LOADED),
    _binding("normal.undo", "normal", "u", "edit.undo", when=_LOADED),
    _binding("normal.enter_insert", "normal", "i", "core.enter_insert", when=_LOADED),
    _binding("normal.append", "normal", "a", "core.append", when=_LOADED),
    _binding("normal.open_below", "normal", "o", "edit.open_below", when=_LOADED),
    _binding("normal.open_above", "normal", "O", "edit.open_above", when=_LOADED),
    _binding("normal.search_next", "normal", "n", "search.next", when=_LOADED),
    _binding("normal.search_previous", "normal", "N", "search.previous", when=_LOADED),
    _binding("normal.enter_search", "normal", "/", "core.enter_search", when=_LOADED),
    _binding("insert.exit_escape", "insert", "ESC", "core.exit_to_normal"),
    _binding("search.cancel_escape", "search", "ESC", "search.cancel"),
    _binding("search.submit_enter", "search", "ENTER", "search.submit"),
)


def load_default_keymaps(registry: KeymapRegistry) -> None:
    """Register built-in actions and bindings for every mode."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding)


def apply_key_overrides(
    registry: KeymapRegistry, overrides: Iterable[tuple[str, Sequence[str]]]
) -> None:
    """Rebind each named binding onto its replacement keys, in order.

    Unknown binding ids raise ``KeyError``; a rebind that lands on keys
    another binding already owns raises ``KeymapConflictError``.
    """

    for binding_id, keys in overrides:
        registry.rebind(binding_id, *keys)


__all__ = [
    "load_default_keymaps",
    "apply_key_overrides",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
]
