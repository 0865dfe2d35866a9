"""Insert mode: forwards keys into the buffer and persists after each one."""

from __future__ import annotations

from typing import Callable, Dict, List

from acpi_workspace.buffer import Buffer, motions
from acpi_workspace.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import (
    execute_match,
    key_to_token,
    keymap_flag_context,
    require_keymap_resolver,
)

_EDIT_KEYS: Dict[str, Callable[[Buffer], object]] = {
    "ENTER": Buffer.insert_newline,
    "BACKSPACE": Buffer.delete_prev_char,
    "DELETE": Buffer.delete_next_char,
    "TAB": lambda buffer: buffer.insert_text("\t"),
    "LEFT": lambda buffer: buffer.move(motions.back),
    "RIGHT": lambda buffer: buffer.move(motions.forward),
    "UP": lambda buffer: buffer.move(motions.up),
    "DOWN": lambda buffer: buffer.move(motions.down),
    "HOME": lambda buffer: buffer.move(motions.head),
    "END": lambda buffer: buffer.move(motions.end),
}


class InsertMode(Mode):
    name = "insert"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("acpi_workspace.modes.insert")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        self._pending.append(token)
        result = self._resolver.resolve(
            self.name, tuple(self._pending), context=keymap_flag_context(self.context)
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            return execute_match(self.context, result.match)

        if result.status == "pending":
            return ModeResult(consumed=True, status="pending", message="awaiting_sequence")

        abandoned = len(self._pending) > 1
        self._pending.clear()
        if abandoned:
            # an unfinished sequence does not swallow the key that broke it
            return self.handle_key(key)
        return self._forward(key)

    def _forward(self, key: KeyInput) -> ModeResult:
        session = self.context.session
        if not session.has_document:
            return ModeResult(consumed=False, status="noop", message="no_document")

        edit = _EDIT_KEYS.get(key.key)
        if edit is not None:
            edit(session.buffer)
        elif key.text and not key.modifiers:
            session.buffer.insert_text(key.text)
        else:
            return ModeResult(consumed=False, status="miss", message=key_to_token(key))

        modified = self.context.commit_buffer()
        return ModeResult(
            consumed=True, status="edited", message="modified" if modified else None
        )
