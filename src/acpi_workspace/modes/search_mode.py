"""Search mode with a single-line pattern editor."""

from __future__ import annotations

from typing import List

from acpi_workspace.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import (
    execute_match,
    key_to_token,
    keymap_flag_context,
    require_keymap_resolver,
    update_flag,
)


class SearchMode(Mode):
    name = "search"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("acpi_workspace.modes.search")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.session.search.reset()
        update_flag(self.context, "search_active", True)
        self.context.bus.emit("search.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        update_flag(self.context, "search_active", False)
        self._pending.clear()
        self.context.bus.emit("search.end", self.current_pattern)
        self.context.session.search.discard()

    @property
    def current_pattern(self) -> str:
        return self.context.session.search.text

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
            return self.handle_key(key)
        return self._handle_text_input(key)

    def _handle_text_input(self, key: KeyInput) -> ModeResult:
        search = self.context.session.search

        if key.key == "BACKSPACE":
            search.backspace()
            return ModeResult(consumed=True, status="editing")

        if key.text and not key.modifiers:
            search.append(key.text)
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss", message="unhandled")
