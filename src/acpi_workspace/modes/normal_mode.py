"""Normal mode: motions, chords, and workspace commands."""

from __future__ import annotations

from typing import List

from acpi_workspace.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import (
    execute_match,
    key_to_token,
    keymap_flag_context,
    require_keymap_resolver,
)


class NormalMode(Mode):
    """Resolves keys through the normal-mode keymap.

    Every key that completes (or misses) leaves its own token in the chord
    slot unless the action is a chord participant, which manages the slot
    itself.
    """

    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("acpi_workspace.modes.normal")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    @property
    def pending_tokens(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        self._pending.append(token)
        result = self._resolver.resolve(
            self.name, tuple(self._pending), context=keymap_flag_context(self.context)
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            outcome = execute_match(self.context, result.match)
            if not result.match.action.metadata.get("chord", False):
                self.context.session.chord.remember(token)
            return outcome

        if result.status == "pending":
            return ModeResult(consumed=True, status="pending", message="awaiting_sequence")

        abandoned = len(self._pending) > 1
        self._pending.clear()
        if abandoned:
            # an unfinished sequence does not swallow the key that broke it
            return self.handle_key(key)
        self.context.session.chord.remember(token)
        return ModeResult(consumed=False, status="miss", message=token)
