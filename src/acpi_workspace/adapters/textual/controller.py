"""Textual adapter that wires the workspace engine into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from acpi_workspace.engine import WorkspaceEngine
from acpi_workspace.modes import KeyInput, ModeResult
from acpi_workspace.presentation import WorkspaceView, project

# Textual key names mapped onto the tokens the keymaps are written against.
SPECIAL_KEYS: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
}

BUS_EVENTS = (
    "document.selected",
    "search.start",
    "search.end",
    "search.submit",
    "search.error",
    "apply.finished",
    "workspace.quit",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def normalize_textual_key(
    key: str, character: Optional[str] = None
) -> Optional[KeyInput]:
    """Translate a Textual ``events.Key`` (name plus character) to ``KeyInput``."""

    if key in SPECIAL_KEYS:
        return KeyInput(key=SPECIAL_KEYS[key])
    if key.startswith("ctrl+") and len(key) > len("ctrl+"):
        return KeyInput(key=key[len("ctrl+") :], modifiers=("ctrl",))
    if character and len(character) == 1 and character.isprintable():
        return KeyInput(key=character, text=character)
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[WorkspaceView], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualWorkspaceAdapter:
    """Bridges the engine and its bus events to a Textual-friendly surface."""

    def __init__(self, engine: WorkspaceEngine, hooks: TextualUIHooks) -> None:
        self.engine = engine
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    @property
    def quit_requested(self) -> bool:
        return self.engine.quit_requested

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Dispatch an already-normalized key and redraw."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.engine.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def handle_key_event(
        self, key: str, character: Optional[str] = None
    ) -> Optional[ModeResult]:
        """Normalize a raw Textual key; unknown keys are ignored."""

        normalized = normalize_textual_key(key, character)
        if normalized is None:
            return None
        return self.handle_textual_key(
            normalized.key, text=normalized.text, modifiers=normalized.modifiers
        )

    def refresh(self) -> WorkspaceView:
        view = project(self.engine)
        self.hooks.update_view(view)
        return view

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self.refresh()

    def _subscribe_events(self) -> None:
        bus = self.engine.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.engine.session
        return {
            "mode": self.engine.mode,
            "document": session.document.name if session.document else None,
            "cursor": session.buffer.cursor,
            "chord": session.chord.last,
            "search": session.search.text,
        }


__all__ = ["TextualWorkspaceAdapter", "TextualUIHooks", "normalize_textual_key"]
