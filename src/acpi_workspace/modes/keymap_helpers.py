"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import Dict, MutableMapping, cast

from acpi_workspace.keymaps import KeymapResolver, ResolutionMatch
from acpi_workspace.keymaps.models import DOCUMENT_LOADED, format_token
from acpi_workspace.runtime import telemetry

from .base_mode import KeyInput, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    return format_token(key.key, key.modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def keymap_flag_context(context: ModeContext) -> Dict[str, bool]:
    """Static flags from ``extras`` plus the live ``document_loaded`` flag."""

    flags = dict(
        cast(MutableMapping[str, bool], context.extras.setdefault("keymap_flags", {}))
    )
    flags[DOCUMENT_LOADED] = context.session.has_document
    return flags


def update_flag(context: ModeContext, key: str, value: bool) -> None:
    flags = cast(
        MutableMapping[str, bool], context.extras.setdefault("keymap_flags", {})
    )
    flags[key] = value


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


__all__ = [
    "DOCUMENT_LOADED",
    "execute_match",
    "key_to_token",
    "require_keymap_resolver",
    "keymap_flag_context",
    "update_flag",
]
