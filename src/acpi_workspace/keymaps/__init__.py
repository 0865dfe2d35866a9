"""Declarative keymap registry and default bindings."""

from .models import (
    DOCUMENT_LOADED,
    ActionRef,
    Binding,
    KeySequence,
    WhenClause,
    format_token,
)
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import apply_key_overrides, load_default_keymaps

__all__ = [
    "DOCUMENT_LOADED",
    "ActionRef",
    "Binding",
    "KeySequence",
    "WhenClause",
    "format_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "apply_key_overrides",
    "load_default_keymaps",
]
