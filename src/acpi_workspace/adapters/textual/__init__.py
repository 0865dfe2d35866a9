"""Textual front end; ``app`` imports textual, the controller does not."""

from .controller import TextualUIHooks, TextualWorkspaceAdapter, normalize_textual_key

__all__ = ["TextualUIHooks", "TextualWorkspaceAdapter", "normalize_textual_key"]
