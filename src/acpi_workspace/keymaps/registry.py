"""Action and binding storage shared by every mode's resolver."""

from __future__ import annotations

import dataclasses
from typing import Dict, Iterator, Optional

from acpi_workspace.errors import WorkspaceError
from acpi_workspace.runtime.telemetry import span

from .models import ActionRef, Binding, KeySequence


class KeymapConflictError(WorkspaceError):
    """Two bindings in one mode claim the same keys under the same flags."""

    def __init__(self, binding: Binding, conflicts: list[Binding]):
        names = ", ".join(conflict.id for conflict in conflicts)
        super().__init__(
            f"binding '{binding.id}' ({' '.join(binding.tokens)}) clashes with {names}"
        )
        self.binding = binding
        self.conflicts = tuple(conflicts)


class KeymapRegistry:
    """Holds actions by id and bindings by id.

    ``revision`` increases on every binding change so resolvers know when
    their lookup tables are stale.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"unknown action '{action_id}'")
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"unknown binding '{binding_id}'")
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef) -> ActionRef:
        if action.id in self._actions:
            raise ValueError(f"action '{action.id}' is already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding) -> Binding:
        if binding.id in self._bindings:
            raise ValueError(f"binding '{binding.id}' is already registered")
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ):
            return self._store(binding)

    def rebind(self, binding_id: str, *keys: str) -> Binding:
        """Move ``binding_id`` onto ``keys``, keeping its action and flags."""

        current = self.get_binding(binding_id)
        with span(
            "keymaps::rebind",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id, "keys": " ".join(keys)},
        ):
            updated = dataclasses.replace(
                current, sequence=KeySequence.from_strings(*keys)
            )
            return self._store(updated)

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def describe(self, mode: str) -> list[tuple[str, str]]:
        """``(keys, description)`` rows for ``mode``, sorted by keys."""

        return sorted(
            (" ".join(binding.tokens), binding.description or binding.action_id)
            for binding in self.iter_bindings(mode)
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        """Other bindings that would fire on exactly the same input."""

        return [
            existing
            for existing in self.iter_bindings(binding.mode)
            if existing.id != binding.id
            and existing.tokens == binding.tokens
            and existing.when_map == binding.when_map
        ]

    def _store(self, binding: Binding) -> Binding:
        if binding.action_id not in self._actions:
            raise KeyError(
                f"binding '{binding.id}' points at unknown action '{binding.action_id}'"
            )
        conflicts = self.detect_conflicts(binding)
        if conflicts:
            raise KeymapConflictError(binding, conflicts)
        self._bindings[binding.id] = binding
        self._revision += 1
        return binding


__all__ = ["KeymapRegistry", "KeymapConflictError"]
