"""Turns a run of key tokens into a binding, a pending prefix, or a miss."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from acpi_workspace.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry

Tokens = tuple[str, ...]


@dataclass(slots=True)
class _ModeTable:
    exact: Dict[Tokens, list[Binding]] = field(default_factory=dict)
    continuations: Dict[Tokens, set[str]] = field(default_factory=dict)

    def add(self, binding: Binding) -> None:
        tokens = binding.tokens
        self.exact.setdefault(tokens, []).append(binding)
        for cut in range(1, len(tokens)):
            self.continuations.setdefault(tokens[:cut], set()).add(tokens[cut])


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``pending`` means the tokens so far are a prefix of a longer binding."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tables: Dict[str, tuple[int, _ModeTable]] = {}

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        flags = context or {}
        key = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "length": len(key)},
        ) as handle:
            table = self._table(mode)
            candidates = [
                binding for binding in table.exact.get(key, ()) if binding.allows(flags)
            ]
            if candidates:
                # the binding with the most conditions is the most specific
                best = min(candidates, key=lambda b: (-len(b.when), b.id))
                handle.add_metadata("binding_id", best.id)
                return ResolutionResult(
                    status="match",
                    match=ResolutionMatch(best, self._registry.get_action(best.action_id)),
                )

            following = table.continuations.get(key)
            if following:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending", next_expected=tuple(sorted(following))
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss")

    def _table(self, mode: str) -> _ModeTable:
        revision = self._registry.revision()
        cached = self._tables.get(mode)
        if cached is not None and cached[0] == revision:
            return cached[1]
        table = _ModeTable()
        for binding in self._registry.iter_bindings(mode):
            table.add(binding)
        self._tables[mode] = (revision, table)
        return table


__all__ = ["KeymapResolver", "ResolutionResult", "ResolutionMatch"]
