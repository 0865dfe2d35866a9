"""Key tokens, bindings, and the actions they point at."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

# Flag every editing binding is gated on; true while a document is open.
DOCUMENT_LOADED = "document_loaded"


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted({mod.strip().lower() for mod in modifiers if mod.strip()}))


def format_token(key: str, modifiers: Iterable[str] = ()) -> str:
    """``("c", ["Ctrl"])`` -> ``"ctrl+c"``; bare keys pass through unchanged."""

    return "+".join((*normalize_modifiers(modifiers), key))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return format_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, text: str) -> "KeyStroke":
        """Read ``"ctrl+a"``; a lone or trailing ``+`` names the plus key."""

        head, _, key = text.rpartition("+")
        if not key:
            head, key = head.removesuffix("+"), "+"
        return cls(key, tuple(part for part in head.split("+") if part))


@dataclass(frozen=True, slots=True)
class KeySequence:
    """One or more strokes that must arrive back to back."""

    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("a key sequence needs at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(key) for key in keys if key))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """``flag`` must evaluate to ``expected``; ``"!flag"`` parses as negated."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        text = expression.strip()
        negated = text.startswith("!")
        return cls(text[1:] if negated else text, not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) == self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler invoked as ``handler(context, match)``.

    ``metadata`` carries per-action switches such as ``chord=True``.
    """

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Key sequence in one mode mapped to an action, optionally gated by flags."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        object.__setattr__(
            self,
            "when",
            tuple(
                clause if isinstance(clause, WhenClause) else WhenClause.parse(clause)
                for clause in self.when
            ),
        )

    @property
    def tokens(self) -> tuple[str, ...]:
        return self.sequence.tokens

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = [
    "KeyStroke",
    "KeySequence",
    "WhenClause",
    "ActionRef",
    "Binding",
    "format_token",
    "normalize_modifiers",
    "DOCUMENT_LOADED",
]
