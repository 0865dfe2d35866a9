"""Line-oriented text storage for workspace buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


def detect_newline(text: str) -> str:
    """``"\\r\\n"`` when every line break in ``text`` is CRLF, else ``"\\n"``."""

    breaks = text.count("\n")
    if breaks and text.count("\r\n") == breaks:
        return "\r\n"
    return "\n"


def split_lines(text: str, newline: str = "\n") -> List[str]:
    """Split ``text`` on ``newline``, dropping one trailing separator."""

    if text.endswith(newline):
        text = text[: -len(newline)]
    return text.split(newline)


@dataclass(slots=True)
class BufferDocument:
    """Immutable-ish text storage built on a simple list-of-lines model.

    Every edit produces a new document with a bumped ``version``; the line
    list of an existing document is never mutated in place. The separator
    and final-newline flag of the source text are carried across edits so
    ``to_text`` reproduces an unedited document byte for byte.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    newline: str = "\n"
    final_newline: bool = True

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        newline = detect_newline(text)
        return cls(
            _lines=split_lines(text, newline),
            version=0,
            newline=newline,
            final_newline=text.endswith(newline),
        )

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def replace(self, *, lines: Iterable[str]) -> "BufferDocument":
        """Return a new document with the provided lines and bumped version."""

        return BufferDocument(
            _lines=list(lines) or [""],
            version=self.version + 1,
            newline=self.newline,
            final_newline=self.final_newline,
        )

    def to_text(self) -> str:
        text = self.newline.join(self._lines)
        return text + self.newline if self.final_newline else text
