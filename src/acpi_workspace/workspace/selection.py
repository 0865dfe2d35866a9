"""Circular selection over an ordered sequence."""

from __future__ import annotations

import bisect
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class SelectionList(Generic[T]):
    """Ordered items plus an optional selected index that wraps at both ends."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self.items: List[T] = list(items)
        self._selected: Optional[int] = None

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected

    @property
    def selected(self) -> Optional[T]:
        if self._selected is None:
            return None
        return self.items[self._selected]

    def select(self, index: Optional[int]) -> None:
        if index is None:
            self._selected = None
            return
        if not 0 <= index < len(self.items):
            raise IndexError(f"selection index {index} out of range")
        self._selected = index

    def advance(self) -> Optional[int]:
        if not self.items:
            return None
        if self._selected is None:
            self._selected = 0
        else:
            self._selected = (self._selected + 1) % len(self.items)
        return self._selected

    def retreat(self) -> Optional[int]:
        if not self.items:
            return None
        if self._selected is None:
            self._selected = 0
        else:
            self._selected = (self._selected - 1) % len(self.items)
        return self._selected

    def insert_sorted(self, item: T) -> bool:
        """Insert ``item`` keeping order; returns ``False`` if already present."""

        if item in self.items:
            return False
        bisect.insort(self.items, item)  # type: ignore[type-var]
        return True

    def remove(self, item: T) -> bool:
        try:
            self.items.remove(item)
        except ValueError:
            return False
        self._clamp()
        return True

    def _clamp(self) -> None:
        if self._selected is None:
            return
        if not self.items:
            self._selected = None
        elif self._selected >= len(self.items):
            self._selected = len(self.items) - 1

    def __contains__(self, item: object) -> bool:
        return item in self.items

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


__all__ = ["SelectionList"]
