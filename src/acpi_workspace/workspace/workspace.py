"""Workspace aggregate: the document list, modified set, and dirty tracker."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Tuple

from acpi_workspace.config import WorkspaceConfig
from acpi_workspace.errors import DocumentIOError
from acpi_workspace.host import CommandExecutor

from .dirty import DirtyTracker
from .selection import SelectionList
from .store import DocumentEntry, DocumentStore


class Workspace:
    """Owns every document entry for the session plus the modified set."""

    def __init__(self, store: DocumentStore, entries: Iterable[DocumentEntry]) -> None:
        self.store = store
        self.documents: SelectionList[DocumentEntry] = SelectionList(
            sorted(entries, key=lambda entry: entry.name)
        )
        self.modified: SelectionList[str] = SelectionList()
        self.tracker = DirtyTracker(store, self.modified)

    @classmethod
    def load(cls, config: WorkspaceConfig, executor: CommandExecutor) -> "Workspace":
        """Build the workspace; raises ``WorkspaceInitError`` on any failure."""

        store = DocumentStore(config, executor)
        return cls(store, store.load())

    @property
    def current(self) -> Optional[DocumentEntry]:
        return self.documents.selected

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.documents]

    def document(self, name: str) -> DocumentEntry:
        for entry in self.documents:
            if entry.name == name:
                return entry
        raise KeyError(f"Unknown document '{name}'")

    def open_next(self) -> Optional[Tuple[DocumentEntry, str]]:
        return self._open(self.documents.advance)

    def open_previous(self) -> Optional[Tuple[DocumentEntry, str]]:
        return self._open(self.documents.retreat)

    def _open(
        self, step: Callable[[], Optional[int]]
    ) -> Optional[Tuple[DocumentEntry, str]]:
        """Move the selection and read the newly selected document.

        A failed read puts the selection back where it was before re-raising.
        """

        previous = self.documents.selected_index
        index = step()
        if index is None:
            return None
        entry = self.documents.items[index]
        try:
            text = self.read(entry)
        except DocumentIOError:
            self.documents.select(previous)
            raise
        return entry, text

    def read(self, entry: DocumentEntry) -> str:
        return self.store.read_working(entry)

    def commit(self, entry: DocumentEntry, text: str) -> bool:
        return self.tracker.recompute(entry, text)

    def is_modified(self, name: str) -> bool:
        return name in self.modified


__all__ = ["Workspace"]
