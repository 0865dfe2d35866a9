"""Dirty tracking: keeps the modified set consistent with on-disk content."""

from __future__ import annotations

from acpi_workspace.runtime import telemetry

from .selection import SelectionList
from .store import DocumentEntry, DocumentStore


class DirtyTracker:
    """Persists a buffer and reconciles ``modified`` against the baseline."""

    def __init__(self, store: DocumentStore, modified: SelectionList[str]) -> None:
        self.store = store
        self.modified = modified

    def recompute(self, entry: DocumentEntry, text: str) -> bool:
        """Write ``text`` back for ``entry`` and return whether it diverges.

        Raises :class:`~acpi_workspace.errors.DocumentIOError` when either
        backing file cannot be written or read.
        """

        with telemetry.span(
            "dirty::recompute", component="dirty", metadata={"document": entry.name}
        ) as handle:
            entry.buffer = text
            self.store.write_working(entry, text)
            diverged = self.store.read_working_bytes(
                entry
            ) != self.store.read_baseline_bytes(entry)
            present = entry.name in self.modified

            if diverged and not present:
                self.modified.insert_sorted(entry.name)
                telemetry.record_event("dirty.marked", data={"document": entry.name})
            elif not diverged and present:
                self.modified.remove(entry.name)
                telemetry.record_event("dirty.cleared", data={"document": entry.name})
            handle.add_metadata("diverged", diverged)
        return diverged


__all__ = ["DirtyTracker"]
