"""Read-only projection of engine state for renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from acpi_workspace.buffer.state import Cursor
from acpi_workspace.engine import WorkspaceEngine
from acpi_workspace.session import EditMode


@dataclass(frozen=True, slots=True)
class WorkspaceView:
    documents: Tuple[str, ...]
    selected_document: Optional[int]
    modified: Tuple[str, ...]
    selected_modified: Optional[int]
    title: str
    lines: Tuple[str, ...]
    cursor: Cursor
    mode: str
    search_text: str
    search_error: Optional[str]
    log_lines: Tuple[str, ...]
    status: str
    # (keys, description) for every binding of the active mode
    key_help: Tuple[Tuple[str, str], ...] = ()

    @property
    def content(self) -> str:
        return "\n".join(self.lines)


def project(engine: WorkspaceEngine) -> WorkspaceView:
    """Snapshot everything a renderer needs after a key has been handled."""

    session = engine.session
    workspace = engine.workspace
    if workspace is not None:
        documents = tuple(workspace.names)
        selected_document = workspace.documents.selected_index
        modified = tuple(workspace.modified.items)
        selected_modified = workspace.modified.selected_index
    else:
        documents, selected_document = (), None
        modified, selected_modified = (), None

    has_document = session.has_document
    in_search = session.mode is EditMode.SEARCH
    last = engine.last_result
    return WorkspaceView(
        documents=documents,
        selected_document=selected_document,
        modified=modified,
        selected_modified=selected_modified,
        title=session.document.name if session.document else "",
        lines=tuple(session.buffer.lines) if has_document else (),
        cursor=session.buffer.cursor if has_document else (0, 0),
        mode=session.mode.value,
        search_text=session.search.text if in_search else "",
        search_error=session.search.error,
        log_lines=tuple(engine.log.lines()),
        status=(last.message or last.status) if last else "",
        key_help=tuple(engine.registry.describe(engine.mode)),
    )


__all__ = ["WorkspaceView", "project"]
