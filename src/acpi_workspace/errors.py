"""Exception hierarchy shared across the workspace engine."""

from __future__ import annotations

from pathlib import Path


class WorkspaceError(RuntimeError):
    """Base class for every error raised by the workspace engine."""


class WorkspaceInitError(WorkspaceError):
    """Raised when the workspace cannot be constructed at startup."""

    def __init__(self, message: str, *, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class DocumentIOError(WorkspaceError):
    """Raised when a document backing file cannot be read or written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class PreflightError(WorkspaceError):
    """Raised when the host lacks the privilege or tools the workspace needs."""


__all__ = [
    "WorkspaceError",
    "WorkspaceInitError",
    "DocumentIOError",
    "PreflightError",
]
