"""Document set, dirty tracking, operation log, and apply coordination."""

from .apply import ApplyCoordinator
from .dirty import DirtyTracker
from .oplog import LogEntry, OperationLog
from .selection import SelectionList
from .store import DocumentEntry, DocumentStore
from .workspace import Workspace

__all__ = [
    "ApplyCoordinator",
    "DirtyTracker",
    "DocumentEntry",
    "DocumentStore",
    "LogEntry",
    "OperationLog",
    "SelectionList",
    "Workspace",
]
