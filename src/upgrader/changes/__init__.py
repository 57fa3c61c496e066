from .models import FileChange, OperationKind, WarningEntry
from .change_set import CodeChangeSet
from .exceptions import (
    ChangeSetError,
    ChangeSetFormatError,
    DuplicateChangeError,
    UnknownPathError,
)
from .storage import ChangeSetStorage

__all__ = [
    "CodeChangeSet",
    "FileChange",
    "OperationKind",
    "WarningEntry",
    "ChangeSetError",
    "ChangeSetFormatError",
    "DuplicateChangeError",
    "UnknownPathError",
    "ChangeSetStorage",
]
