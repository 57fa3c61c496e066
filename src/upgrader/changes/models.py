from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OperationKind(str, Enum):
    MODIFIED = "modified"
    NEW_FILE = "new file"
    RENAMED = "renamed"
    DELETED = "deleted"
    NONE = ""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FileChange:
    """
    What should happen to one original path.

    A `target_path` of None marks a deletion. Contents are either both absent
    (pure move or delete) or both present.
    """

    target_path: Optional[str]
    new_content: Optional[str] = None
    old_content: Optional[str] = None

    @property
    def is_deletion(self) -> bool:
        return self.target_path is None

    @property
    def has_content_change(self) -> bool:
        return self.new_content is not None and self.new_content != self.old_content

    def to_dict(self) -> dict:
        data = {"path": self.target_path}
        if self.new_content is not None or self.old_content is not None:
            data["new"] = self.new_content
            data["old"] = self.old_content
        return data


@dataclass(frozen=True)
class WarningEntry:
    path: str
    line: int
    message: str

    def format(self) -> str:
        return f"{self.path}:{self.line} {self.message}"
