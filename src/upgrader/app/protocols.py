from typing import Protocol

from upgrader.changes import CodeChangeSet


class PreviewRenderer(Protocol):
    def display(self, change_set: CodeChangeSet) -> None: ...
