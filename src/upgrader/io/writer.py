from pathlib import Path
from typing import List, Optional

from upgrader.changes import CodeChangeSet
from upgrader.common import bus
from .transaction import (
    DeleteFileOp,
    FileOp,
    FileSystemAdapter,
    MoveFileOp,
    TransactionManager,
    WriteFileOp,
)


class ChangeSetWriter:
    """Turns a change set into file operations and commits them under `root_path`."""

    def __init__(self, root_path: Path, fs: Optional[FileSystemAdapter] = None):
        self.root_path = root_path
        self.fs = fs

    def plan(self, change_set: CodeChangeSet) -> List[FileOp]:
        # Ops keep the change set's original paths; the transaction manager
        # maps writes onto move destinations.
        ops: List[FileOp] = []
        for path, change in change_set.all_changes().items():
            if change.is_deletion:
                ops.append(DeleteFileOp(Path(path)))
                continue

            if change.target_path != path:
                ops.append(MoveFileOp(Path(path), Path(change.target_path)))

            if change.has_content_change:
                ops.append(WriteFileOp(Path(path), change.new_content))
            elif change.target_path == path:
                bus.debug("writer.op.skipped", path=path)

        return ops

    def apply(self, change_set: CodeChangeSet) -> int:
        tm = TransactionManager(self.root_path, fs=self.fs)
        for op in self.plan(change_set):
            tm.add_operation(op)
        for description in tm.preview():
            bus.debug("writer.op.planned", description=description)

        count = tm.pending_count
        tm.commit()
        return count
