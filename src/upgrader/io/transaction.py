import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

STAGING_DIR = ".upgrader-staging"


class FileSystemAdapter(Protocol):
    def write_text(self, path: Path, content: str) -> None: ...
    def move(self, src: Path, dest: Path) -> None: ...
    def exists(self, path: Path) -> bool: ...
    def read_text(self, path: Path) -> str: ...
    def remove(self, path: Path) -> None: ...


class RealFileSystem:
    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def move(self, src: Path, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(src), str(dest))

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def remove(self, path: Path) -> None:
        # Deletions may target whole folders as well as files.
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()


@dataclass
class FileOp(ABC):
    path: Path

    @abstractmethod
    def execute(self, fs: FileSystemAdapter, root: Path) -> None: ...

    @abstractmethod
    def describe(self) -> str: ...


@dataclass
class DeleteFileOp(FileOp):
    def execute(self, fs: FileSystemAdapter, root: Path) -> None:
        fs.remove(root / self.path)

    def describe(self) -> str:
        return f"[DELETE] {self.path}"


@dataclass
class MoveFileOp(FileOp):
    dest: Path

    def execute(self, fs: FileSystemAdapter, root: Path) -> None:
        fs.move(root / self.path, root / self.dest)

    def describe(self) -> str:
        return f"[MOVE] {self.path} -> {self.dest}"


@dataclass
class WriteFileOp(FileOp):
    content: str

    def execute(self, fs: FileSystemAdapter, root: Path) -> None:
        fs.write_text(root / self.path, self.content)

    def describe(self) -> str:
        return f"[WRITE] {self.path}"


class TransactionManager:
    """
    Applies a batch of file operations as one step.

    Every op names a path as it exists *before* the transaction, the same way
    a change set keys its records. Nothing is relative to an earlier op:
    a write to `a` lands wherever the move of `a` puts it, whichever order the
    two were added in, and a move into a path freed by another move never
    sees that path's new occupant.

    Ops run in three phases: deletions, moves, then writes. Moves whose
    destination is another move's source go through a staging folder, so
    chains and swaps keep the contents they started with.
    """

    def __init__(self, root_path: Path, fs: Optional[FileSystemAdapter] = None):
        self.root_path = root_path
        self.fs = fs or RealFileSystem()
        self._ops: List[FileOp] = []

    def add_write(self, path: Union[str, Path], content: str) -> None:
        self._ops.append(WriteFileOp(Path(path), content))

    def add_move(self, src: Union[str, Path], dest: Union[str, Path]) -> None:
        self._ops.append(MoveFileOp(Path(src), Path(dest)))

    def add_delete_file(self, path: Union[str, Path]) -> None:
        self._ops.append(DeleteFileOp(Path(path)))

    def add_operation(self, op: FileOp) -> None:
        self._ops.append(op)

    @property
    def pending_count(self) -> int:
        return len(self._ops)

    def resolved_ops(self) -> List[FileOp]:
        """The pending ops in execution order, writes pointed at final paths."""
        deletes = [op for op in self._ops if isinstance(op, DeleteFileOp)]
        moves = [op for op in self._ops if isinstance(op, MoveFileOp)]
        destinations: Dict[Path, Path] = {op.path: op.dest for op in moves}
        writes = [
            replace(op, path=destinations.get(op.path, op.path))
            for op in self._ops
            if isinstance(op, WriteFileOp)
        ]
        return [*deletes, *moves, *writes]

    def preview(self) -> List[str]:
        return [op.describe() for op in self.resolved_ops()]

    def commit(self) -> None:
        ops = self.resolved_ops()
        for op in ops:
            if isinstance(op, DeleteFileOp):
                op.execute(self.fs, self.root_path)

        self._run_moves([op for op in ops if isinstance(op, MoveFileOp)])

        for op in ops:
            if isinstance(op, WriteFileOp):
                op.execute(self.fs, self.root_path)
        self._ops.clear()

    def _run_moves(self, moves: List[MoveFileOp]) -> None:
        sources = {op.path for op in moves}
        if not any(op.dest in sources for op in moves):
            for op in moves:
                op.execute(self.fs, self.root_path)
            return

        # Park every source first so no destination is occupied by a path
        # that still has to move away.
        staging = self.root_path / STAGING_DIR
        parked = []
        for index, op in enumerate(moves):
            slot = staging / str(index)
            self.fs.move(self.root_path / op.path, slot)
            parked.append((slot, op.dest))
        for slot, dest in parked:
            self.fs.move(slot, self.root_path / dest)
        self.fs.remove(staging)
