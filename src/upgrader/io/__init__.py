from .transaction import (
    FileOp,
    WriteFileOp,
    MoveFileOp,
    DeleteFileOp,
    FileSystemAdapter,
    RealFileSystem,
    TransactionManager,
)
from .writer import ChangeSetWriter

__all__ = [
    "FileOp",
    "WriteFileOp",
    "MoveFileOp",
    "DeleteFileOp",
    "FileSystemAdapter",
    "RealFileSystem",
    "TransactionManager",
    "ChangeSetWriter",
]
