import os
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .exceptions import ChangeSetFormatError, DuplicateChangeError, UnknownPathError
from .models import FileChange, OperationKind, WarningEntry

PathLike = Union[str, "os.PathLike[str]"]


class CodeChangeSet:
    """
    The set of file changes and warnings produced by one or more upgrade rules.

    Rules record into it; a display renders it as a preview and a writer applies
    it to disk. Each original path carries at most one change for the lifetime
    of the set. Every path passed to a mutator is remembered, once, in the order
    it was first seen.
    """

    def __init__(self) -> None:
        self._changes: Dict[str, FileChange] = {}
        self._warnings: Dict[str, List[WarningEntry]] = {}
        # Insertion-ordered set; values are unused.
        self._affected: Dict[str, None] = {}

    # --- Mutators ---

    def add_file_change(
        self,
        path: PathLike,
        new_content: Optional[str],
        old_content: Optional[str],
        target_path: Optional[PathLike] = None,
    ) -> None:
        """
        Record a content update, a new file, or a move of `path`.

        `old_content` is None for brand new files. Leave `target_path` unset when
        the file stays where it is. Identical contents are not recorded as a
        content change.
        """
        key = os.fspath(path)
        self._ensure_no_change(key)

        target = os.fspath(target_path) if target_path else key
        if new_content != old_content:
            change = FileChange(target, new_content, old_content)
        else:
            change = FileChange(target)

        self._changes[key] = change
        self._add_to_affected_files(key)

    def move(self, path: PathLike, target_path: PathLike) -> None:
        self.add_file_change(path, None, None, target_path)

    def remove(self, path: PathLike) -> None:
        key = os.fspath(path)
        self._ensure_no_change(key)
        self._changes[key] = FileChange(target_path=None)
        self._add_to_affected_files(key)

    def add_warning(self, path: PathLike, line: int, message: str) -> None:
        """
        Attach a warning to a line of `path`.

        Warnings point the developer at upgrade work the rules could not do
        safely. They are kept in call order and never deduplicated.
        """
        if line < 0:
            raise ValueError(f"Line number must be non-negative, got {line}.")
        key = os.fspath(path)
        self._warnings.setdefault(key, []).append(WarningEntry(key, line, message))
        self._add_to_affected_files(key)

    def add_warnings(self, path: PathLike, warnings: Iterable[Tuple[int, str]]) -> None:
        for line, message in warnings:
            self.add_warning(path, line, message)

    def merge_warnings(self, other: "CodeChangeSet") -> None:
        """
        Append the warnings of `other` to this set, path by path.

        Only warnings are merged. Merging the same set twice duplicates its
        warnings.
        """
        for path in other.affected_files():
            if not other.has_warnings(path):
                continue
            incoming = other.warnings_for_path(path)
            if path in self._warnings:
                self._warnings[path].extend(incoming)
            else:
                self._warnings[path] = incoming
                self._add_to_affected_files(path)

    # --- Queries ---

    def all_changes(self) -> Dict[str, FileChange]:
        return dict(self._changes)

    def affected_files(self) -> List[str]:
        return list(self._affected)

    def is_empty(self) -> bool:
        return not self._affected

    def has_new_contents(self, path: PathLike) -> bool:
        change = self._changes.get(os.fspath(path))
        return change is not None and change.has_content_change

    def has_warnings(self, path: PathLike) -> bool:
        return bool(self._warnings.get(os.fspath(path)))

    def new_contents(self, path: PathLike) -> Optional[str]:
        return self._change_by_path(path).new_content

    def old_contents(self, path: PathLike) -> Optional[str]:
        return self._change_by_path(path).old_content

    def new_path(self, path: PathLike) -> Optional[str]:
        """Where `path` ends up. None means the file is deleted."""
        return self._change_by_path(path).target_path

    def ops_by_path(self, path: PathLike) -> OperationKind:
        """
        Classify the recorded change for `path`.

        A move is reported as `renamed` even when the content changes too.
        Paths without a change, or with an empty one, yield `OperationKind.NONE`.
        """
        key = os.fspath(path)
        change = self._changes.get(key)
        if change is None:
            return OperationKind.NONE

        if change.is_deletion:
            return OperationKind.DELETED
        if change.target_path != key:
            return OperationKind.RENAMED

        if self.has_new_contents(key):
            if change.old_content is not None:
                return OperationKind.MODIFIED
            return OperationKind.NEW_FILE

        return OperationKind.NONE

    def warnings_for_path(self, path: PathLike) -> List[WarningEntry]:
        key = os.fspath(path)
        if not self.has_warnings(key):
            raise UnknownPathError(key, what="warnings")
        return list(self._warnings[key])

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "changes": {path: change.to_dict() for path, change in self._changes.items()},
            "warnings": {
                path: [[w.line, w.message] for w in entries]
                for path, entries in self._warnings.items()
            },
            "affected": self.affected_files(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "CodeChangeSet":
        if not isinstance(data, dict):
            raise ChangeSetFormatError("Change set document must be a mapping.")

        change_set = cls()
        for path in _expect(data, "affected", list):
            _expect_path(path)
            change_set._add_to_affected_files(path)

        for path, raw in _expect(data, "changes", dict).items():
            _expect_path(path)
            if not isinstance(raw, dict) or "path" not in raw:
                raise ChangeSetFormatError(f"Malformed change entry for '{path}'.")
            target, new, old = raw["path"], raw.get("new"), raw.get("old")
            if any(
                v is not None and not isinstance(v, str) for v in (target, new, old)
            ):
                raise ChangeSetFormatError(
                    f"Change entry for '{path}' must hold strings."
                )
            # An empty target means "stays in place"; only null deletes.
            if target == "":
                target = path
            change_set._changes[path] = FileChange(target, new, old)
            change_set._add_to_affected_files(path)

        for path, entries in _expect(data, "warnings", dict).items():
            _expect_path(path)
            if not isinstance(entries, list):
                raise ChangeSetFormatError(f"Warnings for '{path}' must be a list.")
            for entry in entries:
                if (
                    not isinstance(entry, list)
                    or len(entry) != 2
                    or isinstance(entry[0], bool)
                    or not isinstance(entry[0], int)
                    or entry[0] < 0
                    or not isinstance(entry[1], str)
                ):
                    raise ChangeSetFormatError(
                        f"Malformed warning for '{path}': {entry!r}"
                    )
                change_set.add_warning(path, entry[0], entry[1])

        return change_set

    # --- Internals ---

    def _ensure_no_change(self, key: str) -> None:
        if key in self._changes:
            raise DuplicateChangeError(key)

    def _change_by_path(self, path: PathLike) -> FileChange:
        key = os.fspath(path)
        try:
            return self._changes[key]
        except KeyError:
            raise UnknownPathError(key) from None

    def _add_to_affected_files(self, key: str) -> None:
        if key not in self._affected:
            self._affected[key] = None


def _expect(data: Dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise ChangeSetFormatError(f"'{key}' must be a {kind.__name__}.")
    return value


def _expect_path(path: Any) -> None:
    if not isinstance(path, str):
        raise ChangeSetFormatError(f"Paths must be strings: {path!r}")
