import difflib
from typing import List, Optional, Tuple

import typer

from upgrader.changes import CodeChangeSet, OperationKind

Line = Tuple[str, Optional[str]]


class ChangeDisplay:
    """
    Renders a change set as a coloured preview: one block per affected file,
    with a unified diff for content changes and the file's warnings.
    """

    def __init__(self, diff_context: int = 3, show_warnings: bool = True):
        self.diff_context = diff_context
        self.show_warnings = show_warnings

    def lines(self, change_set: CodeChangeSet) -> List[Line]:
        output: List[Line] = []
        for path in change_set.affected_files():
            block = self._file_block(change_set, path)
            if block:
                output.extend(block)
                output.append(("", None))
        return output

    def display(self, change_set: CodeChangeSet) -> None:
        for text, color in self.lines(change_set):
            typer.secho(text, fg=color)

    def _file_block(self, change_set: CodeChangeSet, path: str) -> List[Line]:
        op = change_set.ops_by_path(path)
        has_warnings = self.show_warnings and change_set.has_warnings(path)
        if op == OperationKind.NONE and not has_warnings:
            return []

        block: List[Line] = []
        if op == OperationKind.RENAMED:
            block.append((f"{op}: {path} -> {change_set.new_path(path)}", typer.colors.CYAN))
        elif op == OperationKind.DELETED:
            block.append((f"{op}: {path}", typer.colors.RED))
        elif op != OperationKind.NONE:
            block.append((f"{op}: {path}", typer.colors.CYAN))
        else:
            block.append((f"warnings: {path}", typer.colors.YELLOW))

        if change_set.has_new_contents(path):
            block.extend(self._diff(change_set, path))

        if has_warnings:
            for warning in change_set.warnings_for_path(path):
                block.append((f"  {warning.format()}", typer.colors.YELLOW))

        return block

    def _diff(self, change_set: CodeChangeSet, path: str) -> List[Line]:
        old = change_set.old_contents(path) or ""
        new = change_set.new_contents(path) or ""
        target = change_set.new_path(path) or path

        diff: List[Line] = []
        for line in difflib.unified_diff(
            old.splitlines(),
            new.splitlines(),
            fromfile=f"a/{path}",
            tofile=f"b/{target}",
            n=self.diff_context,
            lineterm="",
        ):
            color = None
            if line.startswith(("+++", "---")):
                pass
            elif line.startswith("+"):
                color = typer.colors.GREEN
            elif line.startswith("-"):
                color = typer.colors.RED
            elif line.startswith("@@"):
                color = typer.colors.BRIGHT_BLACK
            diff.append((f"  {line}", color))
        return diff
