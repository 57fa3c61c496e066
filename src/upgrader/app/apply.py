from pathlib import Path
from typing import Callable, Optional

from upgrader.changes import ChangeSetError, CodeChangeSet
from .protocols import PreviewRenderer
from upgrader.common import bus
from upgrader.io import ChangeSetWriter


class ApplyRunner:
    def __init__(
        self,
        root_path: Path,
        display: PreviewRenderer,
        writer: Optional[ChangeSetWriter] = None,
    ):
        self.root_path = root_path
        self.display = display
        self.writer = writer or ChangeSetWriter(root_path)

    def run(
        self,
        change_set: CodeChangeSet,
        dry_run: bool = False,
        confirm_callback: Optional[Callable[[int], bool]] = None,
    ) -> bool:
        try:
            if change_set.is_empty():
                bus.success("apply.run.no_ops")
                return True

            # 1. Preview
            affected = change_set.affected_files()
            bus.warning("apply.run.preview_header", count=len(affected))
            self.display.display(change_set)

            warning_count = sum(
                len(change_set.warnings_for_path(p))
                for p in affected
                if change_set.has_warnings(p)
            )
            if warning_count:
                bus.warning("apply.run.warnings_pending", count=warning_count)

            if dry_run:
                bus.info("apply.run.dry_run")
                return True

            # 2. Confirm
            if confirm_callback and not confirm_callback(len(affected)):
                bus.error("apply.run.aborted")
                return False

            # 3. Execute
            bus.info("apply.run.applying")
            count = self.writer.apply(change_set)
            bus.success("apply.run.success", count=count)
            return True

        except (ChangeSetError, OSError) as e:
            bus.error("error.generic", error=str(e))
            return False
