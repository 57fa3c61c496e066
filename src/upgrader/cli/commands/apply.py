from pathlib import Path

import typer

from upgrader.app import ApplyRunner
from upgrader.changes import ChangeSetError, ChangeSetStorage
from upgrader.common import bus, upgrader_catalog as catalog
from upgrader.config import load_config_from_path
from ..display import ChangeDisplay


def apply_command(
    change_set_file: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help=catalog("cli.argument.changeset.help"),
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help=catalog("cli.option.apply_dry_run.help"),
    ),
    yes: bool = typer.Option(
        False,
        "-y",
        "--yes",
        help=catalog("cli.option.apply_yes.help"),
    ),
):
    root_path = Path.cwd()

    try:
        config = load_config_from_path(root_path)
        bus.info("apply.run.loading", path=change_set_file)
        change_set = ChangeSetStorage().load(change_set_file)
    except (ChangeSetError, OSError, ValueError) as e:
        bus.error("error.generic", error=str(e))
        raise typer.Exit(code=1)

    display = ChangeDisplay(
        diff_context=config.diff_context, show_warnings=config.show_warnings
    )
    runner = ApplyRunner(root_path, display=display)

    def confirm(count: int) -> bool:
        return yes or typer.confirm(catalog("apply.run.confirm"), default=False)

    if not runner.run(change_set, dry_run=dry_run, confirm_callback=confirm):
        raise typer.Exit(code=1)
