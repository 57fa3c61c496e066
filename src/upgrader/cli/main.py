import logging

import typer

from upgrader.common import bus, upgrader_catalog as catalog
from .rendering import CliRenderer

from .commands.apply import apply_command

app = typer.Typer(
    name="upgrader",
    help=catalog("cli.app.description"),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=catalog("cli.option.verbose.help")
    ),
):
    # The CLI is the composition root. It decides *which* renderer to use.
    bus.set_renderer(CliRenderer(verbose=verbose))
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


app.command(name="apply", help=catalog("cli.command.apply.help"))(apply_command)


if __name__ == "__main__":
    app()
