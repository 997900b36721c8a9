from typing import Annotated

import typer

from goastx.cli.extract import directory, file, source
from goastx.cli.watch import watch
from goastx.config import configure_logging

app = typer.Typer(
    name="goastx",
    help="goastx CLI: extract imports and struct types from Go source.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("file")(file)
app.command("dir")(directory)
app.command("source")(source)
app.command("watch")(watch)


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    configure_logging(verbose)


def main() -> None:
    app()
