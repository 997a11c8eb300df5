"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from fixturefs import __version__
from fixturefs.cli.commands import config, seed, tree

# Create main Typer app
app = typer.Typer(
    name="fixturefs",
    help="Resilient filesystem helpers for test fixtures.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"fixturefs version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """fixturefs - Resilient filesystem helpers for test fixtures.

    Walk directory trees and seed fixture directories the same way the
    library does inside test suites.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
app.add_typer(tree.app, name="tree")
app.command(name="seed")(seed.seed)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
