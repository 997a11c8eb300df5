"""Seed command implementation.

Copies the entries missing from a fixture directory out of a template
tree. Existing entries are left untouched.
"""

from pathlib import Path
from typing import Annotated

import typer

from fixturefs.core.config import get_config
from fixturefs.sync import copy_directory
from fixturefs.utils.formatting import (
    console,
    create_sync_table,
    print_error,
    print_success,
)


def seed(
    source: Annotated[
        Path,
        typer.Argument(help="Template tree.", exists=True, file_okay=False),
    ],
    dest: Annotated[
        Path,
        typer.Argument(help="Destination tree. Created if missing.", file_okay=False),
    ],
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print the summary."),
    ] = False,
) -> None:
    """Copy directories and files present in SOURCE but missing in DEST."""
    result = copy_directory(source, dest, config=get_config())

    if not result.changed and result.success:
        print_success(f"{dest} is already up to date.")
        return

    if not quiet:
        console.print(create_sync_table(result))

    summary = (
        f"{len(result.created_directories)} directories created, "
        f"{len(result.copied_files)} files copied"
    )
    if result.success:
        print_success(summary)
        return

    print_error(f"{summary}, {len(result.failures)} failed")
    raise typer.Exit(code=1)
