"""Directory tree listing commands.

Lists the directories and files that the walker enumerates under a root,
skipping subtrees that cannot be read.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Annotated

import typer

from fixturefs.utils.formatting import console, print_info
from fixturefs.walker import enumerate_directories, enumerate_files

app = typer.Typer(
    help="List directories and files under a root.",
    invoke_without_command=True,
    no_args_is_help=True,
)

RootArgument = Annotated[
    Path,
    typer.Argument(help="Traversal root.", file_okay=False),
]
RecurseOption = Annotated[
    bool,
    typer.Option("--recurse/--no-recurse", help="Descend into subdirectories."),
]
RelativeOption = Annotated[
    bool,
    typer.Option("--relative", "-r", help="Print paths relative to the root."),
]


def _print_paths(paths: Iterable[str], noun: str) -> None:
    count = 0
    for path in paths:
        console.print(path, markup=False, highlight=False, soft_wrap=True)
        count += 1
    if count == 0:
        print_info(f"No {noun} found.")


@app.command()
def dirs(
    root: RootArgument,
    recurse: RecurseOption = True,
    relative: RelativeOption = False,
) -> None:
    """List directories breadth-first."""
    _print_paths(
        enumerate_directories(root, recurse=recurse, full_paths=not relative),
        "directories",
    )


@app.command()
def files(
    root: RootArgument,
    pattern: Annotated[
        str,
        typer.Option("--pattern", "-p", help="Wildcard matched against file names."),
    ] = "*",
    recurse: RecurseOption = True,
    relative: RelativeOption = False,
) -> None:
    """List files, optionally filtered by a wildcard pattern."""
    _print_paths(
        enumerate_files(root, pattern=pattern, recurse=recurse, full_paths=not relative),
        "files",
    )
