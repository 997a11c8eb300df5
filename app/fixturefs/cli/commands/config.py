"""Configuration commands.

Shows the active configuration and writes a default config file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from fixturefs.core.config import (
    ConfigError,
    FixtureFsConfig,
    get_config,
    save_config,
)
from fixturefs.core.paths import get_config_path
from fixturefs.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show or initialize fixturefs configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the active configuration."""
    config = get_config()
    path = get_config_path()
    source = str(path) if path.exists() else "defaults"

    rows = {
        "temp_dir": config.effective_temp_dir,
        "retry_attempts": config.retry_attempts,
        "retry_delay_seconds": config.retry_delay_seconds,
        "create_attempts": config.create_attempts,
        "case_insensitive_paths": config.case_insensitive_paths,
        "encoding": config.encoding,
    }
    console.print(f"[header]Configuration[/] [muted]({escape(source)})[/]", soft_wrap=True)
    for key, value in rows.items():
        console.print(f"  {key:<24}{value}", markup=False, highlight=False, soft_wrap=True)


@app.command()
def init(
    path: Annotated[
        Path | None,
        typer.Option("--path", help="Where to write the config file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    target = path or get_config_path()
    if target.exists() and not force:
        print_warning(f"Config already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(FixtureFsConfig(), target)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
