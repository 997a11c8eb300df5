"""CLI commands for fixturefs.

This package contains all subcommand implementations.
"""

from fixturefs.cli.commands import config, seed, tree

__all__ = ["config", "seed", "tree"]
