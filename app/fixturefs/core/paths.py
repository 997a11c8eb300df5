"""XDG-compliant path management for fixturefs.

This module provides the configuration file location and the process-wide
temporary directory used as the root for backups and temporary files.

Defaults:
- Config: ~/.config/fixturefs/config.toml
- Temp: tempfile.gettempdir()
"""

import os
import tempfile
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "fixturefs"

# Environment overrides
CONFIG_ENV_VAR = "FIXTUREFS_CONFIG"
TEMP_DIR_ENV_VAR = "FIXTUREFS_TEMP_DIR"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/fixturefs/ (or XDG_CONFIG_HOME/fixturefs/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get the configuration file path.

    The FIXTUREFS_CONFIG environment variable takes precedence over the
    XDG location.

    Returns:
        Path to the config.toml file.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_config_dir() / "config.toml"


def get_temp_dir() -> Path:
    """Get the default temporary directory for backups and temp files.

    Returns:
        FIXTUREFS_TEMP_DIR if set, otherwise the system temp directory.
    """
    override = os.environ.get(TEMP_DIR_ENV_VAR)
    if override:
        return Path(override)
    return Path(tempfile.gettempdir())
