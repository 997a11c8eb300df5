"""fixturefs configuration and settings.

This module provides the configuration model and I/O functions for the
retry budgets, temporary directory and path comparison rules used by the
walker, synchronizer and guards.

Configuration is stored in ~/.config/fixturefs/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fixturefs.core.paths import get_config_path, get_temp_dir

logger = logging.getLogger(__name__)

DEFAULT_RETRY_ATTEMPTS = 10
DEFAULT_RETRY_DELAY_SECONDS = 0.1
DEFAULT_CREATE_ATTEMPTS = 100
DEFAULT_ENCODING = "utf-8"


def platform_is_case_insensitive() -> bool:
    """Check whether the platform compares paths case-insensitively.

    Returns:
        True on platforms where os.path.normcase folds case (Windows).
    """
    return os.path.normcase("A") == os.path.normcase("a")


class FixtureFsConfig(BaseModel):
    """Configuration for fixturefs operations.

    Attributes:
        temp_dir: Root for backup copies and temporary files. None uses
            FIXTUREFS_TEMP_DIR or the system temp directory.
        retry_attempts: Attempts for delete/move/restore operations.
        retry_delay_seconds: Delay between retry attempts.
        create_attempts: Attempts to create a uniquely named temp file.
        case_insensitive_paths: Compare relative paths ignoring case when
            diffing trees.
        encoding: Text encoding for temporary text files.
    """

    model_config = ConfigDict(extra="forbid")

    temp_dir: Annotated[
        Path | None,
        Field(description="Temp directory (None = FIXTUREFS_TEMP_DIR or system temp)"),
    ] = None
    retry_attempts: Annotated[
        int,
        Field(ge=1, le=100, description="Attempts for delete/move operations (1-100)"),
    ] = DEFAULT_RETRY_ATTEMPTS
    retry_delay_seconds: Annotated[
        float,
        Field(ge=0.0, le=10.0, description="Delay between attempts in seconds (0-10)"),
    ] = DEFAULT_RETRY_DELAY_SECONDS
    create_attempts: Annotated[
        int,
        Field(ge=1, le=1000, description="Attempts to create a temp file (1-1000)"),
    ] = DEFAULT_CREATE_ATTEMPTS
    case_insensitive_paths: Annotated[
        bool,
        Field(
            default_factory=platform_is_case_insensitive,
            description="Compare relative paths ignoring case",
        ),
    ]
    encoding: Annotated[
        str,
        Field(min_length=1, description="Encoding for temporary text files"),
    ] = DEFAULT_ENCODING

    @property
    def effective_temp_dir(self) -> Path:
        """Get the temp directory to use.

        Returns:
            The configured temp_dir, or the environment/system default.
        """
        if self.temp_dir is not None:
            return self.temp_dir
        return get_temp_dir()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> FixtureFsConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated FixtureFsConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return FixtureFsConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: FixtureFsConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The FixtureFsConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: FixtureFsConfig) -> dict[str, object]:
    """Convert FixtureFsConfig to a dictionary for TOML serialization.

    TOML has no null, so an unset temp_dir is omitted.

    Args:
        config: The FixtureFsConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "retry_attempts": config.retry_attempts,
        "retry_delay_seconds": config.retry_delay_seconds,
        "create_attempts": config.create_attempts,
        "case_insensitive_paths": config.case_insensitive_paths,
        "encoding": config.encoding,
    }
    if config.temp_dir is not None:
        result["temp_dir"] = str(config.temp_dir)
    return result


def get_config() -> FixtureFsConfig:
    """Get the active configuration.

    Loads the config file when one exists, otherwise returns defaults.
    A broken config file is reported and ignored.

    Returns:
        FixtureFsConfig to use for operations that were not given one.
    """
    try:
        return load_config()
    except ConfigNotFoundError:
        return FixtureFsConfig()
    except ConfigError as e:
        logger.warning("Ignoring unusable config file: %s", e)
        return FixtureFsConfig()
