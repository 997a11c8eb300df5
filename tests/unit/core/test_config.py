"""Unit tests for FixtureFsConfig and related functions."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from fixturefs.core.config import (
    DEFAULT_CREATE_ATTEMPTS,
    DEFAULT_RETRY_ATTEMPTS,
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    FixtureFsConfig,
    get_config,
    load_config,
    platform_is_case_insensitive,
    save_config,
)
from pydantic import ValidationError


class TestFixtureFsConfig:
    """Tests for FixtureFsConfig Pydantic model."""

    def test_default_values(self) -> None:
        """FixtureFsConfig has the documented defaults."""
        config = FixtureFsConfig()

        assert config.temp_dir is None
        assert config.retry_attempts == DEFAULT_RETRY_ATTEMPTS == 10
        assert config.retry_delay_seconds == 0.1
        assert config.create_attempts == DEFAULT_CREATE_ATTEMPTS == 100
        assert config.case_insensitive_paths is platform_is_case_insensitive()
        assert config.encoding == "utf-8"

    def test_effective_temp_dir_explicit(self, tmp_path: Path) -> None:
        """An explicit temp_dir wins."""
        config = FixtureFsConfig(temp_dir=tmp_path)

        assert config.effective_temp_dir == tmp_path

    def test_effective_temp_dir_from_env(self, tmp_path: Path) -> None:
        """Without temp_dir, FIXTUREFS_TEMP_DIR is used."""
        with patch.dict(os.environ, {"FIXTUREFS_TEMP_DIR": str(tmp_path)}):
            assert FixtureFsConfig().effective_temp_dir == tmp_path

    def test_retry_attempts_validation(self) -> None:
        """At least one attempt is required."""
        with pytest.raises(ValidationError):
            FixtureFsConfig(retry_attempts=0)

    def test_negative_delay_rejected(self) -> None:
        """Delays cannot be negative."""
        with pytest.raises(ValidationError):
            FixtureFsConfig(retry_delay_seconds=-1)

    def test_unknown_field_rejected(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            FixtureFsConfig(retries=3)  # type: ignore[call-arg]


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("retry_attempts = = 3")

        with pytest.raises(ConfigParseError):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("retry_attempts = 0\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_valid_file(self, tmp_path: Path) -> None:
        """Values from the file are applied."""
        path = tmp_path / "config.toml"
        path.write_text(
            f'temp_dir = "{tmp_path.as_posix()}"\n'
            "retry_attempts = 3\n"
            "case_insensitive_paths = true\n"
        )

        config = load_config(path)

        assert config.temp_dir == tmp_path
        assert config.retry_attempts == 3
        assert config.case_insensitive_paths is True


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back equal."""
        path = tmp_path / "nested" / "config.toml"
        config = FixtureFsConfig(temp_dir=tmp_path, retry_attempts=4, encoding="latin-1")

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_unset_temp_dir_omitted(self, tmp_path: Path) -> None:
        """An unset temp_dir is not written."""
        path = tmp_path / "config.toml"

        save_config(FixtureFsConfig(), path)

        assert "temp_dir" not in path.read_text()

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The atomic write leaves only the config file behind."""
        save_config(FixtureFsConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]


class TestGetConfig:
    """Tests for get_config."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """Without a config file, defaults are returned."""
        with patch.dict(os.environ, {"FIXTUREFS_CONFIG": str(tmp_path / "none.toml")}):
            assert get_config() == FixtureFsConfig()

    def test_reads_file(self, tmp_path: Path) -> None:
        """An existing config file is used."""
        path = tmp_path / "config.toml"
        path.write_text("create_attempts = 7\n")

        with patch.dict(os.environ, {"FIXTUREFS_CONFIG": str(path)}):
            assert get_config().create_attempts == 7

    def test_broken_file_falls_back(self, tmp_path: Path) -> None:
        """A broken config file is ignored in favour of defaults."""
        path = tmp_path / "config.toml"
        path.write_text("not toml [")

        with patch.dict(os.environ, {"FIXTUREFS_CONFIG": str(path)}):
            assert get_config() == FixtureFsConfig()
