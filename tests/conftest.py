"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from fixturefs.core.config import FixtureFsConfig
from fixturefs.pytest_plugin import file_backup, fixturefs_config, temp_text_file  # noqa: F401


@pytest.fixture
def config(tmp_path: Path) -> FixtureFsConfig:
    """Config with a sandboxed temp dir and no retry delay."""
    temp_dir = tmp_path / "temp"
    temp_dir.mkdir()
    return FixtureFsConfig(temp_dir=temp_dir, retry_delay_seconds=0.0)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Source tree used by walker and sync tests.

    Layout::

        source/
            top.txt
            a/x.txt
            a/c/deep.log
            b/
    """
    root = tmp_path / "source"
    (root / "a" / "c").mkdir(parents=True)
    (root / "b").mkdir()
    (root / "top.txt").write_text("top")
    (root / "a" / "x.txt").write_text("x")
    (root / "a" / "c" / "deep.log").write_text("deep")
    return root
