"""pytest fixtures built on the fixturefs guards.

Enable in a conftest.py with::

    pytest_plugins = ["fixturefs.pytest_plugin"]

Guards handed out by these fixtures are released at test teardown, and
unrecoverable failures are reported through ``pytest.fail``.
"""

from collections.abc import Callable, Iterator
from contextlib import ExitStack
from pathlib import Path

import pytest

from fixturefs.core.config import FixtureFsConfig
from fixturefs.guards import BackupGuard, begin_backup, create_temp_text_file


@pytest.fixture
def fixturefs_config(tmp_path: Path) -> FixtureFsConfig:
    """Configuration with a temp directory sandboxed under tmp_path."""
    temp_dir = tmp_path / "fixturefs-temp"
    temp_dir.mkdir()
    return FixtureFsConfig(temp_dir=temp_dir)


@pytest.fixture
def file_backup(fixturefs_config: FixtureFsConfig) -> Iterator[Callable[[Path], BackupGuard]]:
    """Factory backing up files that are restored when the test ends."""
    with ExitStack() as stack:

        def backup(path: Path) -> BackupGuard:
            guard = begin_backup(path, config=fixturefs_config, reporter=pytest.fail)
            return stack.enter_context(guard)

        yield backup


@pytest.fixture
def temp_text_file(fixturefs_config: FixtureFsConfig) -> Iterator[Callable[[str], Path]]:
    """Factory creating temporary text files that are deleted when the test ends."""
    with ExitStack() as stack:

        def create(content: str) -> Path:
            path, guard = create_temp_text_file(
                content, config=fixturefs_config, reporter=pytest.fail
            )
            stack.enter_context(guard)
            return path

        yield create
