"""Scoped filesystem guards for test fixtures.

BackupGuard snapshots a file and puts the snapshot back on release.
TempFileGuard owns a freshly created temporary text file and deletes it
on release. Both are context managers whose release runs once, on normal
and exceptional exit alike.

A backup that cannot be restored is reported as a fatal failure, since
it would corrupt the filesystem for later tests. A temporary file that
cannot be deleted is only logged.
"""

import logging
import os
import shutil
import tempfile
import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from types import TracebackType
from typing import Self

from fixturefs.core.config import FixtureFsConfig, get_config
from fixturefs.errors import classify_error
from fixturefs.fileops import delete_file, move_file
from fixturefs.reporting import FixtureFailure, Reporter, fail
from fixturefs.retry import retry_or_fail, with_retries

logger = logging.getLogger(__name__)

_BACKUP_PREFIX = "fixturefs-backup-"


def _random_file_name() -> str:
    """Generate a candidate temp file name."""
    return f"{uuid.uuid4().hex[:12]}.tmp"


class _Guard(ABC):
    """Base for guards whose release must run at most once."""

    def __init__(self, config: FixtureFsConfig, sleep: Callable[[float], None]) -> None:
        self._config = config
        self._sleep = sleep
        self._released = False

    @property
    def released(self) -> bool:
        """Check if release() has already run."""
        return self._released

    def release(self) -> None:
        """Release the guarded resource. Later calls do nothing."""
        if self._released:
            return
        self._released = True
        self._release()

    @abstractmethod
    def _release(self) -> None:
        """Perform the release action."""

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()


class BackupGuard(_Guard):
    """Restores a file from its backup copy on release.

    Attributes:
        original: The guarded file.
        backup: Location of the backup copy.
    """

    def __init__(
        self,
        original: Path,
        backup: Path,
        *,
        config: FixtureFsConfig,
        reporter: Reporter = fail,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__(config, sleep)
        self.original = original
        self.backup = backup
        self._reporter = reporter

    def _restore(self) -> None:
        delete_file(self.original)
        move_file(self.backup, self.original)

    def _release(self) -> None:
        retry_or_fail(
            self._restore,
            f"Failed to restore {self.original} from {self.backup}",
            target=self.original,
            max_attempts=self._config.retry_attempts,
            delay=self._config.retry_delay_seconds,
            reporter=self._reporter,
            sleep=self._sleep,
        )
        logger.debug("Restored %s from %s", self.original, self.backup)


class TempFileGuard(_Guard):
    """Deletes a temporary file on release.

    Attributes:
        path: The temporary file.
    """

    def __init__(
        self,
        path: Path,
        *,
        config: FixtureFsConfig,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__(config, sleep)
        self.path = path

    def _release(self) -> None:
        outcome = with_retries(
            lambda: delete_file(self.path),
            target=self.path,
            max_attempts=self._config.retry_attempts,
            delay=self._config.retry_delay_seconds,
            sleep=self._sleep,
        )
        if not outcome.success:
            logger.warning(
                "Leaving temporary file %s after %d attempts: %s",
                self.path,
                outcome.attempts,
                outcome.error,
            )


def begin_backup(
    path: str | os.PathLike[str],
    *,
    config: FixtureFsConfig | None = None,
    reporter: Reporter = fail,
    sleep: Callable[[float], None] = time.sleep,
) -> BackupGuard:
    """Back up a file and return a guard that restores it.

    The backup is taken before this function returns. Failing to take it
    is not retried: mutating a file without a snapshot is unsafe.

    Args:
        path: File to back up.
        config: Configuration (temp dir, retry budget). Defaults to get_config().
        reporter: Called when the restore fails after all retries.
        sleep: Sleep function used between restore attempts.

    Returns:
        BackupGuard restoring the file on release.

    Raises:
        OSError: If the backup copy cannot be made.
    """
    config = config or get_config()
    original = Path(path)

    fd, name = tempfile.mkstemp(prefix=_BACKUP_PREFIX, dir=config.effective_temp_dir)
    os.close(fd)
    backup = Path(name)
    try:
        shutil.copy2(original, backup)
    except OSError:
        backup.unlink(missing_ok=True)
        raise

    logger.debug("Backed up %s to %s", original, backup)
    return BackupGuard(original, backup, config=config, reporter=reporter, sleep=sleep)


def create_temp_text_file(
    content: str,
    *,
    config: FixtureFsConfig | None = None,
    reporter: Reporter = fail,
    name_factory: Callable[[], str] = _random_file_name,
    sleep: Callable[[float], None] = time.sleep,
) -> tuple[Path, TempFileGuard]:
    """Create a uniquely named text file and a guard that deletes it.

    Each attempt picks a fresh name and creates the file exclusively, so
    name collisions and transient errors simply move on to the next name.

    Args:
        content: Text to write.
        config: Configuration (temp dir, encoding, attempt budgets).
            Defaults to get_config().
        reporter: Called when no file could be created. Must not return.
        name_factory: Generates candidate file names.
        sleep: Sleep function used between delete attempts.

    Returns:
        Tuple of (path, guard).
    """
    config = config or get_config()
    temp_dir = config.effective_temp_dir
    last_error: OSError | None = None

    for _ in range(config.create_attempts):
        path = temp_dir / name_factory()
        try:
            handle = path.open("x", encoding=config.encoding)
        except OSError as e:
            last_error = e
            logger.debug("Could not create %s (%s): %s", path, classify_error(e).value, e)
            continue
        try:
            with handle:
                handle.write(content)
        except OSError as e:
            last_error = e
            logger.debug("Could not write %s: %s", path, e)
            _discard_partial(path)
            continue
        return path, TempFileGuard(path, config=config, sleep=sleep)

    message = (
        f"Failed to create temporary file in {temp_dir} "
        f"after {config.create_attempts} attempts (last error: {last_error})"
    )
    logger.error("Failed to create a temporary file in %s: %s", temp_dir, last_error)
    reporter(message)
    # Reporters must not return
    raise FixtureFailure(message)


def _discard_partial(path: Path) -> None:
    """Remove a file left behind by a failed write, if any."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("Could not remove partial file %s: %s", path, e)
