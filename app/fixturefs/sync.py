"""Additive directory tree synchronization.

Copies the directories and files that exist under a source tree but not
under a destination tree. Entries already present in the destination are
never overwritten or deleted, so a partially synced destination is safe
to sync again.
"""

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass

from fixturefs.core.config import FixtureFsConfig, get_config
from fixturefs.errors import ErrorCategory, classify_error
from fixturefs.fileops import copy_file_exclusive, set_writable
from fixturefs.walker import enumerate_directories, enumerate_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncFailure:
    """A single entry that could not be created or copied.

    Attributes:
        path: Destination path of the entry.
        error: Error message.
        category: Classification of the underlying error.
    """

    path: str
    error: str
    category: ErrorCategory


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of copy_directory().

    Attributes:
        created_directories: Relative paths of directories created.
        copied_files: Relative paths of files copied.
        failures: Entries that failed; the rest of the batch still ran.
    """

    created_directories: tuple[str, ...] = ()
    copied_files: tuple[str, ...] = ()
    failures: tuple[SyncFailure, ...] = ()

    @property
    def success(self) -> bool:
        """Check if every missing entry was materialized."""
        return not self.failures

    @property
    def changed(self) -> bool:
        """Check if anything was created or copied."""
        return bool(self.created_directories or self.copied_files)


def _trim_separators(path: str | os.PathLike[str]) -> str:
    path = os.fspath(path)
    separators = os.sep + (os.altsep or "")
    return path.rstrip(separators) or path[:1]


def _missing(
    source: Iterable[str],
    destination: Iterable[str],
    case_insensitive: bool,
) -> list[str]:
    """Return relative paths present in source but not in destination.

    Args:
        source: Relative paths under the source tree.
        destination: Relative paths under the destination tree.
        case_insensitive: Compare paths ignoring case.

    Returns:
        Source paths without a destination counterpart, in source order.
    """

    def key(path: str) -> str:
        return path.casefold() if case_insensitive else path

    present = {key(path) for path in destination}
    missing: dict[str, str] = {}
    for path in source:
        missing.setdefault(key(path), path)
    return [path for k, path in missing.items() if k not in present]


def _behind_symlink(root: str, relative: str) -> bool:
    """Check if relative, or a directory above it, is a symlink under root.

    The walker does not descend into symlinked directories, so entries
    below one look missing even when the link target already holds them.
    """
    current = root
    for part in relative.split(os.sep):
        if not part:
            continue
        current = os.path.join(current, part)
        if os.path.islink(current):
            return True
    return False


def copy_directory(
    source: str | os.PathLike[str],
    dest: str | os.PathLike[str],
    *,
    config: FixtureFsConfig | None = None,
) -> SyncResult:
    """Copy directories and files missing from dest out of source.

    Directories are created shallowest first so parents exist before their
    children. Copied files are made writable so later teardown can delete
    them. A failing entry is logged and recorded, and the batch continues.
    A symlinked directory in dest counts as present and is not written into.

    Args:
        source: Source tree.
        dest: Destination tree. Created if missing.
        config: Configuration (path case rules). Defaults to get_config().

    Returns:
        SyncResult listing what was created, copied and what failed.
    """
    config = config or get_config()
    source_dir = _trim_separators(source)
    dest_dir = _trim_separators(dest)

    try:
        os.makedirs(dest_dir, exist_ok=True)
    except OSError as e:
        # Any real problem shows up again on the writes below
        logger.debug("Could not create %s: %s", dest_dir, e)

    created: list[str] = []
    copied: list[str] = []
    failures: list[SyncFailure] = []

    new_directories = _missing(
        enumerate_directories(source_dir, full_paths=False),
        enumerate_directories(dest_dir, full_paths=False),
        config.case_insensitive_paths,
    )
    for relative in sorted(new_directories, key=len):
        target = os.path.join(dest_dir, relative)
        if _behind_symlink(dest_dir, relative):
            logger.debug("Skipping %s: symlinked directory in destination", target)
            continue
        try:
            os.makedirs(target, exist_ok=True)
        except OSError as e:
            logger.warning("Failed to create directory %s: %s", target, e)
            failures.append(SyncFailure(path=target, error=str(e), category=classify_error(e)))
            continue
        created.append(relative)

    new_files = _missing(
        enumerate_files(source_dir, full_paths=False),
        enumerate_files(dest_dir, full_paths=False),
        config.case_insensitive_paths,
    )
    for relative in new_files:
        copy_from = os.path.join(source_dir, relative)
        copy_to = os.path.join(dest_dir, relative)
        if _behind_symlink(dest_dir, os.path.dirname(relative)):
            logger.debug("Skipping %s: symlinked directory in destination", copy_to)
            continue
        try:
            copy_file_exclusive(copy_from, copy_to)
            set_writable(copy_to)
        except OSError as e:
            logger.warning("Failed to copy %s to %s: %s", copy_from, copy_to, e)
            failures.append(SyncFailure(path=copy_to, error=str(e), category=classify_error(e)))
            continue
        copied.append(relative)

    logger.debug(
        "Synced %s -> %s: %d directories, %d files, %d failures",
        source_dir,
        dest_dir,
        len(created),
        len(copied),
        len(failures),
    )
    return SyncResult(
        created_directories=tuple(created),
        copied_files=tuple(copied),
        failures=tuple(failures),
    )
