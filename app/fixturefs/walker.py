"""Fault-tolerant directory tree enumeration.

Enumerates directories breadth-first and files per directory, lazily.
A directory that cannot be listed (permission denied, vanished, locked)
is treated as empty so that one hostile subtree never aborts the walk
of its siblings.
"""

import fnmatch
import itertools
import logging
import os
from collections import deque
from collections.abc import Iterator

from fixturefs.errors import classify_error

logger = logging.getLogger(__name__)


def normalize_root(root: str | os.PathLike[str]) -> str:
    """Return the root as a string ending with a path separator.

    Args:
        root: Directory path.

    Returns:
        The path with a trailing separator. Idempotent.
    """
    path = os.fspath(root)
    separators = tuple(s for s in (os.sep, os.altsep) if s)
    if path.endswith(separators):
        return path
    return path + os.sep


def _list_entries(directory: str) -> list[os.DirEntry[str]]:
    """List a directory, returning no entries when it cannot be read.

    Args:
        directory: Directory to list.

    Returns:
        Entries sorted by name, or an empty list on error.
    """
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        logger.debug("Skipping %s (%s): %s", directory, classify_error(e).value, e)
        return []


def _is_directory(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _is_file(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def _relativize(path: str, root: str) -> str | None:
    """Strip the root prefix from a path.

    Returns None for paths outside the root.
    """
    if not os.path.normcase(path).startswith(os.path.normcase(root)):
        return None
    return path[len(root) :]


def enumerate_directories(
    root: str | os.PathLike[str],
    recurse: bool = True,
    full_paths: bool = True,
) -> Iterator[str]:
    """Lazily enumerate directories under a root, breadth-first.

    Symlinked directories are not followed.

    Args:
        root: Traversal root.
        recurse: If False, only the immediate subdirectories are yielded.
        full_paths: If False, paths are yielded relative to the root.

    Yields:
        Directory paths, full or root-relative.
    """
    root = normalize_root(root)
    queue: deque[str] = deque([root])

    while queue:
        directory = queue.popleft()
        for entry in _list_entries(directory):
            if not _is_directory(entry):
                continue
            path = entry.path
            if full_paths:
                yield path
            else:
                relative = _relativize(path, root)
                if relative is None:
                    continue
                yield relative
            if recurse:
                queue.append(path)


def enumerate_files(
    root: str | os.PathLike[str],
    pattern: str = "*",
    recurse: bool = True,
    full_paths: bool = True,
) -> Iterator[str]:
    """Lazily enumerate files under a root.

    Files directly in the root come first, followed by the files of each
    directory in the order enumerate_directories() visits them.

    Args:
        root: Traversal root.
        pattern: Shell-style wildcard matched against file names.
        recurse: If False, only files directly in the root are yielded.
        full_paths: If False, paths are yielded relative to the root.

    Yields:
        File paths, full or root-relative.
    """
    root = normalize_root(root)

    directories = enumerate_directories(root, recurse, full_paths=True)
    for directory in itertools.chain([root], directories):
        for entry in _list_entries(directory):
            if not _is_file(entry) or not fnmatch.fnmatch(entry.name, pattern):
                continue
            if full_paths:
                yield entry.path
            else:
                relative = _relativize(entry.path, root)
                if relative is None:
                    continue
                yield relative

