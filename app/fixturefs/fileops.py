"""Single-step filesystem actions.

Thin wrappers around os/shutil calls used by the synchronizer and the
guards. Each function performs one action and lets OSError propagate so
callers can classify and retry it.
"""

import os
import shutil
import stat
from pathlib import Path

# Chunk size for exclusive copies
_COPY_BUFFER_SIZE = 1024 * 1024


def delete_file(path: str | Path) -> None:
    """Delete a file. A file that is already gone counts as deleted.

    Args:
        path: File to delete.

    Raises:
        OSError: If the file exists and cannot be removed.
    """
    Path(path).unlink(missing_ok=True)


def move_file(source: str | Path, destination: str | Path) -> None:
    """Move a file, falling back to copy-and-delete across volumes.

    Args:
        source: File to move.
        destination: Target path. Must not exist.

    Raises:
        FileExistsError: If the destination already exists.
        OSError: If the move fails.
    """
    if os.path.lexists(destination):
        raise FileExistsError(f"Destination already exists: {destination}")
    shutil.move(os.fspath(source), os.fspath(destination))


def set_writable(path: str | Path) -> None:
    """Make a file writable by its owner.

    On Windows this clears the read-only attribute.

    Args:
        path: File to update.

    Raises:
        OSError: If the mode cannot be read or changed.
    """
    mode = os.stat(path).st_mode
    os.chmod(path, stat.S_IMODE(mode) | stat.S_IREAD | stat.S_IWRITE)


def copy_file_exclusive(source: str | Path, destination: str | Path) -> None:
    """Copy file contents to a destination that must not exist yet.

    A destination created by this call is removed again if the copy fails
    partway, so no truncated file is left behind.

    Args:
        source: File to copy.
        destination: Target path, created exclusively.

    Raises:
        FileExistsError: If the destination already exists.
        OSError: If reading or writing fails.
    """
    with open(source, "rb") as src:
        dst = open(destination, "xb")
        try:
            with dst:
                shutil.copyfileobj(src, dst, _COPY_BUFFER_SIZE)
        except OSError:
            Path(destination).unlink(missing_ok=True)
            raise
