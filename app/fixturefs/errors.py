"""Classification of filesystem errors.

Callers match on ErrorCategory rather than on exception types to decide
whether an error is worth retrying, can be ignored, or must be reported.
"""

import errno
from enum import Enum

# Windows ERROR_SHARING_VIOLATION and ERROR_LOCK_VIOLATION
_WINDOWS_IN_USE_ERRORS: frozenset[int] = frozenset({32, 33})

_IN_USE_ERRNOS: frozenset[int] = frozenset({errno.EBUSY, errno.ETXTBSY})
_PERMISSION_ERRNOS: frozenset[int] = frozenset({errno.EACCES, errno.EPERM})


class ErrorCategory(str, Enum):
    """Classification of a filesystem error.

    Attributes:
        IN_USE: File is locked or in use by another process.
        PERMISSION_DENIED: Access denied, often caused by a read-only attribute.
        ALREADY_EXISTS: Target path already exists.
        NOT_FOUND: Path does not exist.
        OTHER: Any other I/O failure.
    """

    IN_USE = "in_use"
    PERMISSION_DENIED = "permission_denied"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    OTHER = "other"


def classify_error(exc: OSError) -> ErrorCategory:
    """Map an OSError to an ErrorCategory.

    Args:
        exc: Error raised by a filesystem call.

    Returns:
        The category of the error.
    """
    if getattr(exc, "winerror", None) in _WINDOWS_IN_USE_ERRORS or exc.errno in _IN_USE_ERRNOS:
        return ErrorCategory.IN_USE
    if isinstance(exc, PermissionError) or exc.errno in _PERMISSION_ERRNOS:
        return ErrorCategory.PERMISSION_DENIED
    if isinstance(exc, FileExistsError) or exc.errno == errno.EEXIST:
        return ErrorCategory.ALREADY_EXISTS
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return ErrorCategory.NOT_FOUND
    return ErrorCategory.OTHER
