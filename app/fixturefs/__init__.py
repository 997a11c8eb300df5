"""fixturefs - Resilient filesystem helpers for test fixtures.

Walks directory trees, seeds fixture directories with additive copies,
and provides scoped backup/restore and temporary-file guards that survive
transient filesystem errors.
"""

from fixturefs.errors import ErrorCategory, classify_error
from fixturefs.guards import BackupGuard, TempFileGuard, begin_backup, create_temp_text_file
from fixturefs.reporting import FixtureFailure, fail
from fixturefs.retry import RetryOutcome, with_retries
from fixturefs.sync import SyncFailure, SyncResult, copy_directory
from fixturefs.walker import enumerate_directories, enumerate_files, normalize_root

__version__ = "0.1.0"

__all__ = [
    "BackupGuard",
    "ErrorCategory",
    "FixtureFailure",
    "RetryOutcome",
    "SyncFailure",
    "SyncResult",
    "TempFileGuard",
    "__version__",
    "begin_backup",
    "classify_error",
    "copy_directory",
    "create_temp_text_file",
    "enumerate_directories",
    "enumerate_files",
    "fail",
    "normalize_root",
    "with_retries",
]
