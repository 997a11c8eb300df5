"""Bounded retry for single file operations.

Deletes, moves and restores in test teardown routinely collide with
antivirus scanners, indexers and read-only attributes. with_retries()
re-attempts such an operation a fixed number of times with a fixed delay,
clearing the read-only attribute of the target when access is denied.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from fixturefs.core.config import DEFAULT_RETRY_ATTEMPTS, DEFAULT_RETRY_DELAY_SECONDS
from fixturefs.errors import ErrorCategory, classify_error
from fixturefs.fileops import set_writable
from fixturefs.reporting import Reporter, fail

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RetryOutcome:
    """Result of a retried operation.

    Attributes:
        success: Whether some attempt succeeded.
        attempts: Number of attempts made.
        error: Last error seen, None on success.
    """

    success: bool
    attempts: int
    error: OSError | None = None


def _clear_readonly(target: str | Path) -> None:
    """Best-effort removal of the read-only attribute; failures are ignored."""
    try:
        set_writable(target)
    except OSError as e:
        logger.debug("Could not make %s writable: %s", target, e)


def with_retries(
    operation: Callable[[], None],
    *,
    target: str | Path | None = None,
    max_attempts: int = DEFAULT_RETRY_ATTEMPTS,
    delay: float = DEFAULT_RETRY_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> RetryOutcome:
    """Run a file operation until it succeeds or the attempt budget runs out.

    Every OSError consumes one attempt. Permission errors first try to
    make ``target`` writable. Other exceptions are not filesystem errors
    and propagate immediately.

    Args:
        operation: Callable performing the action.
        target: Path whose read-only attribute is cleared on access denial.
        max_attempts: Maximum number of attempts.
        delay: Seconds to wait between attempts.
        sleep: Sleep function (injectable for tests).

    Returns:
        RetryOutcome describing the final state.
    """
    last_error: OSError | None = None

    for attempt in range(1, max_attempts + 1):
        try:
            operation()
        except OSError as e:
            last_error = e
            category = classify_error(e)
            logger.debug(
                "Attempt %d/%d failed (%s): %s", attempt, max_attempts, category.value, e
            )
            if category is ErrorCategory.PERMISSION_DENIED and target is not None:
                _clear_readonly(target)
        else:
            return RetryOutcome(success=True, attempts=attempt)

        if attempt < max_attempts:
            sleep(delay)

    return RetryOutcome(success=False, attempts=max_attempts, error=last_error)


def retry_or_fail(
    operation: Callable[[], None],
    message: str,
    *,
    target: str | Path | None = None,
    max_attempts: int = DEFAULT_RETRY_ATTEMPTS,
    delay: float = DEFAULT_RETRY_DELAY_SECONDS,
    reporter: Reporter = fail,
    sleep: Callable[[float], None] = time.sleep,
) -> RetryOutcome:
    """Run with_retries() and report a hard failure when all attempts fail.

    Args:
        operation: Callable performing the action.
        message: Failure message passed to the reporter.
        target: Path whose read-only attribute is cleared on access denial.
        max_attempts: Maximum number of attempts.
        delay: Seconds to wait between attempts.
        reporter: Called with the message when the budget is exhausted.
        sleep: Sleep function (injectable for tests).

    Returns:
        The successful RetryOutcome.
    """
    outcome = with_retries(
        operation, target=target, max_attempts=max_attempts, delay=delay, sleep=sleep
    )
    if not outcome.success:
        logger.error("%s after %d attempts: %s", message, outcome.attempts, outcome.error)
        reporter(f"{message} ({outcome.attempts} attempts, last error: {outcome.error})")
    return outcome
