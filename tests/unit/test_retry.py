"""Unit tests for error classification and the bounded retry primitive."""

import errno
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from fixturefs.errors import ErrorCategory, classify_error
from fixturefs.reporting import FixtureFailure
from fixturefs.retry import RetryOutcome, retry_or_fail, with_retries


def _failing(times: int, error: OSError) -> MagicMock:
    """Operation that raises ``error`` for the first ``times`` calls."""
    effects: list[object] = [error] * times + [None]
    return MagicMock(side_effect=effects)


class TestClassifyError:
    """Tests for classify_error."""

    def test_permission_error(self) -> None:
        """PermissionError is PERMISSION_DENIED."""
        exc = PermissionError(errno.EACCES, "Permission denied")
        assert classify_error(exc) is ErrorCategory.PERMISSION_DENIED

    def test_eperm(self) -> None:
        """EPERM is PERMISSION_DENIED."""
        assert classify_error(OSError(errno.EPERM, "Not permitted")) is (
            ErrorCategory.PERMISSION_DENIED
        )

    def test_busy(self) -> None:
        """EBUSY is IN_USE."""
        assert classify_error(OSError(errno.EBUSY, "Busy")) is ErrorCategory.IN_USE

    def test_windows_sharing_violation(self) -> None:
        """Windows sharing violations are IN_USE even when errno says EACCES."""
        exc = PermissionError(errno.EACCES, "The process cannot access the file")
        exc.winerror = 32  # type: ignore[attr-defined]
        assert classify_error(exc) is ErrorCategory.IN_USE

    def test_exists(self) -> None:
        """FileExistsError is ALREADY_EXISTS."""
        assert classify_error(FileExistsError(errno.EEXIST, "Exists")) is (
            ErrorCategory.ALREADY_EXISTS
        )

    def test_not_found(self) -> None:
        """FileNotFoundError is NOT_FOUND."""
        assert classify_error(FileNotFoundError(errno.ENOENT, "Missing")) is (
            ErrorCategory.NOT_FOUND
        )

    def test_other(self) -> None:
        """Unrecognized errors are OTHER."""
        assert classify_error(OSError(errno.EIO, "I/O error")) is ErrorCategory.OTHER


class TestWithRetries:
    """Tests for with_retries."""

    def test_immediate_success(self) -> None:
        """A successful first attempt returns without sleeping."""
        operation = MagicMock()
        sleep = MagicMock()

        outcome = with_retries(operation, sleep=sleep)

        assert outcome == RetryOutcome(success=True, attempts=1)
        operation.assert_called_once_with()
        sleep.assert_not_called()

    def test_success_on_last_attempt(self) -> None:
        """Nine transient failures followed by success is overall success."""
        operation = _failing(9, OSError(errno.EBUSY, "Busy"))
        sleep = MagicMock()

        outcome = with_retries(operation, max_attempts=10, delay=0.1, sleep=sleep)

        assert outcome.success is True
        assert outcome.attempts == 10
        assert operation.call_count == 10
        assert sleep.call_count == 9
        sleep.assert_called_with(0.1)

    def test_exhausted(self) -> None:
        """Failing every attempt reports the last error."""
        error = OSError(errno.EBUSY, "Busy")
        operation = MagicMock(side_effect=error)
        sleep = MagicMock()

        outcome = with_retries(operation, max_attempts=10, sleep=sleep)

        assert outcome.success is False
        assert outcome.attempts == 10
        assert outcome.error is error
        assert operation.call_count == 10
        # No delay after the final attempt
        assert sleep.call_count == 9

    def test_other_errors_use_full_budget(self) -> None:
        """Non-transient OS errors do not end the loop early."""
        operation = MagicMock(side_effect=OSError(errno.EIO, "I/O error"))

        outcome = with_retries(operation, max_attempts=4, sleep=MagicMock())

        assert outcome.success is False
        assert operation.call_count == 4

    def test_permission_error_clears_readonly(self, tmp_path: Path) -> None:
        """Access denial makes the target writable before retrying."""
        target = tmp_path / "locked.txt"
        operation = _failing(1, PermissionError(errno.EACCES, "Permission denied"))

        with patch("fixturefs.retry.set_writable") as mock_writable:
            outcome = with_retries(operation, target=target, sleep=MagicMock())

        assert outcome.success is True
        mock_writable.assert_called_once_with(target)

    def test_clearing_readonly_failure_ignored(self, tmp_path: Path) -> None:
        """A failure to clear the read-only attribute is swallowed."""
        target = tmp_path / "missing.txt"
        operation = _failing(2, PermissionError(errno.EACCES, "Permission denied"))

        outcome = with_retries(operation, target=target, sleep=MagicMock())

        assert outcome == RetryOutcome(success=True, attempts=3)

    def test_in_use_does_not_touch_attributes(self, tmp_path: Path) -> None:
        """Only permission errors trigger the attribute reset."""
        operation = _failing(1, OSError(errno.EBUSY, "Busy"))

        with patch("fixturefs.retry.set_writable") as mock_writable:
            with_retries(operation, target=tmp_path, sleep=MagicMock())

        mock_writable.assert_not_called()

    def test_non_os_error_propagates(self) -> None:
        """Programming errors are not retried."""
        operation = MagicMock(side_effect=ValueError("bug"))

        with pytest.raises(ValueError, match="bug"):
            with_retries(operation, sleep=MagicMock())

        operation.assert_called_once_with()


class TestRetryOrFail:
    """Tests for retry_or_fail."""

    def test_success_does_not_report(self) -> None:
        """A successful operation never calls the reporter."""
        reporter = MagicMock()

        outcome = retry_or_fail(MagicMock(), "boom", reporter=reporter, sleep=MagicMock())

        assert outcome.success is True
        reporter.assert_not_called()

    def test_exhausted_raises_fixture_failure(self) -> None:
        """The default reporter turns exhaustion into a FixtureFailure."""
        operation = MagicMock(side_effect=OSError(errno.EBUSY, "Busy"))

        with pytest.raises(FixtureFailure, match="Failed to delete x"):
            retry_or_fail(operation, "Failed to delete x", sleep=MagicMock())

        assert operation.call_count == 10

    def test_exhausted_uses_custom_reporter(self) -> None:
        """A custom reporter receives the failure message."""
        reporter = MagicMock(side_effect=RuntimeError("reported"))
        operation = MagicMock(side_effect=OSError(errno.EBUSY, "Busy"))

        with pytest.raises(RuntimeError, match="reported"):
            retry_or_fail(
                operation, "Failed to move y", max_attempts=2, reporter=reporter, sleep=MagicMock()
            )

        message = reporter.call_args.args[0]
        assert message.startswith("Failed to move y")
        assert "2 attempts" in message
