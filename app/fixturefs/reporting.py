"""Failure reporting for unrecoverable fixture errors.

Guards report lifecycle failures (a backup that cannot be restored, a
temporary file that cannot be created) through a reporter callable that
terminates the current test. The default reporter raises FixtureFailure;
test suites may inject their framework's own, e.g. ``pytest.fail``.
"""

from collections.abc import Callable
from typing import NoReturn

Reporter = Callable[[str], NoReturn]


class FixtureFailure(AssertionError):
    """Raised when a fixture cannot restore or create filesystem state."""


def fail(message: str, *args: object) -> NoReturn:
    """Terminate the current test with a descriptive message.

    Args:
        message: Message, optionally with %-style placeholders.
        *args: Values substituted into the message.

    Raises:
        FixtureFailure: Always.
    """
    raise FixtureFailure(message % args if args else message)
