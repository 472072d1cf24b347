"""Exception types raised by the core."""

from __future__ import annotations

from collections.abc import Sequence


class UsageError(Exception):
    """Bad input from the operator (malformed field, missing revision, ...)."""


class UserAbortError(Exception):
    """The operator declined a confirmation prompt."""


class CommitMessageParserError(Exception):
    """The remote parser rejected one or more commit message fields."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


class TestRunnerError(RuntimeError):
    """The external test runner reported an error on stderr."""

    __test__ = False
