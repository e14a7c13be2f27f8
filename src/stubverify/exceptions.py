"""
StubVerify Exceptions

Failure kinds raised by the verification client.

- JournalDisabledError: the remote request journal is switched off
- VerificationFailure: the expected request count was not met
- TransportError: the admin service could not be reached or answered badly
"""

from __future__ import annotations

from typing import Any, List, Optional


class StubVerifyError(Exception):
    """Base class for non-assertion errors raised by stubverify."""


class JournalDisabledError(StubVerifyError):
    """Raised when a count or log query hits a server with the request journal disabled."""

    def __init__(self, message: str = "The request journal is disabled, so no verification or request searching operations are available"):
        super().__init__(message)


class TransportError(StubVerifyError):
    """Raised when the admin service cannot be reached or returns an invalid response."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class VerificationFailure(AssertionError):
    """
    Raised when the number of matching requests does not satisfy the expectation.

    Subclasses AssertionError so test runners report it as an ordinary
    test failure. Exactly one of the payload shapes is populated:

    - pattern + expected + actual: a plain count mismatch
    - diff + expected: the closest near miss, when nothing matched at all
    - pattern + expected + requests: nothing matched and there were no near misses
    """

    def __init__(
        self,
        message: str,
        pattern: Any = None,
        expected: Any = None,
        actual: Optional[int] = None,
        diff: Any = None,
        requests: Optional[List[Any]] = None
    ):
        super().__init__(message)
        self.pattern = pattern
        self.expected = expected
        self.actual = actual
        self.diff = diff
        self.requests = requests

    @classmethod
    def for_count_mismatch(cls, pattern: Any, expected: Any, actual: int) -> VerificationFailure:
        """Failure for a pattern that matched, but not the expected number of times."""
        message = (
            f"Expected {expected} requests matching the following pattern but received {actual}:\n"
            f"{pattern.describe()}"
        )
        return cls(message, pattern=pattern, expected=expected, actual=actual)

    @classmethod
    def for_unmatched_pattern(cls, diff: Any, expected: Any = None) -> VerificationFailure:
        """Failure carrying a rendered diff against the closest near miss."""
        message = f"No requests exactly matched. Most similar request was:\n{diff.render()}"
        return cls(message, pattern=diff.pattern, expected=expected, actual=0, diff=diff)

    @classmethod
    def for_unmatched_requests(cls, pattern: Any, expected: Any, requests: List[Any]) -> VerificationFailure:
        """Failure listing every logged request when no near miss could be found."""
        if requests:
            received = "\n".join(f"  {request.summary()}" for request in requests)
        else:
            received = "  (none)"
        message = (
            f"Expected {expected} requests matching the following pattern but received 0:\n{pattern.describe()}\n"
            f"Requests received:\n{received}"
        )
        return cls(message, pattern=pattern, expected=expected, actual=0, requests=list(requests))
