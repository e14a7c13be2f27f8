"""
StubVerify Client

Verification and near-miss diagnosis against a running mock server.

Verification is a two-phase protocol:

1. Count: resolve how many logged requests matched the pattern. Declarative
   patterns are counted by the server; custom predicates cannot leave this
   process, so the whole request log is fetched and filtered locally.
2. Diagnose: only when the expectation failed with zero matches, ask the
   server for near misses and explain the best one with a Diff.

Example:
    client = StubClient(port=8080)
    client.verify_that(exactly(1), get_requested_for(url_equal_to('/health')))
"""

import logging
from dataclasses import replace
from typing import List, Optional, Union

from .admin.base import Admin
from .admin.http import HttpAdmin
from .config import ClientConfig
from .exceptions import VerificationFailure
from .matchers.pattern import (
    CustomPredicatePattern,
    DeclarativePattern,
    RequestPattern,
    RequestPatternBuilder,
    all_requests
)
from .settings import GlobalSettings, GlobalSettingsHolder
from .verification.count import CountMatchingStrategy, exactly, more_than_or_exactly
from .verification.diff import Diff
from .verification.model import LoggedRequest, NearMiss, ServeEvent


PatternLike = Union[RequestPattern, RequestPatternBuilder]


def _build(pattern: PatternLike) -> RequestPattern:
    if isinstance(pattern, RequestPatternBuilder):
        return pattern.build()
    if isinstance(pattern, RequestPattern):
        return pattern
    raise TypeError(f"Expected a RequestPattern or RequestPatternBuilder, got {type(pattern).__name__}")


def _expectation(expected: Union[None, int, CountMatchingStrategy]) -> CountMatchingStrategy:
    if expected is None:
        return more_than_or_exactly(1)
    if isinstance(expected, CountMatchingStrategy):
        return expected
    return exactly(expected)


class StubClient:
    """
    Client-side facade for verifying traffic recorded by a mock server.

    Example:
        client = StubClient(host='localhost', port=8080)

        # ... exercise the system under test ...

        client.verify_that(get_requested_for(url_equal_to('/health')))
        client.verify_that(2, post_requested_for(url_path_equal_to('/orders')))
        client.verify_that(less_than(3), any_requested_for(any_url()))
    """

    def __init__(
        self,
        port: Optional[int] = None,
        host: Optional[str] = None,
        scheme: Optional[str] = None,
        url_path_prefix: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        admin: Optional[Admin] = None
    ):
        """
        Initialize client.

        Args:
            port: Mock server port (default 8080)
            host: Mock server host (default localhost)
            scheme: http or https
            url_path_prefix: Context path the server is mounted under
            config: Full ClientConfig; explicit arguments above override it
            admin: Admin implementation (will create an HttpAdmin if None)
        """
        overrides = {
            'port': port,
            'host': host,
            'scheme': scheme,
            'url_path_prefix': url_path_prefix
        }
        config = replace(config or ClientConfig(), **{k: v for k, v in overrides.items() if v is not None})

        self.config = config
        self.admin = admin or HttpAdmin(config)
        self.global_settings_holder = GlobalSettingsHolder()

        self.logger = logging.getLogger("stubverify.client")
        self.logger.setLevel(getattr(logging, self.config.log_level.upper()))

    def verify_that(
        self,
        expected: Union[None, int, CountMatchingStrategy, PatternLike] = None,
        pattern: Optional[PatternLike] = None
    ):
        """
        Assert that the number of logged requests matching pattern meets expected.

        Args:
            expected: CountMatchingStrategy, an int meaning exactly(n), or
                omitted meaning at least one. May be skipped entirely:
                verify_that(pattern) is verify_that(more_than_or_exactly(1), pattern)
            pattern: RequestPatternBuilder or built RequestPattern

        Raises:
            VerificationFailure: If the expectation was not met
            JournalDisabledError: If the server's request journal is disabled
            TransportError: If the server could not be queried
        """
        if pattern is None and isinstance(expected, (RequestPattern, RequestPatternBuilder)):
            expected, pattern = None, expected
        if pattern is None:
            raise TypeError("verify_that() requires a request pattern")

        expected_count = _expectation(expected)
        request_pattern = _build(pattern)

        actual = self._count(request_pattern)
        self.logger.debug(f"Verifying {expected_count} against {actual} matching requests")

        if expected_count.match(actual):
            return

        self.logger.warning(f"Verification failed: expected {expected_count}, received {actual}")
        if actual == 0:
            raise self._failure_for_near_misses(request_pattern, expected_count)
        raise VerificationFailure.for_count_mismatch(request_pattern, expected_count, actual)

    def _count(self, pattern: RequestPattern) -> int:
        """Resolve the actual match count, checking the journal before trusting it."""
        if isinstance(pattern, CustomPredicatePattern):
            result = self.admin.find_requests_matching(RequestPattern.everything())
            result.assert_request_journal_enabled()
            return sum(1 for request in result.requests if pattern.is_matched_by(request))

        if isinstance(pattern, DeclarativePattern):
            result = self.admin.count_requests_matching(pattern)
            result.assert_request_journal_enabled()
            return result.count

        raise TypeError(f"Unsupported request pattern type: {type(pattern).__name__}")

    def _failure_for_near_misses(self, pattern: RequestPattern, expected: CountMatchingStrategy) -> VerificationFailure:
        near_misses = self.find_all_near_misses_for(pattern)
        if near_misses:
            return VerificationFailure.for_unmatched_pattern(Diff(pattern, near_misses[0].request), expected)

        return VerificationFailure.for_unmatched_requests(pattern, expected, self.find(all_requests()))

    def find(self, pattern: PatternLike) -> List[LoggedRequest]:
        """Return logged requests matching pattern, in the order the server logged them."""
        request_pattern = _build(pattern)

        if isinstance(request_pattern, CustomPredicatePattern):
            result = self.admin.find_requests_matching(RequestPattern.everything())
            result.assert_request_journal_enabled()
            return [r for r in result.requests if request_pattern.is_matched_by(r)]

        result = self.admin.find_requests_matching(request_pattern)
        result.assert_request_journal_enabled()
        return result.requests

    def find_all_unmatched_requests(self) -> List[LoggedRequest]:
        result = self.admin.find_unmatched_requests()
        result.assert_request_journal_enabled()
        return result.requests

    def get_serve_events(self) -> List[ServeEvent]:
        """Every request the server has logged with how it was served, most recent first."""
        result = self.admin.get_serve_events()
        result.assert_request_journal_enabled()
        return result.serve_events

    def reset_requests(self):
        """Clear the request journal so later verifications only see new traffic."""
        self.admin.reset_requests()
        self.logger.info("Request journal reset")

    def find_near_misses_for_all_unmatched_requests(self) -> List[NearMiss]:
        return self.admin.find_near_misses_for_unmatched_requests().near_misses

    def find_top_near_misses_for(self, logged_request: LoggedRequest) -> List[NearMiss]:
        """Stub mappings closest to matching a specific logged request, best first."""
        return self.admin.find_top_near_misses_for(logged_request).near_misses

    def find_all_near_misses_for(self, pattern: PatternLike) -> List[NearMiss]:
        """Logged requests closest to matching pattern, best first."""
        request_pattern = _build(pattern)
        # The server cannot rank against a local predicate, there is nothing to compare
        if isinstance(request_pattern, CustomPredicatePattern):
            return []
        return self.admin.find_top_near_misses_for(request_pattern).near_misses

    def set_global_fixed_delay(self, milliseconds: int):
        """Delay every stubbed response by a fixed number of milliseconds."""
        self._update_global_settings(fixed_delay_ms=milliseconds)

    def set_global_random_delay(self, distribution):
        """Delay every stubbed response by a value drawn from distribution."""
        self._update_global_settings(delay_distribution=distribution)

    def _update_global_settings(self, **changes):
        settings = self.global_settings_holder.get().copy(**changes)
        # Cache only what the server accepted
        self.admin.update_global_settings(settings)
        self.global_settings_holder.replace_with(settings)
        self.logger.info(f"Global settings updated: {settings.to_dict()}")

    @property
    def global_settings(self) -> GlobalSettings:
        return self.global_settings_holder.get()
