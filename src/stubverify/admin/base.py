"""
StubVerify Admin Interface

Operations the verification client needs from the mock server. Any
implementation signals connectivity problems with TransportError.
"""

from abc import ABC, abstractmethod
from typing import Union

from ..matchers.pattern import RequestPattern
from ..settings import GlobalSettings
from ..verification.model import (
    FindNearMissesResult,
    FindRequestsResult,
    GetServeEventsResult,
    LoggedRequest,
    VerificationResult
)


class Admin(ABC):
    """Request journal, near-miss and settings operations of a mock server."""

    @abstractmethod
    def count_requests_matching(self, pattern: RequestPattern) -> VerificationResult:
        """Count logged requests matching pattern."""

    @abstractmethod
    def find_requests_matching(self, pattern: RequestPattern) -> FindRequestsResult:
        """Return logged requests matching pattern."""

    @abstractmethod
    def find_unmatched_requests(self) -> FindRequestsResult:
        """Return logged requests that matched no stub mapping."""

    @abstractmethod
    def find_top_near_misses_for(self, target: Union[RequestPattern, LoggedRequest]) -> FindNearMissesResult:
        """
        Rank near misses for a pattern (against the request log) or for a
        logged request (against the registered stub mappings).
        """

    @abstractmethod
    def find_near_misses_for_unmatched_requests(self) -> FindNearMissesResult:
        """Rank near misses for every unmatched logged request."""

    @abstractmethod
    def get_serve_events(self) -> GetServeEventsResult:
        """Return every serve event in the request journal."""

    @abstractmethod
    def reset_requests(self):
        """Clear the request journal."""

    @abstractmethod
    def update_global_settings(self, settings: GlobalSettings):
        """Apply a complete settings snapshot on the server."""
