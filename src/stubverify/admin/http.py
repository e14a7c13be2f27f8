"""
StubVerify HTTP Admin Client

Thin adapter over the WireMock-compatible admin REST API. Requests go
through a requests.Session with urllib3 retry logic; every failure to get a
valid answer surfaces as TransportError.
"""

import logging
from typing import Any, Dict, Optional, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import ClientConfig
from ..exceptions import TransportError
from ..matchers.pattern import DeclarativePattern, RequestPattern
from ..settings import GlobalSettings
from ..verification.model import (
    FindNearMissesResult,
    FindRequestsResult,
    GetServeEventsResult,
    LoggedRequest,
    VerificationResult
)
from .base import Admin


class HttpAdmin(Admin):
    """
    Admin implementation talking JSON over HTTP.

    Example:
        admin = HttpAdmin(ClientConfig(host='localhost', port=8080))
        result = admin.count_requests_matching(pattern)
        print(result.count)
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize admin client.

        Args:
            config: Connection settings (defaults to localhost:8080)
            session: Optional pre-built session (will create one with retries if None)
        """
        self.config = config or ClientConfig()
        self.logger = logging.getLogger("stubverify.admin")
        self.logger.setLevel(getattr(logging, self.config.log_level.upper()))
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with retry configuration."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.config.max_retries,
            backoff_factor=0.5,
            status_forcelist=[502, 503, 504],
            allowed_methods=["GET", "POST", "DELETE"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def _call(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Perform one admin round trip and return the decoded JSON body."""
        url = f"{self.config.admin_url}{path}"
        self.logger.debug(f"Admin call: {method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=payload,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
        except requests.RequestException as e:
            raise TransportError(f"Could not reach mock server admin API at {url}: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"Admin API {method} {url} returned HTTP {response.status_code}: {response.text[:500]}",
                url=url,
                status_code=response.status_code
            )

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Admin API {method} {url} returned invalid JSON",
                url=url,
                status_code=response.status_code
            ) from e

    @staticmethod
    def _pattern_payload(pattern: RequestPattern) -> Dict[str, Any]:
        if not isinstance(pattern, DeclarativePattern):
            raise TypeError(
                f"{type(pattern).__name__} cannot be sent to the server, "
                f"custom predicates are evaluated locally"
            )
        return pattern.to_dict()

    def count_requests_matching(self, pattern: RequestPattern) -> VerificationResult:
        data = self._call('POST', '/requests/count', self._pattern_payload(pattern))
        return VerificationResult.from_dict(data)

    def find_requests_matching(self, pattern: RequestPattern) -> FindRequestsResult:
        data = self._call('POST', '/requests/find', self._pattern_payload(pattern))
        return FindRequestsResult.from_dict(data)

    def find_unmatched_requests(self) -> FindRequestsResult:
        return FindRequestsResult.from_dict(self._call('GET', '/requests/unmatched'))

    def find_top_near_misses_for(self, target: Union[RequestPattern, LoggedRequest]) -> FindNearMissesResult:
        if isinstance(target, LoggedRequest):
            data = self._call('POST', '/near-misses/request', target.to_dict())
        else:
            data = self._call('POST', '/near-misses/request-pattern', self._pattern_payload(target))
        return FindNearMissesResult.from_dict(data)

    def find_near_misses_for_unmatched_requests(self) -> FindNearMissesResult:
        return FindNearMissesResult.from_dict(self._call('GET', '/requests/unmatched/near-misses'))

    def get_serve_events(self) -> GetServeEventsResult:
        return GetServeEventsResult.from_dict(self._call('GET', '/requests'))

    def reset_requests(self):
        self._call('DELETE', '/requests')

    def update_global_settings(self, settings: GlobalSettings):
        self._call('POST', '/settings', settings.to_dict())
