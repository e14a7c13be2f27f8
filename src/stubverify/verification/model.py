"""
StubVerify Verification Model

Records exchanged with the admin service: logged requests, near misses and
the count/find results that carry the request journal flag.
"""

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse, parse_qs

from ..exceptions import JournalDisabledError


@dataclass(frozen=True)
class LoggedRequest:
    """A request previously observed by the mock server."""

    url: str
    method: str = 'GET'
    headers: Dict[str, Any] = field(default_factory=dict)
    body: str = ''
    absolute_url: Optional[str] = None
    client_ip: Optional[str] = None
    logged_date: Optional[int] = None
    browser_proxy_request: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LoggedRequest':
        """Create from the admin API JSON representation."""
        body = data.get('body')
        if body is None and data.get('bodyAsBase64'):
            body = base64.b64decode(data['bodyAsBase64']).decode('utf-8', errors='replace')

        return cls(
            url=data.get('url', '/'),
            method=data.get('method', 'GET').upper(),
            headers=dict(data.get('headers') or {}),
            body=body or '',
            absolute_url=data.get('absoluteUrl'),
            client_ip=data.get('clientIp'),
            logged_date=data.get('loggedDate'),
            browser_proxy_request=bool(data.get('browserProxyRequest', False))
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'url': self.url,
            'method': self.method,
            'headers': dict(self.headers),
            'body': self.body,
            'browserProxyRequest': self.browser_proxy_request
        }
        if self.absolute_url:
            data['absoluteUrl'] = self.absolute_url
        if self.client_ip:
            data['clientIp'] = self.client_ip
        if self.logged_date is not None:
            data['loggedDate'] = self.logged_date
        return data

    @property
    def path(self) -> str:
        return urlparse(self.url).path

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup returning the first value, or None."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                if isinstance(value, (list, tuple)):
                    return value[0] if value else None
                return value
        return None

    def query_parameter(self, name: str) -> Optional[str]:
        values = parse_qs(urlparse(self.url).query).get(name)
        return values[0] if values else None

    def summary(self) -> str:
        return f"{self.method} {self.url}"


@dataclass(frozen=True)
class NearMiss:
    """A logged request paired with its distance from a pattern, as ranked by the server."""

    request: LoggedRequest
    request_pattern: Optional[Dict[str, Any]] = None
    stub_mapping_id: Optional[str] = None
    distance: float = 1.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NearMiss':
        stub_mapping = data.get('mapping') or data.get('stubMapping') or {}
        match_result = data.get('matchResult') or {}
        return cls(
            request=LoggedRequest.from_dict(data.get('request', {})),
            request_pattern=data.get('requestPattern'),
            stub_mapping_id=stub_mapping.get('id') or stub_mapping.get('uuid'),
            distance=float(match_result.get('distance', 1.0))
        )


@dataclass(frozen=True)
class VerificationResult:
    """Server-side count of matching requests."""

    count: int
    request_journal_enabled: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VerificationResult':
        return cls(
            count=int(data.get('count', -1)),
            request_journal_enabled=not data.get('requestJournalDisabled', False)
        )

    def assert_request_journal_enabled(self):
        if not self.request_journal_enabled:
            raise JournalDisabledError()


@dataclass(frozen=True)
class FindRequestsResult:
    """Logged requests returned by a find query, oldest first."""

    requests: List[LoggedRequest] = field(default_factory=list)
    request_journal_enabled: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FindRequestsResult':
        return cls(
            requests=[LoggedRequest.from_dict(r) for r in data.get('requests', [])],
            request_journal_enabled=not data.get('requestJournalDisabled', False)
        )

    def assert_request_journal_enabled(self):
        if not self.request_journal_enabled:
            raise JournalDisabledError()


@dataclass(frozen=True)
class FindNearMissesResult:
    """Near misses in the order the server ranked them, best first."""

    near_misses: List[NearMiss] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FindNearMissesResult':
        return cls(near_misses=[NearMiss.from_dict(n) for n in data.get('nearMisses', [])])


@dataclass(frozen=True)
class ServeEvent:
    """One entry of the request journal: the request and how it was served."""

    id: str
    request: LoggedRequest
    was_matched: bool = False
    stub_mapping_id: Optional[str] = None
    response_status: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ServeEvent':
        mapping = data.get('stubMapping') or {}
        response = data.get('response') or data.get('responseDefinition') or {}
        return cls(
            id=data.get('id', ''),
            request=LoggedRequest.from_dict(data.get('request', {})),
            was_matched=bool(data.get('wasMatched', False)),
            stub_mapping_id=mapping.get('id') or mapping.get('uuid'),
            response_status=response.get('status')
        )


@dataclass(frozen=True)
class GetServeEventsResult:
    """Serve events, most recent first, plus the request journal flag."""

    serve_events: List[ServeEvent] = field(default_factory=list)
    request_journal_enabled: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GetServeEventsResult':
        return cls(
            serve_events=[ServeEvent.from_dict(e) for e in data.get('requests', [])],
            request_journal_enabled=not data.get('requestJournalDisabled', False)
        )

    def assert_request_journal_enabled(self):
        if not self.request_journal_enabled:
            raise JournalDisabledError()
