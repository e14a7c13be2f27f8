"""
StubVerify Request Patterns

Request patterns come in two closed variants:

- DeclarativePattern: method, URL, header, query and body matchers (plus an
  optional named server-side matcher extension). Serializable, so the mock
  server evaluates it.
- CustomPredicatePattern: an arbitrary Python callable. It cannot be sent
  to the server, so it is evaluated locally against the request log.

Example:
    pattern = (get_requested_for(url_equal_to('/health'))
               .with_header('Accept', equal_to('application/json'))
               .build())

    custom = request_made_for(lambda request: 'token' in request.body).build()
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, TYPE_CHECKING

from .url import UrlPattern, any_url
from .values import StringValuePattern, absent

if TYPE_CHECKING:
    from ..verification.model import LoggedRequest


METHODS = ('GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'HEAD', 'OPTIONS', 'TRACE', 'ANY')


class RequestPattern:
    """Base of the two pattern variants."""

    @property
    def has_custom_matcher(self) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError

    @staticmethod
    def everything() -> DeclarativePattern:
        """Pattern matching every logged request."""
        return DeclarativePattern(method='ANY', url_pattern=any_url())


@dataclass(frozen=True)
class NamedMatcher:
    """Reference to a matcher extension registered on the mock server."""

    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'parameters': dict(self.parameters)}


@dataclass(frozen=True)
class DeclarativePattern(RequestPattern):
    """Pattern expressed entirely in the server's matching language."""

    method: str = 'ANY'
    url_pattern: UrlPattern = field(default_factory=any_url)
    headers: Tuple[Tuple[str, StringValuePattern], ...] = ()
    query_parameters: Tuple[Tuple[str, StringValuePattern], ...] = ()
    body_patterns: Tuple[StringValuePattern, ...] = ()
    custom_matcher: Optional[NamedMatcher] = None

    @property
    def has_custom_matcher(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the WireMock request matcher JSON format."""
        data: Dict[str, Any] = {
            'method': self.method,
            self.url_pattern.kind: self.url_pattern.value
        }
        if self.headers:
            data['headers'] = {name: pattern.to_dict() for name, pattern in self.headers}
        if self.query_parameters:
            data['queryParameters'] = {name: pattern.to_dict() for name, pattern in self.query_parameters}
        if self.body_patterns:
            data['bodyPatterns'] = [pattern.to_dict() for pattern in self.body_patterns]
        if self.custom_matcher:
            data['customMatcher'] = self.custom_matcher.to_dict()
        return data

    def describe(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True)
class CustomPredicatePattern(RequestPattern):
    """Pattern backed by a caller-supplied predicate over LoggedRequest."""

    predicate: Callable[['LoggedRequest'], bool]
    name: str = ''

    @property
    def has_custom_matcher(self) -> bool:
        return True

    @property
    def display_name(self) -> str:
        return self.name or getattr(self.predicate, '__name__', 'custom predicate')

    def is_matched_by(self, request: 'LoggedRequest') -> bool:
        return bool(self.predicate(request))

    def describe(self) -> str:
        return f"[custom predicate] {self.display_name}"


class RequestPatternBuilder:
    """Fluent builder producing an immutable RequestPattern."""

    def __init__(
        self,
        method: str = 'ANY',
        url_pattern: Optional[UrlPattern] = None,
        predicate: Optional[Callable[['LoggedRequest'], bool]] = None,
        predicate_name: str = ''
    ):
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        self.method = method
        self.url_pattern = url_pattern or any_url()
        self.headers: Dict[str, StringValuePattern] = {}
        self.query_parameters: Dict[str, StringValuePattern] = {}
        self.body_patterns = []
        self.custom_matcher: Optional[NamedMatcher] = None
        self.predicate = predicate
        self.predicate_name = predicate_name

    @classmethod
    def for_custom_predicate(
        cls,
        predicate: Callable[['LoggedRequest'], bool],
        name: str = ''
    ) -> RequestPatternBuilder:
        return cls(predicate=predicate, predicate_name=name)

    def with_header(self, name: str, pattern: StringValuePattern) -> RequestPatternBuilder:
        self.headers[name] = pattern
        return self

    def without_header(self, name: str) -> RequestPatternBuilder:
        self.headers[name] = absent()
        return self

    def with_query_param(self, name: str, pattern: StringValuePattern) -> RequestPatternBuilder:
        self.query_parameters[name] = pattern
        return self

    def with_request_body(self, pattern: StringValuePattern) -> RequestPatternBuilder:
        self.body_patterns.append(pattern)
        return self

    def and_matching(self, name: str, parameters: Optional[Dict[str, Any]] = None) -> RequestPatternBuilder:
        """Add a named matcher extension evaluated by the server."""
        self.custom_matcher = NamedMatcher(name, dict(parameters or {}))
        return self

    def build(self) -> RequestPattern:
        if self.predicate is not None:
            return CustomPredicatePattern(predicate=self.predicate, name=self.predicate_name)

        return DeclarativePattern(
            method=self.method,
            url_pattern=self.url_pattern,
            headers=tuple(self.headers.items()),
            query_parameters=tuple(self.query_parameters.items()),
            body_patterns=tuple(self.body_patterns),
            custom_matcher=self.custom_matcher
        )


def get_requested_for(url_pattern: UrlPattern) -> RequestPatternBuilder:
    return RequestPatternBuilder('GET', url_pattern)


def post_requested_for(url_pattern: UrlPattern) -> RequestPatternBuilder:
    return RequestPatternBuilder('POST', url_pattern)


def put_requested_for(url_pattern: UrlPattern) -> RequestPatternBuilder:
    return RequestPatternBuilder('PUT', url_pattern)


def delete_requested_for(url_pattern: UrlPattern) -> RequestPatternBuilder:
    return RequestPatternBuilder('DELETE', url_pattern)


def patch_requested_for(url_pattern: UrlPattern) -> RequestPatternBuilder:
    return RequestPatternBuilder('PATCH', url_pattern)


def head_requested_for(url_pattern: UrlPattern) -> RequestPatternBuilder:
    return RequestPatternBuilder('HEAD', url_pattern)


def options_requested_for(url_pattern: UrlPattern) -> RequestPatternBuilder:
    return RequestPatternBuilder('OPTIONS', url_pattern)


def trace_requested_for(url_pattern: UrlPattern) -> RequestPatternBuilder:
    return RequestPatternBuilder('TRACE', url_pattern)


def any_requested_for(url_pattern: UrlPattern) -> RequestPatternBuilder:
    return RequestPatternBuilder('ANY', url_pattern)


def all_requests() -> RequestPatternBuilder:
    return RequestPatternBuilder('ANY', any_url())


def request_made_for(
    matcher: Any,
    parameters: Optional[Dict[str, Any]] = None
) -> RequestPatternBuilder:
    """
    Build a pattern around a custom matcher.

    Args:
        matcher: Either the name of a matcher extension registered on the
            server (evaluated remotely), or a callable taking a
            LoggedRequest and returning bool (evaluated locally)
        parameters: Parameters for a named server-side matcher

    Returns:
        RequestPatternBuilder
    """
    if callable(matcher):
        if parameters:
            raise ValueError("Parameters are only supported for named server-side matchers")
        return RequestPatternBuilder.for_custom_predicate(matcher)
    return RequestPatternBuilder().and_matching(matcher, parameters)
