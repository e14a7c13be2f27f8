"""
StubVerify URL Patterns

URL matching strategies mirroring the WireMock request matcher keys:
url, urlPattern, urlPath and urlPathPattern.
"""

import re
from dataclasses import dataclass
from urllib.parse import urlparse


URL_KINDS = ('url', 'urlPattern', 'urlPath', 'urlPathPattern')


@dataclass(frozen=True)
class UrlPattern:
    """URL matcher; kind is one of URL_KINDS."""

    kind: str
    value: str

    def __post_init__(self):
        if self.kind not in URL_KINDS:
            raise ValueError(f"Unknown URL pattern kind: {self.kind}")

    @property
    def is_regex(self) -> bool:
        return self.kind in ('urlPattern', 'urlPathPattern')

    @property
    def matches_any(self) -> bool:
        return self.kind == 'urlPattern' and self.value == '.*'

    def matches(self, url: str) -> bool:
        """
        Check a logged request URL (path plus query) against this pattern.

        Path variants ignore the query string.
        """
        if self.kind in ('urlPath', 'urlPathPattern'):
            url = urlparse(url).path

        if self.is_regex:
            return re.fullmatch(self.value, url) is not None
        return url == self.value

    def describe(self) -> str:
        if self.is_regex:
            return f"[regex] {self.value}"
        return self.value


def url_equal_to(url: str) -> UrlPattern:
    return UrlPattern('url', url)


def url_matching(regex: str) -> UrlPattern:
    return UrlPattern('urlPattern', regex)


def url_path_equal_to(path: str) -> UrlPattern:
    return UrlPattern('urlPath', path)


def url_path_matching(regex: str) -> UrlPattern:
    return UrlPattern('urlPathPattern', regex)


def any_url() -> UrlPattern:
    return UrlPattern('urlPattern', '.*')
