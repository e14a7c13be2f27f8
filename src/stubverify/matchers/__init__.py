"""
StubVerify Matchers Module

Request pattern building blocks.

This module provides:
- String value patterns for headers, query parameters and bodies
- URL patterns
- Declarative and custom-predicate request patterns with a fluent builder
"""

from .values import (
    StringValuePattern,
    equal_to,
    equal_to_ignore_case,
    containing,
    matching,
    not_matching,
    absent,
    equal_to_json
)
from .url import UrlPattern, url_equal_to, url_matching, url_path_equal_to, url_path_matching, any_url
from .pattern import (
    RequestPattern,
    DeclarativePattern,
    CustomPredicatePattern,
    NamedMatcher,
    RequestPatternBuilder,
    get_requested_for,
    post_requested_for,
    put_requested_for,
    delete_requested_for,
    patch_requested_for,
    head_requested_for,
    options_requested_for,
    trace_requested_for,
    any_requested_for,
    all_requests,
    request_made_for
)

__all__ = [
    # Values
    'StringValuePattern',
    'equal_to',
    'equal_to_ignore_case',
    'containing',
    'matching',
    'not_matching',
    'absent',
    'equal_to_json',

    # URLs
    'UrlPattern',
    'url_equal_to',
    'url_matching',
    'url_path_equal_to',
    'url_path_matching',
    'any_url',

    # Patterns
    'RequestPattern',
    'DeclarativePattern',
    'CustomPredicatePattern',
    'NamedMatcher',
    'RequestPatternBuilder',
    'get_requested_for',
    'post_requested_for',
    'put_requested_for',
    'delete_requested_for',
    'patch_requested_for',
    'head_requested_for',
    'options_requested_for',
    'trace_requested_for',
    'any_requested_for',
    'all_requests',
    'request_made_for',
]
