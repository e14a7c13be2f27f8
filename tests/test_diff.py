"""
Tests for StubVerify Request Diff

Tests the near-miss explanation renderer including:
- Field-by-field comparison of declarative patterns
- Custom predicate and named matcher rows
- Text rendering with mismatch markers
"""

import pytest

from stubverify.matchers import (
    absent,
    equal_to,
    equal_to_json,
    get_requested_for,
    post_requested_for,
    request_made_for,
    url_equal_to,
    url_path_equal_to
)
from stubverify.verification.diff import Diff
from stubverify.verification.model import LoggedRequest


@pytest.fixture
def health_pattern():
    return get_requested_for(url_equal_to('/health')).build()


class TestComparison:
    """Test which fields are flagged."""

    def test_url_typo(self, health_pattern):
        diff = Diff(health_pattern, LoggedRequest(url='/helth', method='GET'))

        assert [line.label for line in diff.mismatches] == ['URL']
        assert diff.mismatches[0].expected == '/health'
        assert diff.mismatches[0].actual == '/helth'

    def test_method_mismatch(self, health_pattern):
        diff = Diff(health_pattern, LoggedRequest(url='/health', method='POST'))
        assert [line.label for line in diff.mismatches] == ['HTTP method']

    def test_exact_match_has_no_mismatches(self, health_pattern):
        diff = Diff(health_pattern, LoggedRequest(url='/health', method='GET'))
        assert diff.mismatches == []

    def test_headers_query_and_body(self):
        pattern = (post_requested_for(url_path_equal_to('/orders'))
                   .with_header('Content-Type', equal_to('application/json'))
                   .with_header('X-Debug', absent())
                   .with_query_param('dry_run', equal_to('true'))
                   .with_request_body(equal_to_json({'sku': 'A1'}))
                   .build())
        request = LoggedRequest(
            url='/orders?dry_run=false',
            method='POST',
            headers={'content-type': 'text/plain'},
            body='{"sku": "B2"}'
        )

        labels = [line.label for line in Diff(pattern, request).mismatches]

        assert labels == ['Header Content-Type', 'Query parameter dry_run', 'Body']

    def test_missing_header_renders_empty_actual(self):
        pattern = get_requested_for(url_equal_to('/a')).with_header('Accept', equal_to('text/html')).build()
        diff = Diff(pattern, LoggedRequest(url='/a'))

        assert diff.mismatches[0].actual == ''

    def test_named_matcher_listed_not_evaluated(self):
        pattern = request_made_for('is-admin-call').build()
        diff = Diff(pattern, LoggedRequest(url='/anything'))

        assert diff.lines[-1].label == 'Custom matcher is-admin-call'
        assert diff.lines[-1].matched is True

    def test_custom_predicate(self):
        def is_large_order(request):
            return len(request.body) > 100

        pattern = request_made_for(is_large_order).build()
        diff = Diff(pattern, LoggedRequest(url='/orders', method='POST', body='{}'))

        assert len(diff.lines) == 1
        assert diff.lines[0].expected == '[custom predicate] is_large_order'
        assert diff.lines[0].actual == 'POST /orders'
        assert diff.lines[0].matched is False

    def test_unsupported_pattern_type(self):
        with pytest.raises(TypeError):
            Diff(object(), LoggedRequest(url='/'))


class TestRender:
    """Test text output."""

    def test_render_marks_mismatch(self, health_pattern):
        text = Diff(health_pattern, LoggedRequest(url='/helth', method='GET')).render()
        lines = text.splitlines()

        assert lines[0].startswith('Expected')
        assert lines[0].endswith('| Actual')
        assert 'GET' in lines[2] and '<<<<<' not in lines[2]
        assert '/health' in lines[3]
        assert '/helth' in lines[3]
        assert lines[3].endswith('<<<<< URL does not match')

    def test_multiline_body(self):
        pattern = (post_requested_for(url_equal_to('/a'))
                   .with_request_body(equal_to('line one\nline two'))
                   .build())
        text = Diff(pattern, LoggedRequest(url='/a', method='POST', body='line one')).render()

        assert 'line two' in text
        assert text.count('<<<<< Body does not match') == 1

    def test_str_is_render(self, health_pattern):
        diff = Diff(health_pattern, LoggedRequest(url='/helth'))
        assert str(diff) == diff.render()
