"""
Tests for StubVerify HTTP Admin Client

Tests the requests-based admin adapter including:
- Endpoint and payload mapping
- Response parsing
- Transport error conversion
- Session retry configuration
"""

import pytest
from unittest.mock import Mock
import requests

from stubverify.admin.http import HttpAdmin
from stubverify.config import ClientConfig
from stubverify.exceptions import TransportError
from stubverify.matchers import get_requested_for, request_made_for, url_equal_to
from stubverify.settings import GlobalSettings
from stubverify.verification.model import LoggedRequest


def make_response(status_code=200, payload=None, content=b'{}'):
    response = Mock()
    response.status_code = status_code
    response.content = content
    response.text = content.decode('utf-8')
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def session():
    session = Mock(spec=requests.Session)
    session.request.return_value = make_response()
    return session


@pytest.fixture
def admin(session):
    return HttpAdmin(ClientConfig(host='mocks', port=9090, timeout=5), session=session)


class TestEndpoints:
    """Test admin API calls."""

    def test_count(self, admin, session):
        session.request.return_value = make_response(payload={'count': 4, 'requestJournalDisabled': False})

        result = admin.count_requests_matching(get_requested_for(url_equal_to('/health')).build())

        assert result.count == 4
        assert result.request_journal_enabled is True
        session.request.assert_called_once_with(
            method='POST',
            url='http://mocks:9090/__admin/requests/count',
            json={'method': 'GET', 'url': '/health'},
            timeout=5,
            verify=True
        )

    def test_find(self, admin, session):
        session.request.return_value = make_response(payload={'requests': [{'url': '/a', 'method': 'GET'}]})

        result = admin.find_requests_matching(get_requested_for(url_equal_to('/a')).build())

        assert [r.url for r in result.requests] == ['/a']
        assert session.request.call_args[1]['url'].endswith('/__admin/requests/find')

    def test_unmatched(self, admin, session):
        admin.find_unmatched_requests()
        assert session.request.call_args[1]['method'] == 'GET'
        assert session.request.call_args[1]['url'].endswith('/__admin/requests/unmatched')

    def test_near_misses_for_pattern(self, admin, session):
        session.request.return_value = make_response(payload={'nearMisses': [
            {'request': {'url': '/helth', 'method': 'GET'}, 'matchResult': {'distance': 0.06}}
        ]})

        result = admin.find_top_near_misses_for(get_requested_for(url_equal_to('/health')).build())

        assert result.near_misses[0].request.url == '/helth'
        assert session.request.call_args[1]['url'].endswith('/__admin/near-misses/request-pattern')

    def test_near_misses_for_request(self, admin, session):
        admin.find_top_near_misses_for(LoggedRequest(url='/a', method='GET'))

        kwargs = session.request.call_args[1]
        assert kwargs['url'].endswith('/__admin/near-misses/request')
        assert kwargs['json']['url'] == '/a'

    def test_near_misses_for_unmatched(self, admin, session):
        admin.find_near_misses_for_unmatched_requests()
        assert session.request.call_args[1]['url'].endswith('/__admin/requests/unmatched/near-misses')

    def test_update_settings(self, admin, session):
        session.request.return_value = make_response(content=b'')

        admin.update_global_settings(GlobalSettings(fixed_delay_ms=500))

        kwargs = session.request.call_args[1]
        assert kwargs['url'].endswith('/__admin/settings')
        assert kwargs['json'] == {'fixedDelay': 500}

    def test_get_serve_events(self, admin, session):
        session.request.return_value = make_response(payload={
            'requests': [{
                'id': 'e1',
                'request': {'url': '/health', 'method': 'GET'},
                'wasMatched': True,
                'responseDefinition': {'status': 200}
            }],
            'requestJournalDisabled': False
        })

        result = admin.get_serve_events()

        assert [e.request.url for e in result.serve_events] == ['/health']
        assert result.request_journal_enabled is True
        kwargs = session.request.call_args[1]
        assert kwargs['method'] == 'GET'
        assert kwargs['url'] == 'http://mocks:9090/__admin/requests'

    def test_reset_requests(self, admin, session):
        session.request.return_value = make_response(content=b'')

        admin.reset_requests()

        session.request.assert_called_once_with(
            method='DELETE',
            url='http://mocks:9090/__admin/requests',
            json=None,
            timeout=5,
            verify=True
        )

    def test_url_path_prefix(self, session):
        admin = HttpAdmin(ClientConfig(port=8080, url_path_prefix='/wiremock/'), session=session)
        admin.find_unmatched_requests()
        assert session.request.call_args[1]['url'] == 'http://localhost:8080/wiremock/__admin/requests/unmatched'

    def test_custom_predicate_not_sent(self, admin, session):
        with pytest.raises(TypeError):
            admin.count_requests_matching(request_made_for(lambda r: True).build())
        session.request.assert_not_called()


class TestTransportErrors:
    """Test failures become TransportError."""

    def test_connection_error(self, admin, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError) as exc_info:
            admin.find_unmatched_requests()

        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
        assert exc_info.value.url.endswith('/__admin/requests/unmatched')

    def test_error_status(self, admin, session):
        session.request.return_value = make_response(status_code=500, content=b'boom')

        with pytest.raises(TransportError) as exc_info:
            admin.find_unmatched_requests()

        assert exc_info.value.status_code == 500
        assert 'boom' in str(exc_info.value)

    def test_invalid_json(self, admin, session):
        response = make_response(content=b'<html>')
        response.json.side_effect = ValueError("not json")
        session.request.return_value = response

        with pytest.raises(TransportError):
            admin.find_unmatched_requests()


class TestSession:
    """Test default session setup."""

    def test_retry_adapter_mounted(self):
        admin = HttpAdmin(ClientConfig(max_retries=5))

        adapter = admin.session.get_adapter('http://localhost:8080')

        assert adapter.max_retries.total == 5
        assert 503 in adapter.max_retries.status_forcelist
