"""
StubVerify Default Client Context

Scoped "current client" used by the module-level helpers such as
stubverify.verify(). Each thread (and each asyncio task) has its own slot,
lazily filled with a client for localhost:8080 on first access.

Example:
    configure_for(port=9090)
    verify(get_requested_for(url_equal_to('/health')))

    with using_client(StubClient(host='staging-mocks', port=8080)):
        verify(2, post_requested_for(url_equal_to('/orders')))
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, List, Optional

from .client import StubClient
from .verification.model import LoggedRequest, NearMiss, ServeEvent


_current_client: ContextVar[Optional[StubClient]] = ContextVar('stubverify_current_client', default=None)


def current_client() -> StubClient:
    """Return the client for this context, creating the default one if needed."""
    client = _current_client.get()
    if client is None:
        client = StubClient()
        _current_client.set(client)
    return client


def configure_for(
    port: Optional[int] = None,
    host: Optional[str] = None,
    scheme: Optional[str] = None,
    url_path_prefix: Optional[str] = None,
    client: Optional[StubClient] = None
) -> StubClient:
    """
    Replace the current context's client.

    Either pass connection details or a ready-made client. The previous
    client is discarded; last call wins.

    Returns:
        The newly installed client
    """
    if client is None:
        client = StubClient(port=port, host=host, scheme=scheme, url_path_prefix=url_path_prefix)
    elif any(value is not None for value in (port, host, scheme, url_path_prefix)):
        raise ValueError("Pass either a client or connection details, not both")

    _current_client.set(client)
    return client


def reset_default_client():
    """Drop the current context's client so the next access recreates the default."""
    _current_client.set(None)


@contextmanager
def using_client(client: StubClient) -> Iterator[StubClient]:
    """Install client as the current one for the duration of a with block."""
    token = _current_client.set(client)
    try:
        yield client
    finally:
        _current_client.reset(token)


def verify(expected=None, pattern=None):
    """Module-level StubClient.verify_that() against the current client."""
    current_client().verify_that(expected, pattern)


def find_all(pattern) -> List[LoggedRequest]:
    return current_client().find(pattern)


def find_unmatched_requests() -> List[LoggedRequest]:
    return current_client().find_all_unmatched_requests()


def find_near_misses_for_all_unmatched() -> List[NearMiss]:
    return current_client().find_near_misses_for_all_unmatched_requests()


def find_near_misses_for(target) -> List[NearMiss]:
    """Near misses for a LoggedRequest (against stubs) or a pattern (against the log)."""
    if isinstance(target, LoggedRequest):
        return current_client().find_top_near_misses_for(target)
    return current_client().find_all_near_misses_for(target)


def get_all_serve_events() -> List[ServeEvent]:
    return current_client().get_serve_events()


def reset_all_requests():
    current_client().reset_requests()


def set_global_fixed_delay(milliseconds: int):
    current_client().set_global_fixed_delay(milliseconds)


def set_global_random_delay(distribution):
    current_client().set_global_random_delay(distribution)
