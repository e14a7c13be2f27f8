"""
StubVerify

Client-side verification for WireMock-compatible HTTP mock servers.

This package provides:
- Request patterns and count expectations
- Verification with near-miss diagnosis on failure
- Near-miss and request journal lookups
- Global delay settings
- A scoped default client with module-level helpers

Example:
    from stubverify import verify, exactly, get_requested_for, url_equal_to

    verify(exactly(1), get_requested_for(url_equal_to('/health')))
"""

from .config import ClientConfig
from .exceptions import StubVerifyError, JournalDisabledError, TransportError, VerificationFailure
from .settings import GlobalSettings, GlobalSettingsHolder, UniformDistribution, LogNormalDistribution
from .client import StubClient
from .context import (
    current_client,
    configure_for,
    reset_default_client,
    using_client,
    verify,
    find_all,
    find_unmatched_requests,
    find_near_misses_for_all_unmatched,
    find_near_misses_for,
    get_all_serve_events,
    reset_all_requests,
    set_global_fixed_delay,
    set_global_random_delay
)
from .admin import Admin, HttpAdmin
from .matchers import *  # noqa: F401,F403
from .matchers import __all__ as _matchers_all
from .verification import *  # noqa: F401,F403
from .verification import __all__ as _verification_all

__all__ = [
    # Client
    'ClientConfig',
    'StubClient',
    'Admin',
    'HttpAdmin',

    # Errors
    'StubVerifyError',
    'JournalDisabledError',
    'TransportError',
    'VerificationFailure',

    # Settings
    'GlobalSettings',
    'GlobalSettingsHolder',
    'UniformDistribution',
    'LogNormalDistribution',

    # Default client
    'current_client',
    'configure_for',
    'reset_default_client',
    'using_client',
    'verify',
    'find_all',
    'find_unmatched_requests',
    'find_near_misses_for_all_unmatched',
    'find_near_misses_for',
    'get_all_serve_events',
    'reset_all_requests',
    'set_global_fixed_delay',
    'set_global_random_delay',
] + _matchers_all + _verification_all

__version__ = '1.0.0'
