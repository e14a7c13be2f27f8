"""
StubVerify Verification Module

Count expectations, journal records and near-miss diffs.
"""

from .count import (
    CountKind,
    CountMatchingStrategy,
    less_than,
    less_than_or_exactly,
    exactly,
    more_than_or_exactly,
    more_than
)
from .model import (
    LoggedRequest,
    NearMiss,
    VerificationResult,
    FindRequestsResult,
    FindNearMissesResult,
    ServeEvent,
    GetServeEventsResult
)
from .diff import Diff, DiffLine

__all__ = [
    'CountKind',
    'CountMatchingStrategy',
    'less_than',
    'less_than_or_exactly',
    'exactly',
    'more_than_or_exactly',
    'more_than',
    'LoggedRequest',
    'NearMiss',
    'VerificationResult',
    'FindRequestsResult',
    'FindNearMissesResult',
    'ServeEvent',
    'GetServeEventsResult',
    'Diff',
    'DiffLine',
]
