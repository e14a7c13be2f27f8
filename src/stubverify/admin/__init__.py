"""
StubVerify Admin Module

Boundary to the mock server's admin API.
"""

from .base import Admin
from .http import HttpAdmin

__all__ = [
    'Admin',
    'HttpAdmin',
]
