"""
StubVerify Count Matching

Quantified expectations over the number of requests that matched a pattern.

Example:
    strategy = exactly(2)
    strategy.match(2)   # True
    strategy.match(3)   # False
"""

from dataclasses import dataclass
from enum import Enum


class CountKind(Enum):
    """Comparison applied between the actual count and the threshold."""

    LESS_THAN = "less than"
    LESS_THAN_OR_EXACTLY = "less than or exactly"
    EXACTLY = "exactly"
    MORE_THAN_OR_EXACTLY = "at least"
    MORE_THAN = "more than"


@dataclass(frozen=True)
class CountMatchingStrategy:
    """Immutable comparator between an expected threshold and an actual count."""

    kind: CountKind
    expected: int

    def __post_init__(self):
        if not isinstance(self.kind, CountKind):
            raise ValueError(f"Count kind must be a CountKind, got {self.kind!r}")
        if isinstance(self.expected, bool) or not isinstance(self.expected, int):
            raise ValueError(f"Expected count must be an integer, got {self.expected!r}")
        if self.expected < 0:
            raise ValueError(f"Expected count must be non-negative, got {self.expected}")

    def match(self, actual: int) -> bool:
        """Return True if the actual count satisfies this expectation."""
        if self.kind is CountKind.LESS_THAN:
            return actual < self.expected
        if self.kind is CountKind.LESS_THAN_OR_EXACTLY:
            return actual <= self.expected
        if self.kind is CountKind.EXACTLY:
            return actual == self.expected
        if self.kind is CountKind.MORE_THAN_OR_EXACTLY:
            return actual >= self.expected
        if self.kind is CountKind.MORE_THAN:
            return actual > self.expected
        raise ValueError(f"Unsupported count kind: {self.kind!r}")

    def __str__(self) -> str:
        return f"{self.kind.value} {self.expected}"


def less_than(expected: int) -> CountMatchingStrategy:
    return CountMatchingStrategy(CountKind.LESS_THAN, expected)


def less_than_or_exactly(expected: int) -> CountMatchingStrategy:
    return CountMatchingStrategy(CountKind.LESS_THAN_OR_EXACTLY, expected)


def exactly(expected: int) -> CountMatchingStrategy:
    return CountMatchingStrategy(CountKind.EXACTLY, expected)


def more_than_or_exactly(expected: int) -> CountMatchingStrategy:
    return CountMatchingStrategy(CountKind.MORE_THAN_OR_EXACTLY, expected)


def more_than(expected: int) -> CountMatchingStrategy:
    return CountMatchingStrategy(CountKind.MORE_THAN, expected)
