"""
Tests for StubVerify Count Matching

Tests the count expectation comparator including:
- Comparison laws for every kind over a grid of counts
- Factory functions
- Construction validation
- Human readable descriptions
"""

import operator

import pytest

from stubverify.verification.count import (
    CountKind,
    CountMatchingStrategy,
    less_than,
    less_than_or_exactly,
    exactly,
    more_than_or_exactly,
    more_than
)


COMPARISONS = [
    (less_than, operator.lt),
    (less_than_or_exactly, operator.le),
    (exactly, operator.eq),
    (more_than_or_exactly, operator.ge),
    (more_than, operator.gt),
]


class TestComparisonLaws:
    """Test each strategy against the matching integer comparison."""

    @pytest.mark.parametrize("factory,compare", COMPARISONS)
    def test_matches_integer_comparison(self, factory, compare):
        """Test match(actual) iff compare(actual, threshold) for small counts."""
        for threshold in range(6):
            strategy = factory(threshold)
            for actual in range(8):
                assert strategy.match(actual) is compare(actual, threshold), (
                    f"{strategy} with actual={actual}"
                )

    def test_exactly_zero(self):
        """Test exactly(0) only accepts no requests."""
        assert exactly(0).match(0) is True
        assert exactly(0).match(1) is False

    def test_less_than_zero_never_matches(self):
        """Test less_than(0) cannot be satisfied by a non-negative count."""
        assert not any(less_than(0).match(actual) for actual in range(5))

    def test_large_threshold(self):
        """Test there is no upper bound on the threshold."""
        assert more_than_or_exactly(10**9).match(10**9) is True
        assert more_than(10**9).match(10**9) is False


class TestConstruction:
    """Test creating strategies."""

    def test_factory_kinds(self):
        """Test factories pick the right kind."""
        assert less_than(1).kind is CountKind.LESS_THAN
        assert less_than_or_exactly(1).kind is CountKind.LESS_THAN_OR_EXACTLY
        assert exactly(1).kind is CountKind.EXACTLY
        assert more_than_or_exactly(1).kind is CountKind.MORE_THAN_OR_EXACTLY
        assert more_than(1).kind is CountKind.MORE_THAN

    def test_negative_threshold_rejected(self):
        """Test negative thresholds raise ValueError."""
        with pytest.raises(ValueError):
            exactly(-1)

    def test_non_integer_threshold_rejected(self):
        """Test floats and bools are not valid thresholds."""
        with pytest.raises(ValueError):
            CountMatchingStrategy(CountKind.EXACTLY, 1.5)
        with pytest.raises(ValueError):
            CountMatchingStrategy(CountKind.EXACTLY, True)

    def test_unknown_kind_rejected(self):
        """Test the kind must be a CountKind member."""
        with pytest.raises(ValueError):
            CountMatchingStrategy('more than', 1)
        with pytest.raises(ValueError):
            CountMatchingStrategy(None, 1)

    def test_immutable(self):
        """Test strategies cannot be changed after construction."""
        strategy = exactly(2)
        with pytest.raises(AttributeError):
            strategy.expected = 3

    def test_equality(self):
        """Test strategies compare by value."""
        assert exactly(2) == exactly(2)
        assert exactly(2) != more_than(2)


class TestDescription:
    """Test string rendering used in failure messages."""

    def test_str(self):
        """Test human readable phrases."""
        assert str(exactly(2)) == "exactly 2"
        assert str(more_than_or_exactly(1)) == "at least 1"
        assert str(less_than(3)) == "less than 3"
        assert str(less_than_or_exactly(3)) == "less than or exactly 3"
        assert str(more_than(0)) == "more than 0"
