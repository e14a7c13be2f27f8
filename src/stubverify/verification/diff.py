"""
StubVerify Request Diff

Side-by-side explanation of why a logged request did not match a pattern,
used to turn "0 requests matched" into something a test author can act on.

Example output:

    Expected               | Actual
    -----------------------+-----------------------
    GET                    | GET
    /health                | /helth                  <<<<< URL does not match
"""

from dataclasses import dataclass
from typing import List

from ..matchers.pattern import CustomPredicatePattern, DeclarativePattern, RequestPattern
from .model import LoggedRequest


@dataclass(frozen=True)
class DiffLine:
    """One compared field of the pattern against the request."""

    label: str
    expected: str
    actual: str
    matched: bool


class Diff:
    """
    Field-by-field comparison of a RequestPattern and a LoggedRequest.

    Verification only builds diffs for declarative patterns, since the server
    cannot rank near misses against a local predicate. A CustomPredicatePattern
    is still accepted when a Diff is constructed directly, and yields a single
    row with the predicate's verdict.
    """

    def __init__(self, pattern: RequestPattern, request: LoggedRequest):
        self.pattern = pattern
        self.request = request
        self.lines = self._compare()

    @property
    def mismatches(self) -> List[DiffLine]:
        return [line for line in self.lines if not line.matched]

    def _compare(self) -> List[DiffLine]:
        if isinstance(self.pattern, CustomPredicatePattern):
            return [
                DiffLine(
                    label='Custom predicate',
                    expected=self.pattern.describe(),
                    actual=self.request.summary(),
                    matched=self.pattern.is_matched_by(self.request)
                )
            ]
        if isinstance(self.pattern, DeclarativePattern):
            return self._compare_declarative(self.pattern)
        raise TypeError(f"Unsupported request pattern type: {type(self.pattern).__name__}")

    def _compare_declarative(self, pattern: DeclarativePattern) -> List[DiffLine]:
        request = self.request
        lines = [
            DiffLine(
                label='HTTP method',
                expected=pattern.method,
                actual=request.method,
                matched=pattern.method == 'ANY' or pattern.method == request.method
            ),
            DiffLine(
                label='URL',
                expected=pattern.url_pattern.describe(),
                actual=request.url,
                matched=pattern.url_pattern.matches(request.url)
            )
        ]

        for name, value_pattern in pattern.headers:
            actual = request.header(name)
            lines.append(DiffLine(
                label=f"Header {name}",
                expected=f"{name}: {value_pattern.describe()}",
                actual=f"{name}: {actual}" if actual is not None else '',
                matched=value_pattern.matches(actual)
            ))

        for name, value_pattern in pattern.query_parameters:
            actual = request.query_parameter(name)
            lines.append(DiffLine(
                label=f"Query parameter {name}",
                expected=f"Query: {name} = {value_pattern.describe()}",
                actual=f"Query: {name} = {actual}" if actual is not None else '',
                matched=value_pattern.matches(actual)
            ))

        for value_pattern in pattern.body_patterns:
            lines.append(DiffLine(
                label='Body',
                expected=value_pattern.describe(),
                actual=request.body,
                matched=value_pattern.matches(request.body)
            ))

        # Named matchers run inside the server, we can only list them
        if pattern.custom_matcher:
            lines.append(DiffLine(
                label=f"Custom matcher {pattern.custom_matcher.name}",
                expected=f"[custom matcher] {pattern.custom_matcher.name}",
                actual='(evaluated by server)',
                matched=True
            ))

        return lines

    def render(self) -> str:
        """Render the comparison as a two-column text table."""
        rows = []
        for line in self.lines:
            expected_parts = line.expected.splitlines() or ['']
            actual_parts = line.actual.splitlines() or ['']
            height = max(len(expected_parts), len(actual_parts))
            expected_parts += [''] * (height - len(expected_parts))
            actual_parts += [''] * (height - len(actual_parts))
            for index, (expected, actual) in enumerate(zip(expected_parts, actual_parts)):
                marker = f"<<<<< {line.label} does not match" if index == 0 and not line.matched else ''
                rows.append((expected, actual, marker))

        left_width = max([len('Expected')] + [len(expected) for expected, _, _ in rows])
        right_width = max([len('Actual')] + [len(actual) for _, actual, _ in rows])

        output = [
            f"{'Expected'.ljust(left_width)} | Actual",
            f"{'-' * left_width}-+-{'-' * right_width}"
        ]
        for expected, actual, marker in rows:
            if marker:
                output.append(f"{expected.ljust(left_width)} | {actual.ljust(right_width)}   {marker}")
            else:
                output.append(f"{expected.ljust(left_width)} | {actual}".rstrip())

        return "\n".join(output)

    def __str__(self) -> str:
        return self.render()
