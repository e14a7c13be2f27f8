"""
StubVerify String Value Patterns

Value matchers for headers, query parameters and bodies, serialized in the
WireMock admin JSON format. Local evaluation is only used to explain
mismatches; the authoritative matching happens on the mock server.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StringValuePattern:
    """A single string matcher such as {"equalTo": "application/json"}."""

    operator: str
    expected: Any
    case_insensitive: bool = False

    @property
    def is_absent(self) -> bool:
        return self.operator == 'absent'

    def matches(self, value: Optional[str]) -> bool:
        """Evaluate the pattern against a single value (None means the value is missing)."""
        if self.operator == 'absent':
            return value is None
        if value is None:
            return False

        if self.operator == 'equalTo':
            if self.case_insensitive:
                return value.lower() == self.expected.lower()
            return value == self.expected
        if self.operator == 'contains':
            return self.expected in value
        if self.operator == 'matches':
            return re.fullmatch(self.expected, value, re.DOTALL) is not None
        if self.operator == 'doesNotMatch':
            return re.fullmatch(self.expected, value, re.DOTALL) is None
        if self.operator == 'equalToJson':
            try:
                return json.loads(value) == json.loads(self.expected)
            except json.JSONDecodeError:
                return False

        raise ValueError(f"Unsupported value pattern operator: {self.operator}")

    def describe(self) -> str:
        if self.operator == 'absent':
            return "[absent]"
        if self.case_insensitive:
            return f"[equalToIgnoreCase] {self.expected}"
        if self.operator == 'equalTo':
            return str(self.expected)
        return f"[{self.operator}] {self.expected}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {self.operator: self.expected}
        if self.case_insensitive:
            data['caseInsensitive'] = True
        return data


def equal_to(value: str) -> StringValuePattern:
    return StringValuePattern('equalTo', value)


def equal_to_ignore_case(value: str) -> StringValuePattern:
    return StringValuePattern('equalTo', value, case_insensitive=True)


def containing(value: str) -> StringValuePattern:
    return StringValuePattern('contains', value)


def matching(regex: str) -> StringValuePattern:
    return StringValuePattern('matches', regex)


def not_matching(regex: str) -> StringValuePattern:
    return StringValuePattern('doesNotMatch', regex)


def absent() -> StringValuePattern:
    return StringValuePattern('absent', True)


def equal_to_json(value: Any) -> StringValuePattern:
    """Match bodies whose parsed JSON equals value (a JSON string or a JSON-able object)."""
    if not isinstance(value, str):
        value = json.dumps(value)
    return StringValuePattern('equalToJson', value)
