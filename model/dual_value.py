"""Dual values and the pattern markers they can hold.

A DualValue keeps the value used when a contract is played back as a stub
and the value used when it is verified by a test. When a field carries a
matcher, one of the two sides holds a pattern marker instead of the literal:

- request / input fields keep the marker on the stub side;
- response / output fields keep the marker on the test side.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Pattern, TypeVar

T = TypeVar("T")


class Side(str, Enum):
    """Which half of a DualValue to read."""
    STUB = "stub"
    TEST = "test"


class MatchingType(str, Enum):
    """Kinds of body matchers."""
    EQUALITY = "equality"
    TYPE = "type"
    COMMAND = "command"
    REGEX = "regex"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    NULL = "null"


@dataclass(frozen=True)
class RegexPattern:
    """A compiled regex standing in for a literal."""
    pattern: Pattern
    predefined: Optional[Any] = None  # PredefinedRegex the pattern came from

    @property
    def regex(self) -> str:
        return self.pattern.pattern


@dataclass(frozen=True)
class ExecutionCommand:
    """An executable assertion, e.g. `assertThatRejectionReasonIsNull($it)`."""
    command: str


@dataclass(frozen=True)
class MatchingTypeValue:
    """A body matcher embedded at a node of a body tree.

    `json_path` is the path the matcher was declared with, so that a single
    wildcard declaration maps back to one document matcher.
    """
    type: MatchingType
    value: Optional[str] = None
    predefined: Optional[Any] = None
    min_occurrence: Optional[int] = None
    max_occurrence: Optional[int] = None
    json_path: Optional[str] = None


PATTERN_MARKERS = (RegexPattern, ExecutionCommand, MatchingTypeValue)


def is_pattern_marker(value: Any) -> bool:
    """True for any non-literal value slot."""
    return isinstance(value, PATTERN_MARKERS)


@dataclass(frozen=True)
class DualValue(Generic[T]):
    """A (stub side, test side) pair."""
    stub_value: T
    test_value: T

    @classmethod
    def literal(cls, value: T) -> "DualValue[T]":
        """Same value on both sides."""
        return cls(value, value)

    def side(self, side: Side) -> T:
        return self.stub_value if side == Side.STUB else self.test_value

    @property
    def is_literal(self) -> bool:
        return not (is_pattern_marker(self.stub_value) or is_pattern_marker(self.test_value))


def side_value(value: Any, side: Side) -> Any:
    """Project a value (possibly a tree containing DualValues) onto one side."""
    if isinstance(value, DualValue):
        return side_value(value.side(side), side)
    if isinstance(value, dict):
        return {k: side_value(v, side) for k, v in value.items()}
    if isinstance(value, list):
        return [side_value(v, side) for v in value]
    return value
