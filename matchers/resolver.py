"""Matcher resolution shared by headers, cookies and multipart values.

A matcher descriptor is any object exposing some of `regex`, `predefined`
and `command` attributes (the document-side matcher contracts). Resolution
turns the descriptor into the value stored on the pattern-bearing side of a
DualValue, and checks that the declared pattern accepts the example value.
"""

import logging
import re
from typing import Any, Iterable, Optional, Pattern, TypeVar

from config import settings
from errors import AmbiguousMatcherError, ConfigurationError, MatcherConsistencyError
from matchers.patterns import PredefinedRegex, predefined_to_pattern
from model.dual_value import ExecutionCommand, RegexPattern

logger = logging.getLogger(__name__)

M = TypeVar("M")


def stringify(value: Any) -> str:
    """Render a literal the way it appears in a JSON/YAML document."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def compile_regex(regex: str, key: Optional[str] = None) -> Pattern:
    """Compile user-supplied regex text, reporting bad syntax as configuration errors."""
    try:
        return re.compile(regex)
    except re.error as e:
        raise ConfigurationError(
            f"Invalid regex [{regex}] for [{key}]: {e}", key=key, pattern=regex
        ) from e


def assert_pattern_matched(pattern: Pattern, value: Any, key: str) -> None:
    """Raise MatcherConsistencyError unless `value` fully matches `pattern`."""
    if pattern.fullmatch(stringify(value)) is None:
        raise MatcherConsistencyError(key, value, pattern.pattern)


def regex_marker(
    regex: Optional[str],
    predefined: Optional[PredefinedRegex],
    key: str,
) -> RegexPattern:
    """Build a RegexPattern from explicit regex text or a predefined kind."""
    if regex:
        return RegexPattern(compile_regex(regex, key))
    kind = PredefinedRegex(predefined)
    return RegexPattern(predefined_to_pattern(kind), predefined=kind)


def resolve_value(value: Any, matcher: Any, key: str) -> Any:
    """Resolve the pattern-side value for a literal and its matcher descriptor.

    Args:
        value: The literal example value from the document
        matcher: Matcher descriptor (regex / predefined / command) or None
        key: Field key, used in error messages

    Returns:
        RegexPattern, ExecutionCommand, or the literal itself when no matcher applies.

    Raises:
        MatcherConsistencyError: If the regex does not match the literal.
        ConfigurationError: If the regex text does not compile.
    """
    if matcher is None:
        return value
    regex = getattr(matcher, "regex", None)
    predefined = getattr(matcher, "predefined", None)
    command = getattr(matcher, "command", None)
    if regex or predefined:
        marker = regex_marker(regex, predefined, key)
        assert_pattern_matched(marker.pattern, value, key)
        return marker
    if command:
        return ExecutionCommand(command)
    return value


def find_matcher(
    matchers: Optional[Iterable[M]],
    key: str,
    attribute: str = "key",
) -> Optional[M]:
    """Find the matcher declared for `key`.

    When several matchers share the key, strict mode raises
    AmbiguousMatcherError; otherwise the first declaration wins.
    """
    found = [m for m in (matchers or []) if getattr(m, attribute, None) == key]
    if not found:
        return None
    if len(found) > 1:
        if settings.strict_matcher_keys:
            raise AmbiguousMatcherError(
                f"{len(found)} matchers declared for [{key}]", key=key
            )
        logger.warning("%d matchers declared for [%s]; using the first one", len(found), key)
    return found[0]
