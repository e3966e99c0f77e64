"""Matcher resolution: predefined patterns and regex checks."""

from .patterns import PredefinedRegex, predefined_to_regex, predefined_to_pattern
from .resolver import resolve_value, find_matcher, regex_marker, assert_pattern_matched

__all__ = [
    "PredefinedRegex",
    "predefined_to_regex",
    "predefined_to_pattern",
    "resolve_value",
    "find_matcher",
    "regex_marker",
    "assert_pattern_matched",
]
