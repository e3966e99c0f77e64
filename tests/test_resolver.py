"""Tests for matcher resolution."""

import pytest
from unittest.mock import patch

from config import settings
from contracts import KeyValueMatcher, TestHeaderMatcher
from errors import AmbiguousMatcherError, ConfigurationError, MatcherConsistencyError
from matchers import PredefinedRegex, find_matcher, resolve_value
from model import ExecutionCommand, RegexPattern


class TestResolveValue:
    """Test resolve_value for every descriptor shape."""

    def test_without_matcher_returns_literal(self):
        assert resolve_value("application/json", None, "Content-Type") == "application/json"

    def test_descriptor_without_pattern_returns_literal(self):
        assert resolve_value("abc", KeyValueMatcher(key="X"), "X") == "abc"

    def test_regex_matcher(self):
        matcher = KeyValueMatcher(key="Content-Type", regex="application/json.*")
        resolved = resolve_value("application/json;charset=UTF-8", matcher, "Content-Type")
        assert isinstance(resolved, RegexPattern)
        assert resolved.regex == "application/json.*"
        assert resolved.predefined is None

    def test_regex_mismatch_names_key_value_and_pattern(self):
        matcher = KeyValueMatcher(key="Content-Type", regex="application/json.*")
        with pytest.raises(MatcherConsistencyError) as exc:
            resolve_value("text/plain", matcher, "Content-Type")
        assert exc.value.key == "Content-Type"
        assert exc.value.value == "text/plain"
        assert exc.value.pattern == "application/json.*"
        assert "Content-Type" in str(exc.value)
        assert "text/plain" in str(exc.value)

    def test_regex_must_match_fully(self):
        matcher = KeyValueMatcher(key="id", regex="[0-9]+")
        with pytest.raises(MatcherConsistencyError):
            resolve_value("123abc", matcher, "id")

    def test_predefined_matcher(self):
        matcher = KeyValueMatcher(key="id", predefined=PredefinedRegex.UUID)
        resolved = resolve_value("123e4567-e89b-12d3-a456-426614174000", matcher, "id")
        assert isinstance(resolved, RegexPattern)
        assert resolved.predefined == PredefinedRegex.UUID

    def test_predefined_mismatch(self):
        matcher = KeyValueMatcher(key="id", predefined=PredefinedRegex.NUMBER)
        with pytest.raises(MatcherConsistencyError):
            resolve_value("abc", matcher, "id")

    def test_literals_are_checked_in_document_form(self):
        """Booleans and numbers are checked as they are written in YAML."""
        assert resolve_value(True, KeyValueMatcher(key="flag", predefined=PredefinedRegex.ANY_BOOLEAN), "flag")
        assert resolve_value(42, KeyValueMatcher(key="n", regex="[0-9]+"), "n")

    def test_command_matcher(self):
        matcher = TestHeaderMatcher(key="X-Id", command="assertThatIdIsValid($it)")
        resolved = resolve_value("1", matcher, "X-Id")
        assert resolved == ExecutionCommand("assertThatIdIsValid($it)")

    def test_invalid_regex_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            resolve_value("x", KeyValueMatcher(key="X", regex="[unclosed"), "X")


class TestFindMatcher:
    """Test matcher lookup by key."""

    def test_finds_by_key(self):
        matchers = [KeyValueMatcher(key="a", regex="a"), KeyValueMatcher(key="b", regex="b")]
        assert find_matcher(matchers, "b").regex == "b"
        assert find_matcher(matchers, "c") is None
        assert find_matcher(None, "a") is None

    def test_duplicate_keys_fail_in_strict_mode(self):
        matchers = [KeyValueMatcher(key="a", regex="a"), KeyValueMatcher(key="a", regex="b")]
        with patch.object(settings, "strict_matcher_keys", True):
            with pytest.raises(AmbiguousMatcherError) as exc:
                find_matcher(matchers, "a")
        assert exc.value.key == "a"

    def test_duplicate_keys_use_first_in_lenient_mode(self):
        matchers = [KeyValueMatcher(key="a", regex="first"), KeyValueMatcher(key="a", regex="second")]
        with patch.object(settings, "strict_matcher_keys", False):
            assert find_matcher(matchers, "a").regex == "first"
