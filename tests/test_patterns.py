"""Tests for the predefined pattern library."""

import pytest

from matchers import PredefinedRegex, predefined_to_regex, predefined_to_pattern


POSITIVE_EXAMPLES = {
    PredefinedRegex.ONLY_ALPHA_UNICODE: "Zażółć",
    PredefinedRegex.NUMBER: "42",
    PredefinedRegex.ANY_DOUBLE: "3.14",
    PredefinedRegex.ANY_BOOLEAN: "true",
    PredefinedRegex.IP_ADDRESS: "192.168.0.1",
    PredefinedRegex.HOSTNAME: "https://example.com",
    PredefinedRegex.EMAIL: "jane.doe@example.com",
    PredefinedRegex.URL: "https://example.com/users?id=1",
    PredefinedRegex.UUID: "123e4567-e89b-12d3-a456-426614174000",
    PredefinedRegex.ISO_DATE: "2024-02-29",
    PredefinedRegex.ISO_DATE_TIME: "2024-02-29T13:45:10",
    PredefinedRegex.ISO_TIME: "13:45:10",
    PredefinedRegex.ISO_8601_WITH_OFFSET: "2024-02-29T13:45:10.123+01:00",
    PredefinedRegex.NON_EMPTY: " ",
    PredefinedRegex.NON_BLANK: "  x",
}


class TestPredefinedPatterns:
    """Test the predefined regex catalogue."""

    def test_every_kind_has_an_example(self):
        """The example table covers the whole enumeration."""
        assert set(POSITIVE_EXAMPLES) == set(PredefinedRegex)

    def test_every_kind_matches_its_canonical_example(self):
        """Each predefined regex is non-empty and accepts a typical value."""
        for kind, example in POSITIVE_EXAMPLES.items():
            regex = predefined_to_regex(kind)
            assert regex, kind
            assert predefined_to_pattern(kind).fullmatch(example), (kind, example)

    def test_number(self):
        pattern = predefined_to_pattern(PredefinedRegex.NUMBER)
        assert pattern.fullmatch("42")
        assert pattern.fullmatch("-0.5")
        assert not pattern.fullmatch("abc")

    def test_uuid(self):
        pattern = predefined_to_pattern(PredefinedRegex.UUID)
        assert pattern.fullmatch("123e4567-e89b-12d3-a456-426614174000")
        assert not pattern.fullmatch("not-a-uuid")

    def test_rejections(self):
        """A few values that must not pass."""
        assert not predefined_to_pattern(PredefinedRegex.ANY_BOOLEAN).fullmatch("yes")
        assert not predefined_to_pattern(PredefinedRegex.IP_ADDRESS).fullmatch("256.1.1.1")
        assert not predefined_to_pattern(PredefinedRegex.NON_BLANK).fullmatch("   ")
        assert not predefined_to_pattern(PredefinedRegex.NON_EMPTY).fullmatch("")
        assert not predefined_to_pattern(PredefinedRegex.ISO_DATE).fullmatch("2024-13-01")
        assert not predefined_to_pattern(PredefinedRegex.ONLY_ALPHA_UNICODE).fullmatch("abc1")

    def test_lookup_by_name(self):
        """Kinds can be given by their document name."""
        assert predefined_to_regex("uuid") == predefined_to_regex(PredefinedRegex.UUID)

    def test_unknown_kind_is_a_key_error(self):
        with pytest.raises(KeyError):
            predefined_to_regex("not_a_kind")
