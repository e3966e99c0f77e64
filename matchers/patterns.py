"""Predefined regular expressions that contracts can reference by name."""

import re
from enum import Enum
from functools import lru_cache
from typing import Dict, Pattern


class PredefinedRegex(str, Enum):
    """Named patterns available to `predefined:` matchers."""
    ONLY_ALPHA_UNICODE = "only_alpha_unicode"
    NUMBER = "number"
    ANY_DOUBLE = "any_double"
    ANY_BOOLEAN = "any_boolean"
    IP_ADDRESS = "ip_address"
    HOSTNAME = "hostname"
    EMAIL = "email"
    URL = "url"
    UUID = "uuid"
    ISO_DATE = "iso_date"
    ISO_DATE_TIME = "iso_date_time"
    ISO_TIME = "iso_time"
    ISO_8601_WITH_OFFSET = "iso_8601_with_offset"
    NON_EMPTY = "non_empty"
    NON_BLANK = "non_blank"


_OCTET = r"([01]?\d\d?|2[0-4]\d|25[0-5])"
_DATE = r"(\d\d\d\d)-(0[1-9]|1[012])-(0[1-9]|[12][0-9]|3[01])"
_TIME = r"(2[0-3]|[01][0-9]):([0-5][0-9]):([0-5][0-9])"

ISO_DATE = _DATE
ISO_TIME = _TIME
ISO_DATE_TIME = _DATE + "T" + _TIME

# Patterns are always applied with full-match semantics.
PREDEFINED_PATTERNS: Dict[PredefinedRegex, str] = {
    PredefinedRegex.ONLY_ALPHA_UNICODE: r"[^\W\d_]*",
    PredefinedRegex.NUMBER: r"-?(\d*\.\d+|\d+)",
    PredefinedRegex.ANY_DOUBLE: r"-?(\d*\.\d+)",
    PredefinedRegex.ANY_BOOLEAN: r"(true|false)",
    PredefinedRegex.IP_ADDRESS: r"\.".join([_OCTET] * 4),
    PredefinedRegex.HOSTNAME: r"((http[s]?|ftp):/)/?([^:/\s]+)(:[0-9]{1,5})?",
    PredefinedRegex.EMAIL: r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}",
    PredefinedRegex.URL: r"(https?|ftp|file)://[-a-zA-Z0-9+&@#/%?=~_|!:,.;]*[-a-zA-Z0-9+&@#/%=~_|]",
    PredefinedRegex.UUID: r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}",
    PredefinedRegex.ISO_DATE: ISO_DATE,
    PredefinedRegex.ISO_DATE_TIME: ISO_DATE_TIME,
    PredefinedRegex.ISO_TIME: ISO_TIME,
    PredefinedRegex.ISO_8601_WITH_OFFSET: ISO_DATE_TIME + r"(\.\d{3})?(Z|[+-][01]\d:[0-5]\d)",
    PredefinedRegex.NON_EMPTY: r"[\S\s]+",
    PredefinedRegex.NON_BLANK: r"\s*\S[\S\s]*",
}


def predefined_to_regex(kind: PredefinedRegex) -> str:
    """Return the regex text for a predefined kind.

    Raises:
        KeyError: If `kind` does not name a PredefinedRegex member.
    """
    try:
        return PREDEFINED_PATTERNS[PredefinedRegex(kind)]
    except ValueError:
        raise KeyError(f"Unknown predefined regex: {kind}") from None


@lru_cache(maxsize=None)
def predefined_to_pattern(kind: PredefinedRegex) -> Pattern:
    """Compiled version of `predefined_to_regex`."""
    return re.compile(predefined_to_regex(kind))
