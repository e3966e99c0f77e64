"""In-memory contract model: dual values, pattern markers and body paths."""

from .dual_value import (
    Side,
    MatchingType,
    RegexPattern,
    ExecutionCommand,
    MatchingTypeValue,
    DualValue,
    is_pattern_marker,
    side_value,
)

from .contract import (
    KeyValue,
    Headers,
    Cookies,
    QueryParameters,
    NamedProperty,
    Multipart,
    Url,
    Request,
    Response,
    Input,
    OutputMessage,
    Contract,
)

__all__ = [
    # Values
    "Side",
    "MatchingType",
    "RegexPattern",
    "ExecutionCommand",
    "MatchingTypeValue",
    "DualValue",
    "is_pattern_marker",
    "side_value",
    # Contract
    "KeyValue",
    "Headers",
    "Cookies",
    "QueryParameters",
    "NamedProperty",
    "Multipart",
    "Url",
    "Request",
    "Response",
    "Input",
    "OutputMessage",
    "Contract",
]
