"""Pydantic contracts for the YAML document form.

Every contract entry read from or written to YAML is typed through these models.
"""

from .yaml_contract import (
    StubMatcherType,
    TestMatcherType,
    ValueMatcher,
    KeyValueMatcher,
    TestHeaderMatcher,
    TestCookieMatcher,
    BodyStubMatcher,
    BodyTestMatcher,
    MultipartNamedStubMatcher,
    MultipartStubMatcher,
    StubMatchers,
    TestMatchers,
    InputMatchers,
    OutputMatchers,
    Named,
    Multipart,
    Request,
    Response,
    Input,
    OutputMessage,
    YamlContract,
)

__all__ = [
    # Matcher kinds
    "StubMatcherType",
    "TestMatcherType",
    # Matchers
    "ValueMatcher",
    "KeyValueMatcher",
    "TestHeaderMatcher",
    "TestCookieMatcher",
    "BodyStubMatcher",
    "BodyTestMatcher",
    "MultipartNamedStubMatcher",
    "MultipartStubMatcher",
    "StubMatchers",
    "TestMatchers",
    "InputMatchers",
    "OutputMatchers",
    # Sections
    "Named",
    "Multipart",
    "Request",
    "Response",
    "Input",
    "OutputMessage",
    "YamlContract",
]
