"""Document-side contracts: the YAML form of an interaction contract.

Field names are snake_case; the document keys (camelCase) are aliases.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from matchers.patterns import PredefinedRegex
from matchers.resolver import stringify


class StubMatcherType(str, Enum):
    """Body matcher kinds allowed on the stub side (request, input)."""
    BY_DATE = "by_date"
    BY_TIME = "by_time"
    BY_TIMESTAMP = "by_timestamp"
    BY_REGEX = "by_regex"
    BY_EQUALITY = "by_equality"


class TestMatcherType(str, Enum):
    """Body matcher kinds allowed on the test side (response, output)."""
    __test__ = False

    BY_DATE = "by_date"
    BY_TIME = "by_time"
    BY_TIMESTAMP = "by_timestamp"
    BY_REGEX = "by_regex"
    BY_EQUALITY = "by_equality"
    BY_TYPE = "by_type"
    BY_COMMAND = "by_command"
    BY_NULL = "by_null"


TEST_ONLY_TYPES = {TestMatcherType.BY_TYPE.value, TestMatcherType.BY_COMMAND.value, TestMatcherType.BY_NULL.value}


class DocumentModel(BaseModel):
    """Base for document contracts: camelCase aliases, unknown keys rejected."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


# Matchers


class ValueMatcher(DocumentModel):
    """Regex or predefined pattern for a single value."""
    regex: Optional[str] = None
    predefined: Optional[PredefinedRegex] = None


class KeyValueMatcher(ValueMatcher):
    """Stub-side matcher for a header, cookie or multipart param."""
    key: str


class TestHeaderMatcher(KeyValueMatcher):
    """Test-side header matcher; may run a command instead of a regex."""
    __test__ = False

    command: Optional[str] = None


class TestCookieMatcher(KeyValueMatcher):
    """Test-side cookie matcher."""
    __test__ = False


class BodyStubMatcher(DocumentModel):
    """Body matcher on the stub side."""
    path: str = Field(..., description="JSON path of the matched element")
    type: StubMatcherType
    value: Optional[str] = None
    predefined: Optional[PredefinedRegex] = None

    @field_validator("type", mode="before")
    @classmethod
    def reject_test_only_types(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            v = v.value
        if v in TEST_ONLY_TYPES:
            raise ValueError(
                f"The type [{v}] is unsupported on the stub side. "
                f"Hint: If you're using <predefined> remember to pass <type: by_regex>"
            )
        return v


class BodyTestMatcher(DocumentModel):
    """Body matcher on the test side."""
    __test__ = False

    path: str = Field(..., description="JSON path of the matched element")
    type: TestMatcherType
    value: Optional[str] = None
    predefined: Optional[PredefinedRegex] = None
    min_occurrence: Optional[int] = Field(None, alias="minOccurrence", ge=0)
    max_occurrence: Optional[int] = Field(None, alias="maxOccurrence", ge=0)


class MultipartNamedStubMatcher(DocumentModel):
    """Matchers for the fields of a named multipart part."""
    param_name: str = Field(..., alias="paramName")
    file_name: Optional[ValueMatcher] = Field(None, alias="fileName")
    file_content: Optional[ValueMatcher] = Field(None, alias="fileContent")
    content_type: Optional[ValueMatcher] = Field(None, alias="contentType")


class MultipartStubMatcher(DocumentModel):
    params: List[KeyValueMatcher] = Field(default_factory=list)
    named: List[MultipartNamedStubMatcher] = Field(default_factory=list)


class StubMatchers(DocumentModel):
    """Matchers of a request."""
    headers: List[KeyValueMatcher] = Field(default_factory=list)
    cookies: List[KeyValueMatcher] = Field(default_factory=list)
    body: List[BodyStubMatcher] = Field(default_factory=list)
    multipart: MultipartStubMatcher = Field(default_factory=MultipartStubMatcher)


class TestMatchers(DocumentModel):
    """Matchers of a response."""
    __test__ = False

    headers: List[TestHeaderMatcher] = Field(default_factory=list)
    cookies: List[TestCookieMatcher] = Field(default_factory=list)
    body: List[BodyTestMatcher] = Field(default_factory=list)


class InputMatchers(DocumentModel):
    headers: List[KeyValueMatcher] = Field(default_factory=list)
    body: List[BodyStubMatcher] = Field(default_factory=list)


class OutputMatchers(DocumentModel):
    headers: List[TestHeaderMatcher] = Field(default_factory=list)
    body: List[BodyTestMatcher] = Field(default_factory=list)


# Sections


def _as_text(value: Any) -> Any:
    """YAML scalars (numbers, booleans) in multipart fields are read as text."""
    if isinstance(value, (bool, int, float)):
        return stringify(value)
    return value


class Named(DocumentModel):
    """A named multipart part."""
    param_name: str = Field(..., alias="paramName")
    file_name: Optional[str] = Field(None, alias="fileName")
    file_content: Optional[str] = Field(None, alias="fileContent")
    content_type: Optional[str] = Field(None, alias="contentType")

    @field_validator("param_name", "file_name", "file_content", "content_type", mode="before")
    @classmethod
    def scalars_as_text(cls, v: Any) -> Any:
        return _as_text(v)


class Multipart(DocumentModel):
    params: Dict[str, Optional[str]] = Field(default_factory=dict)
    named: List[Named] = Field(default_factory=list)

    @field_validator("params", mode="before")
    @classmethod
    def params_as_text(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {_as_text(key): _as_text(value) for key, value in v.items()}
        return v


class Request(DocumentModel):
    method: Optional[str] = None
    url: Optional[str] = None
    url_path: Optional[str] = Field(None, alias="urlPath")
    query_parameters: Dict[str, Any] = Field(default_factory=dict, alias="queryParameters")
    headers: Dict[str, Any] = Field(default_factory=dict)
    cookies: Dict[str, Any] = Field(default_factory=dict)
    body: Any = None
    body_from_file: Optional[str] = Field(None, alias="bodyFromFile")
    multipart: Optional[Multipart] = None
    matchers: StubMatchers = Field(default_factory=StubMatchers)


class Response(DocumentModel):
    status: Optional[int] = None
    headers: Dict[str, Any] = Field(default_factory=dict)
    cookies: Dict[str, Any] = Field(default_factory=dict)
    body: Any = None
    body_from_file: Optional[str] = Field(None, alias="bodyFromFile")
    is_async: Optional[bool] = Field(None, alias="async")
    matchers: TestMatchers = Field(default_factory=TestMatchers)


class Input(DocumentModel):
    message_from: Optional[str] = Field(None, alias="messageFrom")
    assert_that: Optional[str] = Field(None, alias="assertThat")
    triggered_by: Optional[str] = Field(None, alias="triggeredBy")
    message_headers: Dict[str, Any] = Field(default_factory=dict, alias="messageHeaders")
    message_body: Any = Field(None, alias="messageBody")
    message_body_from_file: Optional[str] = Field(None, alias="messageBodyFromFile")
    matchers: InputMatchers = Field(default_factory=InputMatchers)


class OutputMessage(DocumentModel):
    assert_that: Optional[str] = Field(None, alias="assertThat")
    sent_to: Optional[str] = Field(None, alias="sentTo")
    headers: Dict[str, Any] = Field(default_factory=dict)
    body: Any = None
    body_from_file: Optional[str] = Field(None, alias="bodyFromFile")
    matchers: OutputMatchers = Field(default_factory=OutputMatchers)


class YamlContract(DocumentModel):
    """One contract entry of a YAML document."""
    name: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = None
    ignored: Optional[bool] = None
    request: Optional[Request] = None
    response: Optional[Response] = None
    input: Optional[Input] = None
    output_message: Optional[OutputMessage] = Field(None, alias="outputMessage")

    def to_document(self) -> Dict[str, Any]:
        """Plain mapping with document keys.

        Unset fields are dropped, as are empty collections outside of bodies.
        Bodies are copied as they are, nulls included.
        """
        document = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        for field_name, section in SECTIONS.items():
            if section not in document:
                continue
            model = getattr(self, field_name)
            document[section] = {
                key: getattr(model, BODY_KEYS[key]) if key in BODY_KEYS else _prune_empty(value)
                for key, value in document[section].items()
                if key in BODY_KEYS or _prune_empty(value) not in EMPTY
            }
        return document


SECTIONS = {
    "request": "request",
    "response": "response",
    "input": "input",
    "output_message": "outputMessage",
}
BODY_KEYS = {"body": "body", "messageBody": "message_body"}
EMPTY = ({}, [])


def _prune_empty(node: Any) -> Any:
    """Recursively drop empty mappings and lists."""
    if isinstance(node, dict):
        pruned = {k: _prune_empty(v) for k, v in node.items()}
        return {k: v for k, v in pruned.items() if v not in EMPTY}
    if isinstance(node, list):
        return [_prune_empty(v) for v in node]
    return node
