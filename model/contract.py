"""In-memory contract model built from dual values.

Instances are immutable once built; the reverse conversion only reads them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from errors import ConfigurationError
from model.dual_value import DualValue, Side


@dataclass(frozen=True)
class KeyValue:
    """A named dual value (one header, cookie or query parameter occurrence)."""
    name: str
    value: DualValue


@dataclass(frozen=True)
class KeyValues:
    """Ordered entries; a name repeats once per value."""
    entries: Tuple[KeyValue, ...] = ()

    def __iter__(self) -> Iterator[KeyValue]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def names(self) -> List[str]:
        """Distinct names in declaration order."""
        return list(dict.fromkeys(e.name for e in self.entries))

    def get(self, name: str) -> List[DualValue]:
        return [e.value for e in self.entries if e.name == name]

    def as_side_map(self, side: Side) -> Dict[str, Any]:
        """Name -> side value; repeated names collapse into a list."""
        result: Dict[str, Any] = {}
        for name in self.names():
            values = [v.side(side) for v in self.get(name)]
            result[name] = values[0] if len(values) == 1 else values
        return result

    def as_stub_side_map(self) -> Dict[str, Any]:
        return self.as_side_map(Side.STUB)

    def as_test_side_map(self) -> Dict[str, Any]:
        return self.as_side_map(Side.TEST)


class Headers(KeyValues):
    pass


class Cookies(KeyValues):
    pass


class QueryParameters(KeyValues):
    pass


@dataclass(frozen=True)
class NamedProperty:
    """A named multipart part (a file upload)."""
    file_name: DualValue
    file_content: DualValue
    content_type: DualValue

    def fields(self) -> Dict[str, DualValue]:
        return {
            "fileName": self.file_name,
            "fileContent": self.file_content,
            "contentType": self.content_type,
        }


@dataclass(frozen=True)
class Multipart:
    """Multipart parameters: plain values or named file parts."""
    params: Dict[str, Union[DualValue, NamedProperty]] = field(default_factory=dict)


@dataclass(frozen=True)
class Url:
    value: str
    query_parameters: QueryParameters = field(default_factory=QueryParameters)


@dataclass(frozen=True)
class Request:
    method: str
    url: Optional[Url] = None
    url_path: Optional[Url] = None
    headers: Headers = field(default_factory=Headers)
    cookies: Cookies = field(default_factory=Cookies)
    body: Any = None
    multipart: Optional[Multipart] = None


@dataclass(frozen=True)
class Response:
    status: Optional[int] = None
    headers: Headers = field(default_factory=Headers)
    cookies: Cookies = field(default_factory=Cookies)
    body: Any = None
    is_async: Optional[bool] = None


@dataclass(frozen=True)
class Input:
    """Message (or trigger) that starts a messaging interaction."""
    message_from: Optional[str] = None
    assert_that: Optional[str] = None
    triggered_by: Optional[str] = None
    message_headers: Headers = field(default_factory=Headers)
    message_body: Any = None


@dataclass(frozen=True)
class OutputMessage:
    """Message sent as a result of the input."""
    sent_to: Optional[str] = None
    assert_that: Optional[str] = None
    headers: Headers = field(default_factory=Headers)
    body: Any = None


@dataclass(frozen=True)
class Contract:
    """A single interaction contract.

    Holds either a request/response pair or an input/output message pair.
    A contract with neither is a placeholder.
    """
    name: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = None
    ignored: Optional[bool] = None
    request: Optional[Request] = None
    response: Optional[Response] = None
    input: Optional[Input] = None
    output_message: Optional[OutputMessage] = None

    def __post_init__(self):
        http = self.request is not None or self.response is not None
        messaging = self.input is not None or self.output_message is not None
        if http and messaging:
            raise ConfigurationError(
                "A contract cannot declare both request/response and input/outputMessage",
                contract=self.name,
            )
        if (self.request is None) != (self.response is None):
            missing = "response" if self.response is None else "request"
            raise ConfigurationError(f"Contract is missing its {missing}", contract=self.name)

    @property
    def is_messaging(self) -> bool:
        return self.input is not None or self.output_message is not None

    @property
    def is_placeholder(self) -> bool:
        return self.request is None and not self.is_messaging
