"""Model -> document conversion.

Builds fresh YamlContract documents from Contracts. The literal side of
every DualValue feeds the plain document fields; pattern markers found on
the other side are re-extracted into flat matcher records.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from contracts import yaml_contract as doc
from errors import ConfigurationError
from model import json_paths
from model.contract import Contract, Input, KeyValues, Multipart, NamedProperty, OutputMessage, Request, Response, Url
from model.dual_value import (
    DualValue,
    ExecutionCommand,
    MatchingType,
    MatchingTypeValue,
    RegexPattern,
    Side,
    side_value,
)

logger = logging.getLogger(__name__)

STUB_MATCHER_TYPES = {
    MatchingType.EQUALITY: doc.StubMatcherType.BY_EQUALITY,
    MatchingType.DATE: doc.StubMatcherType.BY_DATE,
    MatchingType.TIME: doc.StubMatcherType.BY_TIME,
    MatchingType.TIMESTAMP: doc.StubMatcherType.BY_TIMESTAMP,
    MatchingType.REGEX: doc.StubMatcherType.BY_REGEX,
}

TEST_MATCHER_TYPES = {
    MatchingType.EQUALITY: doc.TestMatcherType.BY_EQUALITY,
    MatchingType.TYPE: doc.TestMatcherType.BY_TYPE,
    MatchingType.COMMAND: doc.TestMatcherType.BY_COMMAND,
    MatchingType.DATE: doc.TestMatcherType.BY_DATE,
    MatchingType.TIME: doc.TestMatcherType.BY_TIME,
    MatchingType.TIMESTAMP: doc.TestMatcherType.BY_TIMESTAMP,
    MatchingType.REGEX: doc.TestMatcherType.BY_REGEX,
    MatchingType.NULL: doc.TestMatcherType.BY_NULL,
}


def to_stub_matcher_type(matching_type: MatchingType) -> doc.StubMatcherType:
    """Map a matching type onto the stub-side vocabulary.

    Raises:
        ConfigurationError: For kinds that only exist on the test side.
    """
    if matching_type not in STUB_MATCHER_TYPES:
        raise ConfigurationError(f"No stub side matcher for the [{matching_type.value}] type")
    return STUB_MATCHER_TYPES[matching_type]


def to_test_matcher_type(matching_type: MatchingType) -> doc.TestMatcherType:
    return TEST_MATCHER_TYPES[matching_type]


def _plain(value: Any) -> Any:
    """Replace any marker left in a literal tree by its text."""
    if isinstance(value, DualValue):
        raise ConfigurationError("Nested dual values cannot be written to a document")
    if isinstance(value, RegexPattern):
        return value.regex
    if isinstance(value, ExecutionCommand):
        return value.command
    if isinstance(value, MatchingTypeValue):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def _literal_side(pattern_side: Side) -> Side:
    return Side.TEST if pattern_side == Side.STUB else Side.STUB


def _regex_fields(marker: RegexPattern) -> Dict[str, Any]:
    if marker.predefined is not None:
        return {"predefined": marker.predefined}
    return {"regex": marker.regex}


def _key_value_matchers(
    values: KeyValues,
    pattern_side: Side,
    factory: Callable[..., Any],
    allow_command: bool = False,
) -> List[Any]:
    """One matcher per key whose pattern side holds a marker."""
    matchers = []
    for name in values.names():
        for dual in values.get(name):
            marker = dual.side(pattern_side)
            if isinstance(marker, RegexPattern):
                matchers.append(factory(key=name, **_regex_fields(marker)))
                break
            if isinstance(marker, ExecutionCommand):
                if not allow_command:
                    raise ConfigurationError(f"[{name}] cannot be matched by a command on this side", key=name)
                matchers.append(factory(key=name, command=marker.command))
                break
    return matchers


def _literal_map(values: KeyValues, pattern_side: Side) -> Dict[str, Any]:
    return _plain(values.as_side_map(_literal_side(pattern_side)))


def _body_matcher(marker: MatchingTypeValue, path: str, pattern_side: Side) -> Any:
    fields: Dict[str, Any] = {"path": path}
    if marker.type == MatchingType.REGEX:
        if marker.predefined is not None:
            fields["predefined"] = marker.predefined
        else:
            fields["value"] = marker.value
    elif marker.type == MatchingType.COMMAND:
        fields["value"] = marker.value
    if pattern_side == Side.STUB:
        return doc.BodyStubMatcher(type=to_stub_matcher_type(marker.type), **fields)
    if marker.type == MatchingType.TYPE:
        fields["min_occurrence"] = marker.min_occurrence
        fields["max_occurrence"] = marker.max_occurrence
    return doc.BodyTestMatcher(type=to_test_matcher_type(marker.type), **fields)


def body_matchers(body: Any, pattern_side: Side) -> List[Any]:
    """Re-extract body matchers from the pattern side of a body tree.

    Markers remember the path they were declared with, so a wildcard
    declaration yields a single matcher. Bare regex leaves are reported at
    their concrete path.
    """
    matchers = []
    declared = set()
    for path, leaf in json_paths.flatten(body):
        if not isinstance(leaf, DualValue):
            continue
        marker = leaf.side(pattern_side)
        if isinstance(marker, MatchingTypeValue):
            json_path = marker.json_path or path
            if json_path in declared:
                continue
            declared.add(json_path)
            matchers.append(_body_matcher(marker, json_path, pattern_side))
        elif isinstance(marker, RegexPattern):
            regex_marker = MatchingTypeValue(MatchingType.REGEX, marker.regex, predefined=marker.predefined)
            matchers.append(_body_matcher(regex_marker, path, pattern_side))
        elif isinstance(marker, ExecutionCommand):
            command_marker = MatchingTypeValue(MatchingType.COMMAND, marker.command)
            matchers.append(_body_matcher(command_marker, path, pattern_side))
    return matchers


def _body(body: Any, pattern_side: Side) -> Tuple[Any, List[Any]]:
    return _plain(side_value(body, _literal_side(pattern_side))), body_matchers(body, pattern_side)


def _value_matcher(value: DualValue) -> Optional[doc.ValueMatcher]:
    marker = value.stub_value
    return doc.ValueMatcher(**_regex_fields(marker)) if isinstance(marker, RegexPattern) else None


def _multipart(multipart: Multipart) -> Tuple[doc.Multipart, doc.MultipartStubMatcher]:
    document = doc.Multipart()
    matchers = doc.MultipartStubMatcher()
    for key, value in multipart.params.items():
        if isinstance(value, NamedProperty):
            document.named.append(doc.Named(
                param_name=key,
                file_name=_plain(value.file_name.test_value),
                file_content=_plain(value.file_content.test_value),
                content_type=_plain(value.content_type.test_value),
            ))
            fields = {
                "file_name": _value_matcher(value.file_name),
                "file_content": _value_matcher(value.file_content),
                "content_type": _value_matcher(value.content_type),
            }
            if any(fields.values()):
                matchers.named.append(doc.MultipartNamedStubMatcher(param_name=key, **fields))
        else:
            literal = _plain(value.test_value)
            document.params[key] = None if literal is None else str(literal)
            if isinstance(value.stub_value, RegexPattern):
                matchers.params.append(doc.KeyValueMatcher(key=key, **_regex_fields(value.stub_value)))
    return document, matchers


def _query_parameters(url: Optional[Url]) -> Dict[str, Any]:
    return _plain(url.query_parameters.as_test_side_map()) if url else {}


def _request(request: Request) -> doc.Request:
    body, body_stub_matchers = _body(request.body, Side.STUB)
    multipart, multipart_matchers = None, doc.MultipartStubMatcher()
    if request.multipart is not None:
        multipart, multipart_matchers = _multipart(request.multipart)
    matchers = doc.StubMatchers(
        headers=_key_value_matchers(request.headers, Side.STUB, doc.KeyValueMatcher),
        cookies=_key_value_matchers(request.cookies, Side.STUB, doc.KeyValueMatcher),
        body=body_stub_matchers,
        multipart=multipart_matchers,
    )
    return doc.Request(
        method=request.method,
        url=request.url.value if request.url else None,
        url_path=request.url_path.value if request.url_path else None,
        query_parameters=_query_parameters(request.url or request.url_path),
        headers=_literal_map(request.headers, Side.STUB),
        cookies=_literal_map(request.cookies, Side.STUB),
        body=body,
        multipart=multipart,
        matchers=matchers,
    )


def _response(response: Response) -> doc.Response:
    body, body_test_matchers = _body(response.body, Side.TEST)
    return doc.Response(
        status=response.status,
        headers=_literal_map(response.headers, Side.TEST),
        cookies=_literal_map(response.cookies, Side.TEST),
        body=body,
        is_async=response.is_async,
        matchers=doc.TestMatchers(
            headers=_key_value_matchers(response.headers, Side.TEST, doc.TestHeaderMatcher, allow_command=True),
            cookies=_key_value_matchers(response.cookies, Side.TEST, doc.TestCookieMatcher),
            body=body_test_matchers,
        ),
    )


def _input(message: Input) -> doc.Input:
    body, body_stub_matchers = _body(message.message_body, Side.STUB)
    return doc.Input(
        message_from=message.message_from,
        assert_that=message.assert_that,
        triggered_by=message.triggered_by,
        message_headers=_literal_map(message.message_headers, Side.STUB),
        message_body=body,
        matchers=doc.InputMatchers(
            headers=_key_value_matchers(message.message_headers, Side.STUB, doc.KeyValueMatcher),
            body=body_stub_matchers,
        ),
    )


def _output(message: OutputMessage) -> doc.OutputMessage:
    body, body_test_matchers = _body(message.body, Side.TEST)
    return doc.OutputMessage(
        sent_to=message.sent_to,
        assert_that=message.assert_that,
        headers=_literal_map(message.headers, Side.TEST),
        body=body,
        matchers=doc.OutputMatchers(
            headers=_key_value_matchers(message.headers, Side.TEST, doc.TestHeaderMatcher, allow_command=True),
            body=body_test_matchers,
        ),
    )


def to_yaml_contract(contract: Optional[Contract]) -> doc.YamlContract:
    """Convert a Contract back into its document form.

    A missing contract yields an empty document entry.
    """
    if contract is None:
        return doc.YamlContract()
    logger.debug("Converting contract [%s] to its document form", contract.name)
    return doc.YamlContract(
        name=contract.name,
        label=contract.label,
        description=contract.description,
        priority=contract.priority,
        ignored=contract.ignored,
        request=_request(contract.request) if contract.request is not None else None,
        response=_response(contract.response) if contract.response is not None else None,
        input=_input(contract.input) if contract.input is not None else None,
        output_message=_output(contract.output_message) if contract.output_message is not None else None,
    )
