"""Document -> model conversion.

Turns a validated YamlContract into a Contract, applying the declared
matchers: header/cookie/multipart matchers become pattern markers on one
side of a DualValue, body matchers are injected into the body tree at the
nodes their JSON path selects.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Type, Union

from contracts import yaml_contract as doc
from errors import AmbiguousMatcherError, ConfigurationError, MatcherConsistencyError
from config import settings
from converter.resources import ResourceResolver
from matchers.patterns import ISO_DATE, ISO_DATE_TIME, ISO_TIME, PredefinedRegex, predefined_to_regex
from matchers.resolver import assert_pattern_matched, compile_regex, find_matcher, resolve_value
from model import json_paths
from model.contract import (
    Contract,
    Cookies,
    Headers,
    Input,
    KeyValue,
    KeyValues,
    Multipart,
    NamedProperty,
    OutputMessage,
    QueryParameters,
    Request,
    Response,
    Url,
)
from model.dual_value import DualValue, MatchingType, MatchingTypeValue, Side

logger = logging.getLogger(__name__)

BodyMatcher = Union[doc.BodyStubMatcher, doc.BodyTestMatcher]

# Format matchers carry the regex they check against.
FORMAT_REGEXES = {
    MatchingType.DATE: ISO_DATE,
    MatchingType.TIME: ISO_TIME,
    MatchingType.TIMESTAMP: ISO_DATE_TIME,
}

MATCHER_KINDS = {
    "by_date": MatchingType.DATE,
    "by_time": MatchingType.TIME,
    "by_timestamp": MatchingType.TIMESTAMP,
    "by_regex": MatchingType.REGEX,
    "by_equality": MatchingType.EQUALITY,
    "by_type": MatchingType.TYPE,
    "by_command": MatchingType.COMMAND,
    "by_null": MatchingType.NULL,
}


def _dual(literal: Any, resolved: Any, pattern_side: Side) -> DualValue:
    """Put `resolved` on the pattern side and the literal on the other one."""
    if pattern_side == Side.STUB:
        return DualValue(resolved, literal)
    return DualValue(literal, resolved)


def _key_values(
    values: Dict[str, Any],
    matchers: Sequence[Any],
    pattern_side: Side,
    cls: Type[KeyValues],
) -> KeyValues:
    entries = []
    for key, value in (values or {}).items():
        matcher = find_matcher(matchers, key)
        for literal in (value if isinstance(value, list) else [value]):
            entries.append(KeyValue(key, _dual(literal, resolve_value(literal, matcher, key), pattern_side)))
    return cls(tuple(entries))


def _query_parameters(values: Dict[str, Any]) -> QueryParameters:
    entries = []
    for key, value in (values or {}).items():
        for literal in (value if isinstance(value, list) else [value]):
            entries.append(KeyValue(key, DualValue.literal(literal)))
    return QueryParameters(tuple(entries))


def _multipart(multipart: doc.Multipart, matchers: doc.MultipartStubMatcher) -> Multipart:
    params: Dict[str, Any] = {}
    for key, value in multipart.params.items():
        matcher = find_matcher(matchers.params, key)
        params[key] = _dual(value, resolve_value(value, matcher, key), Side.STUB)
    for named in multipart.named:
        matcher = find_matcher(matchers.named, named.param_name, attribute="param_name")

        def part(field: str, label: str) -> DualValue:
            literal = getattr(named, field)
            descriptor = getattr(matcher, field) if matcher else None
            key = f"{named.param_name}.{label}"
            return _dual(literal, resolve_value(literal, descriptor, key), Side.STUB)

        params[named.param_name] = NamedProperty(
            file_name=part("file_name", "fileName"),
            file_content=part("file_content", "fileContent"),
            content_type=part("content_type", "contentType"),
        )
    return Multipart(params)


def _read_body(inline: Any, from_file: Optional[str], resolver: Optional[ResourceResolver]) -> Any:
    if from_file is None:
        return inline
    if inline is not None:
        raise ConfigurationError(f"Both a body and a body file [{from_file}] are declared", key=from_file)
    if resolver is None:
        raise ConfigurationError(f"No resource resolver available to read [{from_file}]", key=from_file)
    return resolver.read_text(from_file)


def body_marker(matcher: BodyMatcher) -> MatchingTypeValue:
    """Map a document body matcher onto the marker embedded in the body tree."""
    kind = MATCHER_KINDS[matcher.type.value]
    path = matcher.path
    if kind == MatchingType.REGEX:
        if matcher.predefined:
            predefined = PredefinedRegex(matcher.predefined)
            return MatchingTypeValue(kind, predefined_to_regex(predefined), predefined=predefined, json_path=path)
        if not matcher.value:
            raise ConfigurationError(f"Regex matcher for [{path}] needs a value or a predefined pattern", key=path)
        compile_regex(matcher.value, path)
        return MatchingTypeValue(kind, matcher.value, json_path=path)
    if kind in FORMAT_REGEXES:
        return MatchingTypeValue(kind, FORMAT_REGEXES[kind], json_path=path)
    if kind == MatchingType.COMMAND:
        if not matcher.value:
            raise ConfigurationError(f"Command matcher for [{path}] needs a value", key=path)
        return MatchingTypeValue(kind, matcher.value, json_path=path)
    if kind == MatchingType.TYPE:
        return MatchingTypeValue(
            kind,
            min_occurrence=matcher.min_occurrence,
            max_occurrence=matcher.max_occurrence,
            json_path=path,
        )
    return MatchingTypeValue(kind, json_path=path)


def _check_regex(marker: MatchingTypeValue, literal: Any, path: str) -> None:
    pattern = compile_regex(marker.value, path)
    if isinstance(literal, (dict, list)):
        raise MatcherConsistencyError(path, json.dumps(literal, default=str), pattern.pattern)
    assert_pattern_matched(pattern, literal, path)


def _check_duplicate_paths(matchers: Sequence[BodyMatcher]) -> None:
    seen = set()
    for matcher in matchers:
        if matcher.path in seen:
            if settings.strict_matcher_keys:
                raise AmbiguousMatcherError(f"Several body matchers declared for [{matcher.path}]", key=matcher.path)
            logger.warning("Several body matchers declared for [%s]; the last one wins", matcher.path)
        seen.add(matcher.path)


def inject_body_matchers(body: Any, matchers: Sequence[BodyMatcher], pattern_side: Side) -> Any:
    """Return a body tree with each matcher embedded at the nodes it selects.

    Raises:
        ConfigurationError: If the body is not JSON or a path selects nothing.
        MatcherConsistencyError: If a regex matcher rejects the literal it replaces.
    """
    if not matchers:
        return body
    _check_duplicate_paths(matchers)
    tree = body
    if isinstance(body, str):
        try:
            tree = json.loads(body)
        except ValueError as e:
            raise ConfigurationError(f"Body matchers declared but the body is not JSON: {e}") from e
    for matcher in matchers:
        marker = body_marker(matcher)
        locations = json_paths.locate(tree, matcher.path)
        if not locations:
            raise ConfigurationError(
                f"Body matcher path [{matcher.path}] does not match any element of the body",
                key=matcher.path,
            )
        for location in locations:
            literal = json_paths.get_at(tree, location)
            if isinstance(literal, DualValue):
                literal = literal.side(Side.TEST if pattern_side == Side.STUB else Side.STUB)
            if marker.type == MatchingType.REGEX:
                _check_regex(marker, literal, json_paths.format_path(location))
            tree = json_paths.replace_at(tree, location, _dual(literal, marker, pattern_side))
        logger.debug("Applied %s matcher at [%s] (%d elements)", marker.type.value, matcher.path, len(locations))
    return tree


def _request(request: doc.Request, resolver: Optional[ResourceResolver]) -> Request:
    matchers = request.matchers
    url = Url(request.url, _query_parameters(request.query_parameters)) if request.url else None
    url_path = Url(request.url_path, _query_parameters(request.query_parameters)) if request.url_path else None
    body = _read_body(request.body, request.body_from_file, resolver)
    return Request(
        method=request.method,
        url=url,
        url_path=url_path,
        headers=_key_values(request.headers, matchers.headers, Side.STUB, Headers),
        cookies=_key_values(request.cookies, matchers.cookies, Side.STUB, Cookies),
        body=inject_body_matchers(body, matchers.body, Side.STUB),
        multipart=_multipart(request.multipart, matchers.multipart) if request.multipart is not None else None,
    )


def _response(response: doc.Response, resolver: Optional[ResourceResolver]) -> Response:
    matchers = response.matchers
    body = _read_body(response.body, response.body_from_file, resolver)
    return Response(
        status=response.status,
        headers=_key_values(response.headers, matchers.headers, Side.TEST, Headers),
        cookies=_key_values(response.cookies, matchers.cookies, Side.TEST, Cookies),
        body=inject_body_matchers(body, matchers.body, Side.TEST),
        is_async=response.is_async,
    )


def _input(message: doc.Input, resolver: Optional[ResourceResolver]) -> Input:
    matchers = message.matchers
    body = _read_body(message.message_body, message.message_body_from_file, resolver)
    return Input(
        message_from=message.message_from,
        assert_that=message.assert_that,
        triggered_by=message.triggered_by,
        message_headers=_key_values(message.message_headers, matchers.headers, Side.STUB, Headers),
        message_body=inject_body_matchers(body, matchers.body, Side.STUB),
    )


def _output(message: doc.OutputMessage, resolver: Optional[ResourceResolver]) -> OutputMessage:
    matchers = message.matchers
    body = _read_body(message.body, message.body_from_file, resolver)
    return OutputMessage(
        sent_to=message.sent_to,
        assert_that=message.assert_that,
        headers=_key_values(message.headers, matchers.headers, Side.TEST, Headers),
        body=inject_body_matchers(body, matchers.body, Side.TEST),
    )


def to_contract(yaml_contract: doc.YamlContract, resolver: Optional[ResourceResolver] = None) -> Contract:
    """Convert one document entry into a Contract.

    Args:
        yaml_contract: The validated document entry
        resolver: Resolver for bodyFromFile / messageBodyFromFile references

    Returns:
        A fresh, immutable Contract.
    """
    request = response = None
    if yaml_contract.request is not None:
        if not yaml_contract.request.method:
            raise ConfigurationError("The request has no method")
        request = _request(yaml_contract.request, resolver)
    if yaml_contract.response is not None:
        if request is None:
            raise ConfigurationError("A response was declared without a request")
        response = _response(yaml_contract.response, resolver)
    return Contract(
        name=yaml_contract.name,
        label=yaml_contract.label,
        description=yaml_contract.description,
        priority=yaml_contract.priority,
        ignored=yaml_contract.ignored,
        request=request,
        response=response,
        input=_input(yaml_contract.input, resolver) if yaml_contract.input else None,
        output_message=_output(yaml_contract.output_message, resolver) if yaml_contract.output_message else None,
    )


def to_contracts(yaml_contracts: List[doc.YamlContract], resolver: Optional[ResourceResolver] = None) -> List[Contract]:
    return [to_contract(c, resolver) for c in yaml_contracts]
