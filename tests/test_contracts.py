"""Tests for the YAML document contracts.

Verifies that document entries validate with their camelCase keys and
that the schema rejects what the converter cannot handle.
"""

import pytest
from pydantic import ValidationError

from contracts import (
    BodyStubMatcher,
    BodyTestMatcher,
    KeyValueMatcher,
    Multipart,
    MultipartNamedStubMatcher,
    Request,
    Response,
    StubMatcherType,
    TestHeaderMatcher,
    TestMatcherType,
    YamlContract,
)
from matchers import PredefinedRegex


class TestMatcherContracts:
    """Test matcher descriptor contracts."""

    def test_key_value_matcher(self):
        matcher = KeyValueMatcher(key="Content-Type", regex="application/json.*")
        assert matcher.key == "Content-Type"
        assert matcher.predefined is None

    def test_predefined_is_an_enum(self):
        matcher = TestHeaderMatcher.model_validate({"key": "id", "predefined": "uuid"})
        assert matcher.predefined == PredefinedRegex.UUID

    def test_unknown_predefined_kind(self):
        with pytest.raises(ValidationError):
            KeyValueMatcher.model_validate({"key": "id", "predefined": "zip_code"})

    def test_stub_body_matcher_rejects_test_only_kinds(self):
        """by_type / by_command / by_null only exist on the test side."""
        with pytest.raises(ValidationError) as exc:
            BodyStubMatcher.model_validate({"path": "$.id", "type": "by_null"})
        assert "unsupported on the stub side" in str(exc.value)

    def test_stub_body_matcher(self):
        matcher = BodyStubMatcher.model_validate({"path": "$.born", "type": "by_date"})
        assert matcher.type == StubMatcherType.BY_DATE

    def test_test_body_matcher_occurrences(self):
        matcher = BodyTestMatcher.model_validate(
            {"path": "$.items", "type": "by_type", "minOccurrence": 1, "maxOccurrence": 3}
        )
        assert matcher.type == TestMatcherType.BY_TYPE
        assert matcher.min_occurrence == 1
        assert matcher.max_occurrence == 3

    def test_negative_occurrence(self):
        with pytest.raises(ValidationError):
            BodyTestMatcher.model_validate({"path": "$.items", "type": "by_type", "minOccurrence": -1})

    def test_named_multipart_matcher(self):
        matcher = MultipartNamedStubMatcher.model_validate(
            {"paramName": "file", "fileContent": {"regex": "[a-z]+"}}
        )
        assert matcher.param_name == "file"
        assert matcher.file_content.regex == "[a-z]+"
        assert matcher.file_name is None


class TestSectionContracts:
    """Test request, response and whole-entry contracts."""

    def test_request_aliases(self):
        request = Request.model_validate({
            "method": "GET",
            "urlPath": "/users",
            "queryParameters": {"limit": 10},
            "bodyFromFile": "request.json",
        })
        assert request.url_path == "/users"
        assert request.query_parameters == {"limit": 10}
        assert request.body_from_file == "request.json"
        assert request.matchers.body == []

    def test_response_async_alias(self):
        assert Response.model_validate({"status": 200, "async": True}).is_async is True

    def test_unknown_keys_are_rejected(self):
        with pytest.raises(ValidationError):
            YamlContract.model_validate({"name": "x", "requets": {}})

    def test_output_message_alias(self):
        contract = YamlContract.model_validate({"outputMessage": {"sentTo": "topic"}})
        assert contract.output_message.sent_to == "topic"

    def test_multipart_scalars_are_text(self):
        multipart = Multipart.model_validate({
            "params": {"count": 5, "draft": False, 7: "seven"},
            "named": [{"paramName": "file", "fileContent": 42, "contentType": "text/plain"}],
        })
        assert multipart.params == {"count": "5", "draft": "false", "7": "seven"}
        assert multipart.named[0].file_content == "42"


class TestToDocument:
    """Test the plain-mapping form of an entry."""

    def test_empty_sections_are_pruned(self):
        contract = YamlContract.model_validate({
            "name": "x",
            "request": {"method": "GET", "url": "/"},
            "response": {"status": 204},
        })
        assert contract.to_document() == {
            "name": "x",
            "request": {"method": "GET", "url": "/"},
            "response": {"status": 204},
        }

    def test_bodies_keep_nulls_and_empty_collections(self):
        contract = YamlContract.model_validate({
            "request": {"method": "POST", "url": "/", "body": {"note": None, "tags": []}},
            "response": {"status": 200, "body": []},
        })
        document = contract.to_document()
        assert document["request"]["body"] == {"note": None, "tags": []}
        assert document["response"]["body"] == []

    def test_matchers_use_document_keys(self):
        contract = YamlContract.model_validate({
            "request": {"method": "GET", "url": "/"},
            "response": {
                "status": 200,
                "body": {"items": [1]},
                "matchers": {"body": [{"path": "$.items", "type": "by_type", "minOccurrence": 1}]},
            },
        })
        matchers = contract.to_document()["response"]["matchers"]
        assert matchers == {"body": [{"path": "$.items", "type": "by_type", "minOccurrence": 1}]}
