"""Tests for Handlebars placeholders."""

from converter import HandlebarsTemplate


class TestHandlebarsTemplate:
    """Test rendering of request lookups."""

    template = HandlebarsTemplate()

    def test_url_and_path(self):
        assert self.template.url() == "{{{request.url}}}"
        assert self.template.path() == "{{{request.path}}}"
        assert self.template.path(1) == "{{{request.path.[1]}}}"

    def test_query_header_cookie(self):
        assert self.template.query("limit") == "{{{request.query.limit.[0]}}}"
        assert self.template.query("tag", 2) == "{{{request.query.tag.[2]}}}"
        assert self.template.header("Accept") == "{{{request.headers.Accept.[0]}}}"
        assert self.template.cookie("session") == "{{{request.cookies.session}}}"

    def test_body(self):
        assert self.template.body() == "{{{request.body}}}"
        assert self.template.body("$.user.name") == "{{{jsonpath this '$.user.name'}}}"

    def test_escaped_body(self):
        """The whole body is escaped; a path lookup is rendered as-is."""
        assert self.template.escaped_body() == "{{{escapejsonbody}}}"
        assert self.template.escaped_body("$.id") == "{{{jsonpath this '$.id'}}}"
