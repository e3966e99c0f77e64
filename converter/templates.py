"""Handlebars placeholders for request values in stub responses.

A stub response can echo parts of the request it answered; these helpers
render the lookup expressions the mock server's templating engine expects.
"""

from typing import Optional


class HandlebarsTemplate:
    """Renders `{{{ ... }}}` lookup expressions."""

    opening = "{{{"
    closing = "}}}"

    def _wrapped(self, text: str) -> str:
        return f"{self.opening}{text}{self.closing}"

    def url(self) -> str:
        return self._wrapped("request.url")

    def query(self, key: str, index: int = 0) -> str:
        return self._wrapped(f"request.query.{key}.[{index}]")

    def path(self, index: Optional[int] = None) -> str:
        if index is None:
            return self._wrapped("request.path")
        return self._wrapped(f"request.path.[{index}]")

    def header(self, key: str, index: int = 0) -> str:
        return self._wrapped(f"request.headers.{key}.[{index}]")

    def cookie(self, key: str) -> str:
        return self._wrapped(f"request.cookies.{key}")

    def body(self, json_path: Optional[str] = None) -> str:
        """The whole request body, or the element at `json_path`."""
        if json_path is None:
            return self._wrapped("request.body")
        return self._wrapped(f"jsonpath this '{json_path}'")

    def escaped_body(self, json_path: Optional[str] = None) -> str:
        """The request body escaped for embedding in JSON."""
        if json_path is None:
            return self._wrapped("escapejsonbody")
        return self.body(json_path)
