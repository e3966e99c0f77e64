"""Tests for the command line entry point."""

import textwrap

import yaml
from click.testing import CliRunner

from main import main


CONTRACT = textwrap.dedent("""\
    name: shouldReturnUser
    request:
      method: GET
      url: /users/1
      headers:
        Accept: application/json
      matchers:
        headers:
          - key: Accept
            regex: "application/.*"
    response:
      status: 200
      body:
        id: 1
      matchers:
        body:
          - path: $.id
            type: by_regex
            value: "[0-9]+"
    """)


class TestCli:
    """Test the converter CLI."""

    def test_converts_and_writes_output(self, tmp_path):
        source = tmp_path / "user.yml"
        source.write_text(CONTRACT, encoding="utf-8")
        target = tmp_path / "out" / "user.yml"

        result = CliRunner().invoke(main, ["--input", str(source), "--output", str(target)])

        assert result.exit_code == 0, result.output
        assert "shouldReturnUser" in result.output
        assert list(yaml.safe_load_all(target.read_text(encoding="utf-8"))) == [yaml.safe_load(CONTRACT)]

    def test_conversion_error_exits_with_1(self, tmp_path):
        source = tmp_path / "broken.yml"
        source.write_text(CONTRACT.replace("id: 1", "id: abc"), encoding="utf-8")

        result = CliRunner().invoke(main, ["--input", str(source)])

        assert result.exit_code == 1
        assert "Broken matcher" in result.output

    def test_rejects_non_yaml_files(self, tmp_path):
        source = tmp_path / "user.json"
        source.write_text("{}", encoding="utf-8")

        result = CliRunner().invoke(main, ["--input", str(source)])

        assert result.exit_code == 1
