"""Tests for ``forgescope scopes`` using local specification files."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from forgescope.cli.main import cli


class TestScopesCommand:
    """Tests for the scopes subcommand."""

    def test_json_lookup(self, runner: CliRunner, spec_file: Path) -> None:
        result = runner.invoke(cli, [
            "scopes", "GET", "/rest/api/3/issue/ABC-1/comment",
            "--spec", str(spec_file), "--format", "json",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["endpoint"] == "/rest/api/3/issue/{issueIdOrKey}/comment"
        assert data["scopes"] == ["read:comment:jira"]
        assert data["method"] == "get"

    def test_text_lookup(self, runner: CliRunner, spec_file: Path) -> None:
        result = runner.invoke(cli, [
            "scopes", "delete", "/rest/api/3/issue/ABC-1", "--spec", str(spec_file),
        ])
        assert result.exit_code == 0
        assert "write:jira-work" in result.output

    def test_no_match_exits_1(self, runner: CliRunner, spec_file: Path) -> None:
        result = runner.invoke(cli, [
            "scopes", "get", "/bananas/1", "--spec", str(spec_file), "--format", "json",
        ])
        assert result.exit_code == 1
        assert json.loads(result.output)["endpoint"] is None

    def test_unreadable_spec_file_skipped(self, runner: CliRunner, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        result = runner.invoke(cli, [
            "scopes", "get", "/a", "--spec", str(bad), "--format", "json",
        ])
        assert result.exit_code == 1
        assert json.loads(result.output)["scopes"] == []

    def test_invalid_method_rejected(self, runner: CliRunner, spec_file: Path) -> None:
        result = runner.invoke(cli, ["scopes", "options", "/a", "--spec", str(spec_file)])
        assert result.exit_code == 2

    def test_malformed_spec_url_does_not_crash(self, runner: CliRunner, spec_file: Path) -> None:
        result = runner.invoke(cli, [
            "scopes", "get", "/rest/api/3/issue/ABC-1",
            "--spec", "http://[::1", "--spec", str(spec_file), "--format", "json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output)["scopes"] == ["read:issue:jira", "read:jira-work"]
