"""Tests for ``forgescope entrypoints``.

Verifies:
    - Exit code 0 when every handler resolves, 1 otherwise.
    - Exit code 2 for a malformed manifest.
    - JSON and text output.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from click.testing import CliRunner

from forgescope.cli.main import cli


class TestEntrypointsCommand:
    """Tests for the entrypoints subcommand."""

    def test_resolved_app_exits_0(self, runner: CliRunner, app_dir: Path) -> None:
        result = runner.invoke(cli, ["entrypoints", str(app_dir)])
        assert result.exit_code == 0
        assert "3 resolved" in result.output

    def test_json_output(self, runner: CliRunner, app_dir: Path) -> None:
        result = runner.invoke(cli, ["entrypoints", str(app_dir), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["app_id"] == "ari:cloud:ecosystem::app/1234"
        categories = {e["function"]: e["category"] for e in data["entrypoints"]}
        assert categories == {
            "panel-resolver": "invokable",
            "macro-fn": "invokable",
            "hook-fn": "webtrigger",
        }
        assert data["failures"] == []

    def test_unresolved_handler_exits_1(self, runner: CliRunner, make_app: Callable[..., Path]) -> None:
        app = make_app("nosrc")
        result = runner.invoke(cli, ["entrypoints", str(app), "--format", "json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert {f["error"] for f in data["failures"]} == {"HandlerFileNotFound"}

    def test_malformed_manifest_exits_2(self, runner: CliRunner, make_app: Callable[..., Path]) -> None:
        app = make_app("bad", "modules: {}\n")
        result = runner.invoke(cli, ["entrypoints", str(app)])
        assert result.exit_code == 2

    def test_nonexistent_path(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["entrypoints", "/nonexistent/app/xyz"])
        assert result.exit_code == 2
