"""Shared fixtures for forgescope tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

MANIFEST_YAML = """\
app:
  id: ari:cloud:ecosystem::app/1234
  name: Issue Helper
modules:
  jira:issuePanel:
    - key: issue-panel
      resource: main
      resolver:
        function: panel-resolver
  macro:
    - key: summary-macro
      function: macro-fn
  consumer:
    - key: queue-consumer
      queue: work-queue
      resolver:
        function: queue-fn
        method: process
  scheduledTrigger:
    - key: nightly
      function: cron-fn
      interval: day
  trigger:
    - key: on-issue
      function: event-fn
      events:
        - avi:jira:created:issue
  webtrigger:
    - key: hook
      function: hook-fn
  function:
    - key: panel-resolver
      handler: index.panel
    - key: macro-fn
      handler: macro.run
    - key: queue-fn
      handler: queue.handle
    - key: cron-fn
      handler: cron.run
    - key: event-fn
      handler: events.onCreate
    - key: hook-fn
      handler: hooks/web.handler
permissions:
  scopes:
    - read:jira-work
  content:
    scripts:
      - unsafe-inline
"""


def _write_app(root: Path, manifest: str = MANIFEST_YAML, sources: tuple[str, ...] = ()) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "manifest.yml").write_text(manifest)
    for rel in sources:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("export const handler = () => {};\n")
    return root


@pytest.fixture
def make_app(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating an app directory with a manifest and empty sources.

    Call as ``make_app(name, manifest_text, sources=(...))``.
    """

    def _make(name: str = "custom", manifest: str = MANIFEST_YAML, sources: tuple[str, ...] = ()) -> Path:
        return _write_app(tmp_path / name, manifest, sources)

    return _make


@pytest.fixture
def manifest_data() -> dict[str, Any]:
    """A minimal decoded manifest document."""
    return {
        "app": {"id": "my-app", "name": "My App"},
        "modules": {
            "function": [{"key": "main", "handler": "index.run"}],
        },
        "permissions": {"scopes": ["read:jira-work"]},
    }


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """An app whose sources resolve every user-facing handler."""
    return _write_app(
        tmp_path / "app",
        sources=(
            "src/index.tsx",
            "src/macro.js",
            "src/hooks/web.ts",
            "src/cron.js",
            "src/node_modules/ignored.js",
        ),
    )


@pytest.fixture
def spec_document() -> dict[str, Any]:
    """A small specification in the platform's swagger shape."""
    scopes = "x-atlassian-oauth2-scopes"
    return {
        "openapi": "3.0.1",
        "paths": {
            "/rest/api/3/issue/{issueIdOrKey}": {
                "get": {scopes: [
                    {"scopes": ["read:jira-work"], "state": "Current"},
                    {"scopes": ["read:issue:jira"], "state": "Beta"},
                ]},
                "delete": {scopes: [{"scopes": ["write:jira-work"]}]},
            },
            "/rest/api/3/issue/{issueIdOrKey}/comment": {
                "post": {scopes: [{"scopes": ["write:jira-work"]}]},
                "get": {scopes: [{"scopes": ["read:comment:jira"]}]},
            },
            "/rest/api/3/serverInfo": {
                "get": {"summary": "no scopes listed"},
            },
        },
    }


@pytest.fixture
def spec_file(tmp_path: Path, spec_document: dict[str, Any]) -> Path:
    """The specification document written to disk as JSON."""
    path = tmp_path / "swagger.json"
    path.write_text(json.dumps(spec_document))
    return path
