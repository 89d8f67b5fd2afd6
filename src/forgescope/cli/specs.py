"""Shared ``--spec`` option handling for commands that need permission data."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import click

from forgescope.exceptions import InvalidDocument
from forgescope.manifest.loader import read_document
from forgescope.permissions import DEFAULT_SPECIFICATION_URLS, PermissionTable, ingest_all
from forgescope.permissions.http_client import DEFAULT_TIMEOUT
from forgescope.permissions.ingest import Source

logger = logging.getLogger(__name__)

spec_option = click.option(
    "--spec", "specs",
    multiple=True,
    metavar="URL_OR_FILE",
    help="Specification URL or local JSON/YAML file. Repeatable. "
         "Defaults to the Jira and Confluence platform specifications.",
)

timeout_option = click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Fetch timeout per specification, in seconds.",
)


def spec_sources(specs: Sequence[str]) -> list[Source]:
    """Turn ``--spec`` values into ingestion sources.

    Existing files are decoded locally; anything else is treated as a URL.
    An unreadable file is logged and skipped like an unreachable URL.
    """
    if not specs:
        return list(DEFAULT_SPECIFICATION_URLS)
    sources: list[Source] = []
    for spec in specs:
        path = Path(spec)
        if not path.is_file():
            sources.append(spec)
            continue
        try:
            sources.append(read_document(path))
        except InvalidDocument as exc:
            logger.warning("Skipping specification %s: %s", spec, exc)
    return sources


def load_table(specs: Sequence[str], timeout: float) -> PermissionTable:
    """Ingest every requested specification into one merged table."""
    return ingest_all(spec_sources(specs), timeout=timeout)
