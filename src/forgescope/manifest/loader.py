"""Locate and read a manifest file from an app directory.

Manifests are normally ``manifest.yml`` at the root of an app, but YAML
and JSON spellings are both accepted. YAML is loaded with ``yaml.safe_load``
so untrusted manifests cannot instantiate arbitrary Python objects.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from forgescope.exceptions import InvalidDocument, MalformedManifest
from forgescope.manifest.models import Manifest, decode_manifest

logger = logging.getLogger(__name__)

# Probed in order when a directory is given.
MANIFEST_FILENAMES = ("manifest.yml", "manifest.yaml", "manifest.json")


def find_manifest(app_dir: Path) -> Path | None:
    """Return the manifest file inside ``app_dir``, or None if absent."""
    for filename in MANIFEST_FILENAMES:
        candidate = app_dir / filename
        if candidate.is_file():
            return candidate
    return None


def read_document(path: Path) -> Any:
    """Read and decode a YAML or JSON file.

    Args:
        path: File to read. ``.json`` files are decoded as JSON, anything
            else as YAML.

    Returns:
        The decoded document.

    Raises:
        InvalidDocument: If the file cannot be read or decoded.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidDocument(f"cannot read {path}: {exc}") from exc
    try:
        if path.suffix == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InvalidDocument(f"cannot decode {path}: {exc}") from exc


def load_manifest(path: Path | str) -> Manifest:
    """Load a manifest from a file or from an app directory.

    Args:
        path: A manifest file, or a directory containing one of
            ``MANIFEST_FILENAMES``.

    Returns:
        The decoded ``Manifest``.

    Raises:
        MalformedManifest: If no manifest exists, it cannot be decoded, or
            required fields are missing.
    """
    target = Path(path)
    if target.is_dir():
        found = find_manifest(target)
        if found is None:
            raise MalformedManifest(f"no manifest found in {target}")
        target = found
    logger.debug("Loading manifest from %s", target)
    try:
        document = read_document(target)
    except InvalidDocument as exc:
        raise MalformedManifest(str(exc)) from exc
    return decode_manifest(document)
