"""Classify and resolve every entrypoint of one app.

The pipeline glues the pure pieces together: it classifies the manifest's
functions, lists the app's source files once, and resolves each classified
function's handler independently. A bad handler or a missing file is
recorded as a failure for that function and never stops its siblings from
being resolved. Only a manifest that cannot be decoded aborts the run.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Collection
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from forgescope.entrypoints.classifier import Category, classify
from forgescope.entrypoints.handlers import (
    SOURCE_ROOT,
    VALID_EXTENSIONS,
    ResolvedHandlerLocation,
    location_for,
    resolve,
)
from forgescope.exceptions import HandlerFileNotFound, InvalidHandler
from forgescope.manifest.loader import load_manifest
from forgescope.manifest.models import FunctionModule, Manifest

logger = logging.getLogger(__name__)

# Directories never walked when listing source files.
SKIPPED_DIRS = frozenset({"node_modules", ".git"})


@dataclass(frozen=True)
class Entrypoint:
    """A classified function whose handler file was found."""

    function: FunctionModule
    category: Category
    location: ResolvedHandlerLocation


@dataclass(frozen=True)
class EntrypointFailure:
    """A classified function whose handler could not be resolved."""

    function: FunctionModule
    category: Category
    error: InvalidHandler | HandlerFileNotFound


@dataclass
class EntrypointReport:
    """Outcome of resolving all entrypoints of one app.

    Attributes:
        app_id: The manifest's ``app.id``.
        resolved: Entrypoints with a verified source file.
        failures: Per-function resolution failures.
    """

    app_id: str
    resolved: list[Entrypoint] = field(default_factory=list)
    failures: list[EntrypointFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every classified function resolved."""
        return not self.failures


def list_source_files(base_dir: Path) -> set[Path]:
    """List candidate handler files under ``base_dir/src``.

    Args:
        base_dir: The app directory.

    Returns:
        Paths (joined with ``base_dir``) of every file with a valid handler
        extension. Empty if the source root does not exist.
    """
    root = base_dir / SOURCE_ROOT
    files: set[Path] = set()
    if not root.is_dir():
        logger.info("No %s directory under %s", SOURCE_ROOT, base_dir)
        return files
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in SKIPPED_DIRS]
        for name in filenames:
            if os.path.splitext(name)[1] in VALID_EXTENSIONS:
                files.add(Path(dirpath) / name)
    return files


def resolve_entrypoints(
    manifest: Manifest,
    known_files: Collection[str | PurePath],
    base_dir: Path,
) -> EntrypointReport:
    """Classify the manifest's functions and resolve each one's handler.

    Args:
        manifest: The decoded manifest.
        known_files: Source files available for resolution.
        base_dir: The app directory handler paths are relative to.

    Returns:
        An ``EntrypointReport`` with one entry per classified function,
        either in ``resolved`` or in ``failures``.
    """
    report = EntrypointReport(app_id=manifest.app.id)
    files = {Path(p) for p in known_files}
    for classified in classify(manifest.modules):
        func = classified.function
        try:
            location = resolve(location_for(func), files, base_dir)
        except (InvalidHandler, HandlerFileNotFound) as exc:
            logger.warning("Cannot resolve function %s: %s", func.key, exc)
            report.failures.append(
                EntrypointFailure(function=func, category=classified.category, error=exc)
            )
            continue
        report.resolved.append(
            Entrypoint(function=func, category=classified.category, location=location)
        )
    return report


def scan_app(app_dir: Path | str) -> EntrypointReport:
    """Load an app's manifest, list its sources and resolve its entrypoints.

    Args:
        app_dir: The app directory, or the path of its manifest file. For a
            manifest file, sources are listed relative to its directory.

    Raises:
        MalformedManifest: If the manifest is missing or malformed.
    """
    target = Path(app_dir)
    manifest = load_manifest(target)
    base_dir = target.parent if target.is_file() else target
    return resolve_entrypoints(manifest, list_source_files(base_dir), base_dir)
