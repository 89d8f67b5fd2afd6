"""Entrypoint classification and handler resolution.

Submodules
----------
- ``classifier``: Category enum, ``classify()`` over a manifest's modules.
- ``handlers``: Unresolved/resolved handler locations, ``parse_handler()``
  and the pure ``resolve()``.
- ``pipeline``: Per-app driver collecting resolved entrypoints and
  per-function failures.

All public names are re-exported here::

    from forgescope.entrypoints import classify, parse_handler, resolve, scan_app
"""

from forgescope.entrypoints.classifier import Category, ClassifiedFunction, classify
from forgescope.entrypoints.handlers import (
    SOURCE_ROOT,
    VALID_EXTENSIONS,
    HandlerLocation,
    ResolvedHandlerLocation,
    parse_handler,
    resolve,
)
from forgescope.entrypoints.pipeline import (
    Entrypoint,
    EntrypointFailure,
    EntrypointReport,
    list_source_files,
    resolve_entrypoints,
    scan_app,
)

__all__ = [
    "Category",
    "ClassifiedFunction",
    "Entrypoint",
    "EntrypointFailure",
    "EntrypointReport",
    "HandlerLocation",
    "ResolvedHandlerLocation",
    "SOURCE_ROOT",
    "VALID_EXTENSIONS",
    "classify",
    "list_source_files",
    "parse_handler",
    "resolve",
    "resolve_entrypoints",
    "scan_app",
]
