"""forgescope exception hierarchy.

All public exceptions inherit from ForgeScopeError, giving callers a single
base class to catch when they want to handle any forgescope-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations

from pathlib import PurePath


class ForgeScopeError(Exception):
    """Base exception for all forgescope errors."""


class InvalidDocument(ForgeScopeError):
    """Raised when an input file cannot be read or decoded as YAML or JSON."""


class MalformedManifest(InvalidDocument):
    """Raised when a manifest lacks a structurally required field.

    Covers a missing ``app.id``, a function entry without ``key`` or
    ``handler``, a non-mapping document root, and manifest files that
    cannot be read or decoded. Fatal to processing that one manifest.
    """


class InvalidHandler(ForgeScopeError):
    """Raised when a function handler is not of the form ``module.export``.

    Attributes:
        key: The function key whose handler could not be split.
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"handler for function {key!r} does not contain a period")
        self.key = key


class HandlerFileNotFound(ForgeScopeError):
    """Raised when no source file exists for any valid handler extension.

    Attributes:
        function: Exported function name the handler points at.
        path: The first (highest-priority) path that was attempted.
    """

    def __init__(self, function: str, path: PurePath) -> None:
        super().__init__(f"no source file for function {function!r} (tried {path})")
        self.function = function
        self.path = path


class SpecificationUnavailable(ForgeScopeError):
    """Raised when an API specification cannot be fetched or decoded.

    Recoverable: ingestion logs it and contributes an empty table.

    Attributes:
        source: URL or description of the specification source.
        reason: Human-readable cause.
    """

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"specification {source} unavailable: {reason}")
        self.source = source
        self.reason = reason
