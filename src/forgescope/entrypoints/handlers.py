"""Resolve a function's ``module.export`` handler to a real source file.

Resolution happens in two states, each with its own type:

- ``HandlerLocation`` (unresolved) holds the export name, the function key
  and an extension-less candidate path under ``src/``. It deliberately
  exposes no usable file path.
- ``ResolvedHandlerLocation`` is produced only by ``resolve()`` once a file
  with one of the valid extensions has been found in the caller-supplied
  set of known files. Only this type carries the final path.

No filesystem access happens here; callers pass the set of known files.
"""

from __future__ import annotations

from collections.abc import Collection, Set
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath

from forgescope.exceptions import HandlerFileNotFound, InvalidHandler
from forgescope.manifest.models import FunctionModule

SOURCE_ROOT = "src"

# Priority order; at most one variant normally exists.
VALID_EXTENSIONS = (".jsx", ".tsx", ".ts", ".js")


@dataclass(frozen=True)
class HandlerLocation:
    """An unresolved handler reference.

    Attributes:
        export: Name of the exported function inside the module.
        key: Key of the manifest function the handler belongs to.
        module_path: Candidate module path without an extension, relative
            to the app directory (e.g. ``src/index``).
    """

    export: str
    key: str
    module_path: PurePosixPath

    def candidates(self, base_dir: Path) -> list[Path]:
        """Return the candidate file paths in extension priority order."""
        return [base_dir / f"{self.module_path}{ext}" for ext in VALID_EXTENSIONS]


@dataclass(frozen=True)
class ResolvedHandlerLocation:
    """A handler whose source file is known to exist.

    Attributes:
        export: Name of the exported function inside the module.
        key: Key of the manifest function the handler belongs to.
        path: The source file, joined with the base directory.
        extension: The extension that matched, e.g. ``".tsx"``.
    """

    export: str
    key: str
    path: Path
    extension: str


def parse_handler(handler: str, key: str) -> HandlerLocation:
    """Split a handler string into module path and export name.

    The split happens on the first period, so ``"index.run"`` yields module
    ``src/index`` and export ``run``.

    Args:
        handler: The ``handler`` value from the manifest.
        key: The function's key, used in the error.

    Returns:
        The unresolved ``HandlerLocation``.

    Raises:
        InvalidHandler: If the handler has no period or either side of it
            is empty.
    """
    module, sep, export = handler.partition(".")
    if not sep or not module or not export:
        raise InvalidHandler(key)
    return HandlerLocation(
        export=export,
        key=key,
        module_path=PurePosixPath(SOURCE_ROOT) / module,
    )


def location_for(function: FunctionModule) -> HandlerLocation:
    """Parse the handler of a declared function."""
    return parse_handler(function.handler, function.key)


def resolve(
    location: HandlerLocation,
    known_files: Collection[str | PurePath],
    base_dir: Path | str,
) -> ResolvedHandlerLocation:
    """Find the source file of a handler among the known files.

    Args:
        location: The unresolved handler.
        known_files: Every source file path the caller knows about, in the
            same form as ``base_dir`` joined with a relative path. Strings
            and path objects are both accepted.
        base_dir: The app directory the module path is relative to.

    Returns:
        The ``ResolvedHandlerLocation`` for the first extension that exists.

    Raises:
        HandlerFileNotFound: If no extension matches. The error cites the
            highest-priority attempt so messages are stable.
    """
    # A set is searched in place, not copied.
    files = known_files if isinstance(known_files, Set) else set(known_files)
    candidates = location.candidates(Path(base_dir))
    for ext, path in zip(VALID_EXTENSIONS, candidates):
        if path in files or str(path) in files:
            return ResolvedHandlerLocation(
                export=location.export,
                key=location.key,
                path=path,
                extension=ext,
            )
    raise HandlerFileNotFound(location.export, candidates[0])
