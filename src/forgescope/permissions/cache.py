"""Explicit cache of fetched specification documents.

Specification documents are large and rarely change, so scanning many
manifests in one process should fetch them once. The cache is an ordinary
object that callers create and pass in; nothing is cached unless a cache
is supplied. Entries expire after ``ttl`` seconds, or live for the life of
the cache object when ``ttl`` is None.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any


class SpecificationCache:
    """Time-boxed, thread-safe store of decoded specification documents.

    Args:
        ttl: Seconds an entry stays valid. None keeps entries until
            ``invalidate()`` is called.
        clock: Monotonic time source, injectable for tests.

    Usage::

        cache = SpecificationCache(ttl=3600)
        table = ingest_all(DEFAULT_SPECIFICATION_URLS, cache=cache)
    """

    def __init__(
        self,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, url: str) -> Any | None:
        """Return the cached document for ``url``, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return None
            stored_at, document = entry
            if self.ttl is not None and self._clock() - stored_at >= self.ttl:
                del self._entries[url]
                return None
            return document

    def put(self, url: str, document: Any) -> None:
        """Store a decoded document for ``url``."""
        with self._lock:
            self._entries[url] = (self._clock(), document)

    def invalidate(self, url: str | None = None) -> None:
        """Drop one entry, or every entry when ``url`` is None."""
        with self._lock:
            if url is None:
                self._entries.clear()
            else:
                self._entries.pop(url, None)

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and self.get(url) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
