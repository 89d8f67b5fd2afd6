"""OAuth scope requirements of API endpoints.

Submodules
----------
- ``patterns``: Template-to-regex conversion with the sentinel delimiter.
- ``table``: ``Method``, the read-only ``PermissionTable`` and ``merge()``.
- ``ingest``: Specification fetching and table construction.
- ``cache``: Explicit, injectable cache of fetched documents.
- ``matcher``: Longest-pattern-first ``lookup()``.
- ``http_client``: httpx helpers shared by ingestion.

All public names are re-exported here::

    from forgescope.permissions import ingest_all, lookup
"""

from forgescope.permissions.cache import SpecificationCache
from forgescope.permissions.ingest import (
    DEFAULT_SPECIFICATION_URLS,
    SCOPE_EXTENSION_KEY,
    aingest,
    aingest_all,
    ingest,
    ingest_all,
    ingest_document,
)
from forgescope.permissions.matcher import find_endpoint, lookup
from forgescope.permissions.patterns import SENTINEL, compile_endpoint, endpoint_regex
from forgescope.permissions.table import Method, PermissionTable, merge

__all__ = [
    "DEFAULT_SPECIFICATION_URLS",
    "Method",
    "PermissionTable",
    "SCOPE_EXTENSION_KEY",
    "SENTINEL",
    "SpecificationCache",
    "aingest",
    "aingest_all",
    "compile_endpoint",
    "endpoint_regex",
    "find_endpoint",
    "ingest",
    "ingest_all",
    "ingest_document",
    "lookup",
    "merge",
]
