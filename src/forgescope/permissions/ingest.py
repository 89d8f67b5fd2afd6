"""Build endpoint permission tables from API specification documents.

Each specification is an OpenAPI/Swagger document whose ``paths`` map URL
templates to per-method operation objects. Operations list their OAuth
requirements under the ``x-atlassian-oauth2-scopes`` extension as a list of
``{"scopes": [...]}`` entries; the scopes of all entries are unioned.

Permission data is best-effort enrichment. A source that cannot be
fetched or decoded is logged and contributes an empty table, so the rest of
the analysis keeps running. Several sources are fetched concurrently and
their tables merged afterwards.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

import httpx

from forgescope.exceptions import SpecificationUnavailable
from forgescope.permissions.cache import SpecificationCache
from forgescope.permissions.http_client import DEFAULT_TIMEOUT, fetch_document, make_client
from forgescope.permissions.table import Method, PermissionTable, TableKey, merge

logger = logging.getLogger(__name__)

SCOPE_EXTENSION_KEY = "x-atlassian-oauth2-scopes"

DEFAULT_SPECIFICATION_URLS: tuple[str, ...] = (
    "https://developer.atlassian.com/cloud/jira/platform/swagger-v3.v3.json",
    "https://developer.atlassian.com/cloud/confluence/swagger.v3.json",
)

# A URL to fetch, or an already-decoded document.
Source = Union[str, Mapping[str, Any]]


def ingest_document(document: Any, source: str = "<document>") -> PermissionTable:
    """Extract the permission table from a decoded specification.

    Args:
        document: A full specification (its ``paths`` mapping is used) or a
            bare mapping of URL template to operations.
        source: Description of the document for error messages.

    Returns:
        Table with one entry per declared ``(template, method)``.

    Raises:
        SpecificationUnavailable: If the document is not a mapping.
    """
    if not isinstance(document, Mapping):
        raise SpecificationUnavailable(source, "document root is not a mapping")
    paths = document.get("paths")
    if not isinstance(paths, Mapping):
        paths = document

    entries: dict[TableKey, frozenset[str]] = {}
    for template, operations in paths.items():
        if not isinstance(template, str) or not isinstance(operations, Mapping):
            continue
        for method in Method:
            operation = operations.get(method.value)
            if not isinstance(operation, Mapping):
                continue
            entries[(template, method)] = _operation_scopes(operation)
    logger.debug("Ingested %d operations from %s", len(entries), source)
    return PermissionTable(entries)


def _operation_scopes(operation: Mapping[str, Any]) -> frozenset[str]:
    scopes: set[str] = set()
    requirements = operation.get(SCOPE_EXTENSION_KEY) or []
    if not isinstance(requirements, list):
        return frozenset()
    for requirement in requirements:
        if not isinstance(requirement, Mapping):
            continue
        values = requirement.get("scopes") or []
        if isinstance(values, list):
            scopes.update(str(scope) for scope in values)
    return frozenset(scopes)


def _describe(source: Source) -> str:
    return source if isinstance(source, str) else "<document>"


async def _load(
    source: Source,
    client: httpx.AsyncClient | None,
    cache: SpecificationCache | None,
    timeout: float,
) -> Any:
    if not isinstance(source, str):
        return source
    if cache is not None:
        cached = cache.get(source)
        if cached is not None:
            logger.debug("Using cached specification %s", source)
            return cached
    if client is None:
        async with make_client(timeout=timeout) as own_client:
            document = await fetch_document(own_client, source)
    else:
        document = await fetch_document(client, source)
    if cache is not None:
        cache.put(source, document)
    return document


async def aingest(
    source: Source,
    *,
    client: httpx.AsyncClient | None = None,
    cache: SpecificationCache | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> PermissionTable:
    """Fetch (if needed) and ingest one specification source.

    Args:
        source: URL of a specification, or an already-decoded document.
        client: Client to fetch with; a temporary one is created if None.
        cache: Optional document cache consulted before fetching.
        timeout: Request timeout in seconds for a temporary client.

    Returns:
        The source's permission table, or an empty table if the source
        was unavailable.
    """
    try:
        document = await _load(source, client, cache, timeout)
        return ingest_document(document, _describe(source))
    except SpecificationUnavailable as exc:
        logger.warning("%s; continuing without it", exc)
        return PermissionTable()


async def aingest_all(
    sources: Iterable[Source],
    *,
    client: httpx.AsyncClient | None = None,
    cache: SpecificationCache | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> PermissionTable:
    """Ingest several sources concurrently and merge their tables."""
    sources = list(sources)
    if client is None:
        async with make_client(timeout=timeout) as own_client:
            tables = await asyncio.gather(
                *(aingest(s, client=own_client, cache=cache) for s in sources)
            )
    else:
        tables = await asyncio.gather(
            *(aingest(s, client=client, cache=cache) for s in sources)
        )
    return merge(*tables)


def ingest(
    source: Source,
    *,
    cache: SpecificationCache | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> PermissionTable:
    """Synchronous ``aingest``. Must not be called from a running event loop."""
    return asyncio.run(aingest(source, cache=cache, timeout=timeout))


def ingest_all(
    sources: Iterable[Source] = DEFAULT_SPECIFICATION_URLS,
    *,
    cache: SpecificationCache | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> PermissionTable:
    """Synchronous ``aingest_all``. Must not be called from a running event loop."""
    return asyncio.run(aingest_all(sources, cache=cache, timeout=timeout))
