"""Look up the scopes a concrete request needs.

Among the templates declared for the request's method, the one with the
longest pattern source is tried first: longer patterns carry more literal
text and fewer wildcards, so they describe the most specific endpoint.
The first template whose pattern matches wins and no others are consulted.
Equal-length templates are tried in table order, which callers must not
rely on.
"""

from __future__ import annotations

import logging

from forgescope.permissions.patterns import request_subject
from forgescope.permissions.table import Method, PermissionTable, TableKey

logger = logging.getLogger(__name__)


def find_endpoint(
    table: PermissionTable,
    method: str | Method,
    url: str,
) -> TableKey | None:
    """Return the table key that governs a request, or None.

    Args:
        table: The endpoint permission table.
        method: HTTP method, as a ``Method`` or case-insensitive string.
        url: The request URL or path.

    Returns:
        The winning ``(template, method)`` key, or None if nothing matches
        or the method is not one the table can hold.
    """
    parsed = Method.parse(method)
    if parsed is None:
        logger.debug("Unsupported method %r for %s", method, url)
        return None

    candidates = [template for template, m in table if m is parsed]
    # Stable sort keeps table order among equal lengths.
    candidates.sort(key=lambda t: len(table.pattern(t).pattern), reverse=True)

    subject = request_subject(url)
    for template in candidates:
        if table.pattern(template).search(subject):
            return template, parsed
    return None


def lookup(table: PermissionTable, method: str | Method, url: str) -> frozenset[str]:
    """Return the scopes required for a request.

    An empty set means no declared requirement was found. Callers should
    read it as "permission unknown", not as "no permission needed".
    """
    key = find_endpoint(table, method, url)
    if key is None:
        return frozenset()
    return table[key]
