"""Turn templated endpoint paths into request-matching regular expressions.

A template such as ``/rest/api/3/issue/{issueIdOrKey}/comment`` becomes a
pattern where each ``{param}`` matches any run of characters and every
literal segment must match exactly.

Both the pattern and every URL tested against it are terminated with
``SENTINEL``. Without it a shorter template would match as a prefix of a
longer concrete path: ``/rest/api/{id}/issue`` would accept a request to
``/rest/api/123/issue-extra``.

The pattern is searched for anywhere in the request path, so gateway
prefixes such as ``/ex/jira/<cloudId>`` in front of a template still match.
"""

from __future__ import annotations

import re
from functools import lru_cache
from urllib.parse import urlsplit

# ASCII unit separator; never appears in a request URL.
SENTINEL = "\x1f"

_PARAM = re.compile(r"\{[^{}]*\}")


def endpoint_regex(template: str) -> str:
    """Return the regex source for a template, without the sentinel.

    Args:
        template: Endpoint path with ``{param}`` placeholders.

    Returns:
        Regex source with literal text escaped and placeholders as ``.*``.
    """
    parts: list[str] = []
    last = 0
    for match in _PARAM.finditer(template):
        parts.append(re.escape(template[last:match.start()]))
        parts.append(".*")
        last = match.end()
    parts.append(re.escape(template[last:]))
    return "".join(parts)


@lru_cache(maxsize=None)
def compile_endpoint(template: str) -> re.Pattern[str]:
    """Compile a template into its sentinel-terminated pattern."""
    return re.compile(endpoint_regex(template) + SENTINEL)


def request_subject(url: str) -> str:
    """Prepare a request URL for matching.

    URLs are reduced to their path, since templates describe paths only.
    Scheme, host, query and fragment are dropped. The sentinel is appended.
    """
    return urlsplit(url).path + SENTINEL


def matches(template: str, url: str) -> bool:
    """Return True when ``url`` is a request to ``template``."""
    return compile_endpoint(template).search(request_subject(url)) is not None
