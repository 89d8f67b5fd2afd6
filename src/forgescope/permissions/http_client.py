"""Async HTTP helpers for fetching API specification documents.

Thin wrapper around ``httpx.AsyncClient`` with standardised timeouts,
user-agent header and error mapping. Every transport, status, timeout or
decode failure is raised as ``SpecificationUnavailable`` so callers handle
all of them the same way.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from forgescope.exceptions import SpecificationUnavailable

logger = logging.getLogger(__name__)

# Timeout for every specification request (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = "forgescope-spec-fetcher/0.1"


def make_client(*, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> httpx.AsyncClient:
    """Create an ``AsyncClient`` configured for specification fetches.

    Extra keyword arguments (e.g. ``transport`` in tests) are passed through.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
        **kwargs,
    )


async def fetch_document(client: httpx.AsyncClient, url: str) -> Any:
    """Fetch a URL and decode the body as JSON.

    Args:
        client: The client to issue the request with.
        url: Specification URL.

    Returns:
        The decoded JSON document.

    Raises:
        SpecificationUnavailable: On timeouts, HTTP errors, transport
            errors, malformed URLs or invalid JSON.
    """
    logger.debug("Fetching specification %s", url)
    try:
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.json()
    except httpx.TimeoutException as exc:
        raise SpecificationUnavailable(url, "timed out") from exc
    except httpx.HTTPStatusError as exc:
        raise SpecificationUnavailable(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.RequestError as exc:
        raise SpecificationUnavailable(url, f"request error: {exc}") from exc
    except httpx.InvalidURL as exc:
        raise SpecificationUnavailable(url, f"invalid URL: {exc}") from exc
    except ValueError as exc:
        raise SpecificationUnavailable(url, f"invalid JSON: {exc}") from exc
