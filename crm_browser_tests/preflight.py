"""
Reachability check run before a browser is launched.

A suite run against a stopped instance would otherwise spend the full
page-load timeout on every attempt of every case.
"""

import logging
from typing import Optional

import httpx

from .errors import AppUnreachableError

logger = logging.getLogger(__name__)


async def check_reachable(
    url: str,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """
    GET ``url`` and return its status code.

    Any HTTP answer below 500 counts as reachable (the frontend may redirect
    or answer 401 before login).

    Raises:
        AppUnreachableError: connection failed, timed out, or answered 5xx.
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, verify=False, transport=transport
        ) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        raise AppUnreachableError(f"{url} is not reachable: {e}") from e

    if response.status_code >= 500:
        raise AppUnreachableError(f"{url} answered {response.status_code}")
    logger.info("Preflight %s -> %d", url, response.status_code)
    return response.status_code
