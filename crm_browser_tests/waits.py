"""
Network Wait Handles
====================
Typed replacement for named network aliases.

A page suite declares its ``Intercept``s once. When a page is opened, each
intercept becomes a live ``WaitHandle`` listening to that page's responses.
Scenarios await the handle itself (looked up by the ``Intercept`` object,
never by a string), consuming matching responses in arrival order. Responses
that arrived before the wait started are consumed first.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Optional, Pattern, Union

from playwright.async_api import Page, Response

from .errors import WaitTimeoutError

logger = logging.getLogger(__name__)


def glob_to_regex(glob: str) -> Pattern[str]:
    """Translate a URL glob: ``**`` matches anything, ``*`` anything but ``/``."""
    parts = []
    i = 0
    while i < len(glob):
        if glob.startswith("**", i):
            parts.append(".*")
            i += 2
        elif glob[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif glob[i] == "?":
            parts.append(r"\?")
            i += 1
        else:
            parts.append(re.escape(glob[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


@dataclass(frozen=True)
class Intercept:
    """Declaration of a network call a scenario may wait on.

    Attributes:
        name: Display name used in logs and timeout messages.
        pattern: URL glob (``**/clients*``) or compiled regex (searched).
        method: HTTP method to match.
    """

    name: str
    pattern: Union[str, Pattern[str]]
    method: str = "GET"

    def matches(self, method: str, url: str) -> bool:
        if method.upper() != self.method.upper():
            return False
        if isinstance(self.pattern, str):
            return glob_to_regex(self.pattern).match(url) is not None
        return self.pattern.search(url) is not None

    def describe(self) -> str:
        pattern = self.pattern if isinstance(self.pattern, str) else self.pattern.pattern
        return f"{self.method.upper()} {pattern}"


class WaitHandle:
    """Live hook for one ``Intercept`` on one page."""

    def __init__(self, intercept: Intercept, timeout_ms: float = 35000):
        self.intercept = intercept
        self.timeout_ms = timeout_ms
        self._responses: asyncio.Queue = asyncio.Queue()
        self._page: Optional[Page] = None
        self.consumed = 0

    @property
    def pending(self) -> int:
        """Matching responses received but not yet consumed."""
        return self._responses.qsize()

    def attach(self, page: Page) -> "WaitHandle":
        self._page = page
        page.on("response", self._on_response)
        return self

    def detach(self):
        if self._page is not None:
            self._page.remove_listener("response", self._on_response)
            self._page = None

    def _on_response(self, response: Response):
        if self.intercept.matches(response.request.method, response.url):
            logger.debug("%s <- %s %s", self.intercept.name, response.status, response.url)
            self._responses.put_nowait(response)

    async def wait(self, timeout_ms: Optional[float] = None) -> Response:
        """Consume the next matching response, waiting up to the timeout."""
        timeout_ms = self.timeout_ms if timeout_ms is None else timeout_ms
        try:
            response = await asyncio.wait_for(self._responses.get(), timeout_ms / 1000)
        except asyncio.TimeoutError:
            raise WaitTimeoutError(self.intercept.name, self.intercept.describe(), timeout_ms) from None
        self.consumed += 1
        return response

    async def expect_status(self, status: int = 200, timeout_ms: Optional[float] = None) -> Response:
        """Consume the next matching response and assert its status code."""
        response = await self.wait(timeout_ms)
        assert response.status == status, (
            f"{self.intercept.name}: expected status {status}, got {response.status} ({response.url})"
        )
        return response
