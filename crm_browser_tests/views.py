"""
List View Page Adapter
======================
Page object for one live list-view page (clients, client search, sales,
invoices). Verifiers get the page, its search box, its filters and the wait
handles registered for it from this adapter.
"""

import logging
from typing import Dict, Iterable, Optional

from playwright.async_api import Locator, Page, expect

from . import actions
from .errors import ScenarioConfigError
from .selectors import sel
from .waits import Intercept, WaitHandle

logger = logging.getLogger(__name__)


class ListView:
    """A list-view page plus the preconditions its search modes need."""

    def __init__(
        self,
        page: Page,
        handles: Optional[Dict[Intercept, WaitHandle]] = None,
        client_query: str = "test",
        invoice_query: str = "AddClient Test",
        filter_label: str = "Employee",
    ):
        self.page = page
        self.handles: Dict[Intercept, WaitHandle] = dict(handles or {})
        self.client_query = client_query
        self.invoice_query = invoice_query
        self.filter_label = filter_label

    @classmethod
    async def open(
        cls,
        page: Page,
        url: str,
        intercepts: Iterable[Intercept] = (),
        ready: Iterable[Intercept] = (),
        ready_text: Optional[str] = None,
        page_load_timeout: int = 30000,
        ready_timeout: int = 35000,
        **kwargs,
    ) -> "ListView":
        """Register wait handles, visit the page and wait until it is populated."""
        handles = {
            intercept: WaitHandle(intercept, timeout_ms=ready_timeout).attach(page)
            for intercept in intercepts
        }
        view = cls(page, handles, **kwargs)

        logger.debug("Visiting %s", url)
        await page.goto(url, timeout=page_load_timeout)
        for intercept in ready:
            await view.handle(intercept).wait(ready_timeout)
        if ready_text:
            await expect(page.get_by_text(ready_text).first).to_be_visible(timeout=ready_timeout)
        return view

    def close(self):
        for handle in self.handles.values():
            handle.detach()

    # =========================================================================
    # Capabilities
    # =========================================================================

    def handle(self, intercept: Optional[Intercept]) -> WaitHandle:
        if intercept is None:
            raise ScenarioConfigError("this scenario needs an intercept to wait on")
        try:
            return self.handles[intercept]
        except KeyError:
            raise ScenarioConfigError(
                f"intercept '{intercept.name}' is not registered on this page"
            ) from None

    @property
    def search_input(self) -> Locator:
        return self.page.locator(sel("search.input")).first

    # =========================================================================
    # Search-mode preconditions
    # =========================================================================

    async def run_client_query(self, intercept: Intercept, settle_ms: int = 0):
        """Populate the client search page and wait for its results."""
        await actions.type_and_submit(self.search_input, self.client_query)
        await self.handle(intercept).expect_status(200)
        if settle_ms:
            await self.page.wait_for_timeout(settle_ms)

    async def run_invoice_query(self, intercept: Intercept, row_selector: str):
        """Drop the employee pre-filter, query and wait for a non-empty result."""
        await actions.clear_filter(self.page, self.filter_label)
        await actions.type_and_submit(self.search_input, self.invoice_query)
        await self.handle(intercept).expect_status(200)
        await expect(self.page.locator(row_selector)).not_to_have_count(0)

    async def load_invoice_data(self):
        """Drop the employee pre-filter and submit the invoice query."""
        await actions.clear_filter(self.page, self.filter_label)
        await actions.type_and_submit(self.search_input, self.invoice_query)
        await expect(self.search_input).to_have_value(self.invoice_query)
