"""
Invoices Page Tests
===================
Tests for /invoices_module/View.
"""

from typing import List

from ..base import ViewSuite
from ..options import (
    ColumnSortOptions,
    ColumnToggle,
    ColumnToggleOptions,
    ExpandOptions,
    FullscreenVariant,
    PaginationOptions,
    RowNavigationOptions,
    SearchMode,
    SyncOptions,
)
from ..scenarios import (
    ScenarioCase,
    column_sort_case,
    column_toggle_case,
    expand_case,
    pagination_case,
    row_navigation_case,
    sync_case,
)
from ..waits import Intercept

INVOICES_LIST = Intercept("invoicesList", "**/invoices*")


class InvoicesViewTests(ViewSuite):
    """Tests for the invoices list"""

    name = "Invoices"
    intercepts = (INVOICES_LIST,)
    ready = (INVOICES_LIST,)
    ready_text = "Invoices"

    @property
    def path(self) -> str:
        return "/invoices_module/View"

    def cases(self) -> List[ScenarioCase]:
        mode = SearchMode.INVOICE_SEARCH
        return [
            sync_case(SyncOptions(intercept=INVOICES_LIST, mode=mode)),
            column_toggle_case(ColumnToggleOptions(columns=[
                ColumnToggle("Email Sent", False),
                ColumnToggle("Sale Representative", False),
                ColumnToggle("Reference", True),
            ])),
            expand_case(ExpandOptions(variant=FullscreenVariant.PRESET)),
            pagination_case(PaginationOptions(default_page_size=10, page_size_options=(10,), mode=mode)),
            column_sort_case(ColumnSortOptions(
                column_headers=("Invoice Amount", "Invoice Amount in Euro", "Invoice Date"),
                mode=mode,
            )),
            row_navigation_case(RowNavigationOptions(
                url_pattern="/invoices_module/InvoiceDetail?invoice_id=",
                mode=mode,
            )),
        ]
