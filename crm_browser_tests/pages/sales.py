"""
Sales Page Tests
================
Tests for /sales_module/ViewSales. The list opens pre-filtered to the
logged-in employee.
"""

from typing import List

from ..base import ViewSuite
from ..options import (
    ColumnSortOptions,
    ColumnToggle,
    ColumnToggleOptions,
    ExpandOptions,
    ExportOptions,
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
    export_case,
    pagination_case,
    row_navigation_case,
    sync_case,
)
from ..waits import Intercept

SALES_LIST = Intercept("salesList", "**/sales*")


class SalesViewTests(ViewSuite):
    """Tests for the sales list"""

    name = "Sales"
    intercepts = (SALES_LIST,)
    ready = (SALES_LIST,)
    ready_text = "Sales"

    @property
    def path(self) -> str:
        return "/sales_module/ViewSales"

    def cases(self) -> List[ScenarioCase]:
        mode = SearchMode.INVOICE_SEARCH
        return [
            sync_case(SyncOptions(intercept=SALES_LIST, mode=mode)),
            column_toggle_case(ColumnToggleOptions(columns=[
                ColumnToggle("Transaction ID", False),
                ColumnToggle("Sale Representative", False),
                ColumnToggle("Collection", True),
                ColumnToggle("Barcode", True),
            ])),
            expand_case(ExpandOptions(variant=FullscreenVariant.PRESET)),
            pagination_case(PaginationOptions(default_page_size=10, page_size_options=(10,), mode=mode)),
            column_sort_case(ColumnSortOptions(
                column_headers=("Transaction ID", "Sales Price", "Sales Price in Euro", "Sale Date"),
                mode=mode,
            )),
            row_navigation_case(RowNavigationOptions(
                url_pattern="/sales_module/SaleDetail?sale_id=",
                mode=mode,
            )),
            export_case(ExportOptions(
                filename="sales.xlsx",
                filter_option=("Employee", "All Employees"),
                intercept=SALES_LIST,
            )),
        ]
