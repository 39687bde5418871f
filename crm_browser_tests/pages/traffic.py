"""
Traffic View Page Tests
=======================
Tests for /traffics_module/View - the store traffic list. Search results
are matched on the whole row, since the term may sit in any column.
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
    RowMatch,
    RowNavigationOptions,
    SearchOptions,
    SyncOptions,
)
from ..scenarios import (
    ScenarioCase,
    column_sort_case,
    column_toggle_case,
    expand_case,
    pagination_case,
    row_navigation_case,
    search_case,
    sync_case,
)
from ..waits import Intercept

TRAFFIC_LIST = Intercept("trafficView", "**/traffics*")
PLATFORMS_LIST = Intercept("platformsList", "**/platforms*")
PRODUCT_LINES_LIST = Intercept("productLinesList", "**/product_lines*")


class TrafficViewTests(ViewSuite):
    """Tests for the traffic list"""

    name = "Traffic"
    intercepts = (TRAFFIC_LIST, PLATFORMS_LIST, PRODUCT_LINES_LIST)
    ready = (TRAFFIC_LIST, PLATFORMS_LIST, PRODUCT_LINES_LIST)
    ready_text = "Traffic"

    @property
    def path(self) -> str:
        return "/traffics_module/View"

    def cases(self) -> List[ScenarioCase]:
        return [
            search_case(SearchOptions(
                search_term="test update",
                row_match=RowMatch.WHOLE_ROW,
                intercept=TRAFFIC_LIST,
            )),
            sync_case(SyncOptions(intercept=TRAFFIC_LIST)),
            expand_case(ExpandOptions(variant=FullscreenVariant.PRESET)),
            column_toggle_case(ColumnToggleOptions(columns=[
                ColumnToggle("Nationality", False),
                ColumnToggle("Preferred Contact", False),
                ColumnToggle("Address", True),
                ColumnToggle("Funnel Stage", True),
            ])),
            pagination_case(PaginationOptions(page_size_options=(25,), jump_to_page=5)),
            column_sort_case(ColumnSortOptions(column_headers=("Date In",))),
            row_navigation_case(RowNavigationOptions(
                url_pattern="/traffics_module/TrafficDetails?trafficId=",
            )),
        ]
