"""
Client Search Page Tests
========================
Tests for /clients_module/ClientSearch. The page renders an empty table
until a query runs, so most cases search first.
"""

import re
from typing import List

from ..base import ViewSuite
from ..options import (
    ColumnToggle,
    ColumnToggleOptions,
    ExpandOptions,
    FullscreenVariant,
    PaginationOptions,
    RowNavigationOptions,
    SearchMode,
    SearchOptions,
    SyncOptions,
)
from ..scenarios import (
    ScenarioCase,
    column_toggle_case,
    expand_case,
    pagination_case,
    row_navigation_case,
    search_case,
    sync_case,
)
from ..waits import Intercept

# the page document itself, awaited as the ready signal
CLIENT_SEARCH_PAGE = Intercept("clientSearch", "**/ClientSearch")
CLIENT_SEARCH_API = Intercept("apiClientSearch", "**/clientSearch*")


class ClientSearchTests(ViewSuite):
    """Tests for the client search page"""

    name = "Client Search"
    intercepts = (CLIENT_SEARCH_PAGE, CLIENT_SEARCH_API)
    ready = (CLIENT_SEARCH_PAGE,)
    ready_text = "Client Search"

    @property
    def path(self) -> str:
        return "/clients_module/ClientSearch"

    def cases(self) -> List[ScenarioCase]:
        mode = SearchMode.CLIENT_SEARCH
        return [
            search_case(SearchOptions(
                search_term="test", default_row_count=0, mode=mode, intercept=CLIENT_SEARCH_API,
            )),
            sync_case(SyncOptions(intercept=CLIENT_SEARCH_API, mode=mode)),
            expand_case(ExpandOptions(variant=FullscreenVariant.PRESET)),
            column_toggle_case(ColumnToggleOptions(
                columns=[
                    ColumnToggle("Gender", False),
                    ColumnToggle("Address", False),
                    ColumnToggle("Source", False),
                    ColumnToggle("Preferred Contact", False),
                ],
                mode=mode,
                intercept=CLIENT_SEARCH_API,
            )),
            pagination_case(PaginationOptions(mode=mode, intercept=CLIENT_SEARCH_API)),
            row_navigation_case(RowNavigationOptions(
                url_pattern="/clients_module/ClientDetails?given_client_id=",
                mode=mode,
                intercept=CLIENT_SEARCH_API,
                title_regex=re.compile("test", re.I),
            )),
        ]
