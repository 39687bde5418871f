"""
Clients View Page Tests
=======================
Tests for /clients_module/View - the paginated client list.
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
    SearchOptions,
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
    search_case,
    sync_case,
    toggle_restore_case,
)
from ..waits import Intercept

CLIENT_LIST = Intercept("clientList", "**/clients*")
PLATFORMS_LIST = Intercept("platformsList", "**/platforms*")


class ClientsViewTests(ViewSuite):
    """Tests for the clients list"""

    name = "Clients View"
    intercepts = (CLIENT_LIST, PLATFORMS_LIST)
    ready = (CLIENT_LIST, PLATFORMS_LIST)
    ready_text = "Clients"

    @property
    def path(self) -> str:
        return "/clients_module/View"

    def cases(self) -> List[ScenarioCase]:
        columns = [
            ColumnToggle("Nationality", False),
            ColumnToggle("Preferred Contact", False),
            ColumnToggle("Address", True),
            ColumnToggle("DoB", True),
        ]
        return [
            search_case(SearchOptions(search_term="AddClient Test", default_row_count=10, intercept=CLIENT_LIST)),
            sync_case(SyncOptions(intercept=CLIENT_LIST)),
            column_toggle_case(ColumnToggleOptions(columns=columns)),
            toggle_restore_case(ColumnToggleOptions(columns=columns)),
            expand_case(ExpandOptions(variant=FullscreenVariant.PRESET)),
            pagination_case(PaginationOptions(default_page_size=10, page_size_options=(25, 50, 100))),
            column_sort_case(ColumnSortOptions(
                column_headers=("Last Purchase", "Last Visit", "Total Spend"),
            )),
            row_navigation_case(RowNavigationOptions(
                url_pattern="/clients_module/ClientDetails?given_client_id=",
            )),
            export_case(ExportOptions(filename="clients.xlsx")),
        ]
