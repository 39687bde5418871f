"""
Scenario Options
================
One immutable options dataclass per verifier, with the defaults every list
view in the application shares. Required fields are positional-free keyword
arguments without defaults; everything else can be overridden per page.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Pattern, Tuple

from .errors import ScenarioConfigError
from .selectors import SORTED_CLASS, UNSORTED_CLASS, sel
from .waits import Intercept


class SearchMode(Enum):
    """Which precondition a page needs before a scenario can run.

    DEFAULT: the list is populated on load.
    CLIENT_SEARCH: the client search page starts empty; a query must be run
        first and results are validated through link URLs.
    INVOICE_SEARCH: sales/invoice pages are pre-filtered by employee; the
        filter is cleared and a query is run first.
    """

    DEFAULT = "default"
    CLIENT_SEARCH = "client_search"
    INVOICE_SEARCH = "invoice_search"


class RowMatch(Enum):
    """How a search result row is matched against the term.

    FIRST_CELL_PREFIX: the first cell contains the first 10 characters of the
        term (server-side cells may be truncated).
    WHOLE_ROW: the row text contains the whole term anywhere.
    """

    FIRST_CELL_PREFIX = "first_cell_prefix"
    WHOLE_ROW = "whole_row"


class FullscreenVariant(Enum):
    """STANDARD checks the collapsed state on both ends; PRESET only runs the transitions."""

    STANDARD = "standard"
    PRESET = "preset"


@dataclass(frozen=True)
class ColumnToggle:
    name: str
    should_exist: bool


def _require_intercept(mode: SearchMode, intercept: Optional[Intercept], *modes: SearchMode):
    if mode in modes and intercept is None:
        raise ScenarioConfigError(f"mode {mode.value} waits on the network and needs an intercept")


@dataclass(frozen=True)
class SearchOptions:
    search_term: str
    input_selector: str = sel("search.input")
    clear_selector: str = sel("search.clear")
    row_selector: str = sel("table.row")
    default_row_count: int = 10
    mode: SearchMode = SearchMode.DEFAULT
    row_match: RowMatch = RowMatch.FIRST_CELL_PREFIX
    # the search call; when set, rows are checked only after it answered
    intercept: Optional[Intercept] = None

    def __post_init__(self):
        if not self.search_term:
            raise ScenarioConfigError("search_term must be non-empty")
        if self.default_row_count < 0:
            raise ScenarioConfigError("default_row_count must be >= 0")

    @property
    def prefix(self) -> str:
        """Server-side cells may be truncated, so rows are matched on the first 10 characters."""
        return self.search_term[:10]


@dataclass(frozen=True)
class SyncOptions:
    intercept: Intercept
    button_selector: str = sel("toolbar.sync")
    loading_selector: str = sel("loading")
    row_selector: str = sel("table.row")
    mode: SearchMode = SearchMode.DEFAULT
    settle_ms: int = 3000


@dataclass(frozen=True)
class ColumnToggleOptions:
    columns: Tuple[ColumnToggle, ...]
    menu_button_selector: str = sel("toolbar.more")
    mode: SearchMode = SearchMode.DEFAULT
    intercept: Optional[Intercept] = None

    def __post_init__(self):
        if not self.columns:
            raise ScenarioConfigError("columns must list at least one column")
        # accept lists from callers but keep the frozen value hashable
        object.__setattr__(self, "columns", tuple(self.columns))
        _require_intercept(self.mode, self.intercept, SearchMode.CLIENT_SEARCH)


@dataclass(frozen=True)
class ExpandOptions:
    expand_button_selector: str = sel("toolbar.expand")
    compress_button_selector: str = sel("toolbar.compress")
    fullscreen_wrapper_selector: str = sel("fullscreen.wrapper")
    variant: FullscreenVariant = FullscreenVariant.STANDARD
    # pages render two compress icons; this picks the one inside the fullscreen wrapper
    compress_index: int = 1

    def __post_init__(self):
        if self.compress_index < 0:
            raise ScenarioConfigError("compress_index must be >= 0")


@dataclass(frozen=True)
class PaginationOptions:
    prev_selector: str = sel("pagination.prev")
    next_selector: str = sel("pagination.next")
    page_size_selector: str = sel("pagination.size")
    quick_jumper_selector: str = sel("pagination.jumper")
    default_page_size: int = 10
    row_selector: str = sel("table.body_row")
    page_size_options: Tuple[int, ...] = (25, 50, 100)
    mode: SearchMode = SearchMode.DEFAULT
    intercept: Optional[Intercept] = None
    jump_to_page: int = 2

    def __post_init__(self):
        if not self.page_size_options:
            raise ScenarioConfigError("page_size_options must not be empty")
        if any(size <= 0 for size in self.page_size_options) or self.default_page_size <= 0:
            raise ScenarioConfigError("page sizes must be positive")
        if self.jump_to_page < 1:
            raise ScenarioConfigError("jump_to_page must be >= 1")
        object.__setattr__(self, "page_size_options", tuple(self.page_size_options))
        _require_intercept(self.mode, self.intercept, SearchMode.CLIENT_SEARCH)


@dataclass(frozen=True)
class ColumnSortOptions:
    column_headers: Tuple[str, ...]
    sort_button_selector: str = sel("table.sorters")
    unsorted_class: str = UNSORTED_CLASS
    sorted_class: str = SORTED_CLASS
    mode: SearchMode = SearchMode.DEFAULT

    def __post_init__(self):
        if not self.column_headers:
            raise ScenarioConfigError("column_headers must list at least one header")
        object.__setattr__(self, "column_headers", tuple(self.column_headers))


@dataclass(frozen=True)
class RowNavigationOptions:
    url_pattern: str
    row_selector: str = sel("table.body_row")
    link_selector: str = "td"
    mode: SearchMode = SearchMode.DEFAULT
    intercept: Optional[Intercept] = None
    title_regex: Optional[Pattern[str]] = None

    def __post_init__(self):
        if not self.url_pattern:
            raise ScenarioConfigError("url_pattern must be non-empty")
        _require_intercept(self.mode, self.intercept, SearchMode.CLIENT_SEARCH)


@dataclass(frozen=True)
class ExportOptions:
    button_text: str = "Export to Excel"
    filename: Optional[str] = None
    timeout_ms: int = 90000
    # (label, option) of a filter to set and search with before exporting
    filter_option: Optional[Tuple[str, str]] = None
    intercept: Optional[Intercept] = None
