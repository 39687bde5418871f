"""
List-View Verifier Scenarios
============================
Reusable, parameterized interaction checks for the table widgets every list
view shares: search, sync, column visibility, fullscreen, pagination,
sorting, row navigation and export.

Each ``verify_*`` coroutine drives one full interaction cycle on a
``ListView`` and raises on the first failed expectation. Each ``*_case``
function registers the verifier as a named ``ScenarioCase`` that a page
suite lists and the runner executes.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable
from urllib.parse import quote

from playwright.async_api import expect

from . import actions
from .options import (
    ColumnSortOptions,
    ColumnToggle,
    ColumnToggleOptions,
    ExpandOptions,
    ExportOptions,
    FullscreenVariant,
    PaginationOptions,
    RowMatch,
    RowNavigationOptions,
    SearchMode,
    SearchOptions,
    SyncOptions,
)
from .selectors import sel
from .views import ListView

logger = logging.getLogger(__name__)

DEFAULT_RETRIES = 3

# Sorted-class state after each click on a sorter: ascending, descending, cleared.
# Both sorted states carry the same class, so direction is not observable here.
SORT_CYCLE = (True, True, False)

PAGE_SIZE_TIMEOUT = 25000
QUICK_JUMP_TIMEOUT = 30000
NAVIGATION_TIMEOUT = 35000
TITLE_TIMEOUT = 45000


def encode_uri_component(value: str) -> str:
    """Percent-encode like the browser's ``encodeURIComponent``."""
    return quote(value, safe="-_.!~*'()")


def class_pattern(class_name: str) -> re.Pattern:
    """Match a single class token inside a ``class`` attribute."""
    return re.compile(rf"(^|\s){re.escape(class_name)}(\s|$)")


# =============================================================================
# Preconditions
# =============================================================================


class Precondition(Enum):
    NONE = "none"
    CLIENT_QUERY = "client_query"
    CLIENT_QUERY_SETTLED = "client_query_settled"
    INVOICE_QUERY_AWAITED = "invoice_query_awaited"
    INVOICE_DATA = "invoice_data"


SYNC_PRECONDITIONS = {
    SearchMode.DEFAULT: Precondition.NONE,
    SearchMode.CLIENT_SEARCH: Precondition.CLIENT_QUERY_SETTLED,
    SearchMode.INVOICE_SEARCH: Precondition.INVOICE_QUERY_AWAITED,
}

COLUMN_TOGGLE_PRECONDITIONS = {
    SearchMode.DEFAULT: Precondition.NONE,
    SearchMode.CLIENT_SEARCH: Precondition.CLIENT_QUERY,
    SearchMode.INVOICE_SEARCH: Precondition.NONE,
}

PAGINATION_PRECONDITIONS = {
    SearchMode.DEFAULT: Precondition.NONE,
    SearchMode.CLIENT_SEARCH: Precondition.CLIENT_QUERY,
    SearchMode.INVOICE_SEARCH: Precondition.INVOICE_DATA,
}

COLUMN_SORT_PRECONDITIONS = {
    SearchMode.DEFAULT: Precondition.NONE,
    SearchMode.CLIENT_SEARCH: Precondition.NONE,
    SearchMode.INVOICE_SEARCH: Precondition.INVOICE_DATA,
}

ROW_NAVIGATION_PRECONDITIONS = PAGINATION_PRECONDITIONS


async def apply_precondition(view: ListView, precondition: Precondition, options: Any):
    """Bring the page into the state a scenario starts from."""
    if precondition is Precondition.NONE:
        return
    logger.debug("Applying precondition %s", precondition.value)
    if precondition is Precondition.CLIENT_QUERY:
        await view.run_client_query(options.intercept)
    elif precondition is Precondition.CLIENT_QUERY_SETTLED:
        await view.run_client_query(options.intercept, settle_ms=options.settle_ms)
    elif precondition is Precondition.INVOICE_QUERY_AWAITED:
        await view.run_invoice_query(options.intercept, options.row_selector)
    elif precondition is Precondition.INVOICE_DATA:
        await view.load_invoice_data()


# =============================================================================
# Verifiers
# =============================================================================


def _mismatched_rows(page, rows, options: SearchOptions):
    """Rows that do not match the search term."""
    if options.mode is SearchMode.CLIENT_SEARCH:
        fragment = f"search_term={encode_uri_component(options.search_term)}"
        return rows.filter(has_not=page.locator(f'a[href*="{fragment}"]'))
    if options.row_match is RowMatch.WHOLE_ROW:
        return rows.filter(has_not_text=re.compile(re.escape(options.search_term)))
    first_cell = page.locator("td:first-child", has_text=re.compile(re.escape(options.prefix)))
    return rows.filter(has_not=first_cell)


async def verify_search(view: ListView, options: SearchOptions):
    """Search narrows the table to matching rows; clearing restores the default page."""
    page = view.page
    search_input = page.locator(options.input_selector).first
    rows = page.locator(options.row_selector)

    await actions.type_and_submit(search_input, options.search_term)
    await expect(search_input).to_have_value(options.search_term)
    if options.intercept is not None:
        await view.handle(options.intercept).expect_status(200)

    mismatched = _mismatched_rows(page, rows, options)
    await expect(mismatched).to_have_count(0)
    # an empty result for a known-good term is a regression, not a pass
    await expect(rows).not_to_have_count(0)
    # rows rendered after the first check are checked again
    await expect(mismatched).to_have_count(0)

    await page.locator(options.clear_selector).first.click()
    await expect(search_input).to_have_value("")
    await expect(rows).to_have_count(options.default_row_count)


async def verify_sync(view: ListView, options: SyncOptions):
    """The sync button re-fetches the list and the table repopulates."""
    await apply_precondition(view, SYNC_PRECONDITIONS[options.mode], options)

    page = view.page
    button = page.locator("button").filter(has=page.locator(options.button_selector)).first
    await button.click()
    await expect(page.locator(options.loading_selector).first).to_be_visible()

    await view.handle(options.intercept).expect_status(200)
    await expect(page.locator(options.row_selector)).not_to_have_count(0)


async def _toggle_columns(view: ListView, options: ColumnToggleOptions):
    page = view.page
    await page.locator(options.menu_button_selector).first.click()
    await expect(page.locator(sel("popover")).first).to_be_visible()

    content = page.locator(sel("popover.content")).first
    for column in options.columns:
        await content.get_by_text(column.name, exact=True).first.click()


async def _expect_headers(view: ListView, columns):
    table = view.page.locator(sel("table")).first
    for column in columns:
        header = table.locator(sel("table.header"), has_text=column.name)
        if column.should_exist:
            await expect(header.first).to_be_attached()
        else:
            await expect(header).to_have_count(0)


async def verify_column_toggle(view: ListView, options: ColumnToggleOptions):
    """Clicking names in the "more" popover shows or hides their columns."""
    await apply_precondition(view, COLUMN_TOGGLE_PRECONDITIONS[options.mode], options)
    await _toggle_columns(view, options)
    await _expect_headers(view, options.columns)


async def verify_toggle_restores(view: ListView, options: ColumnToggleOptions):
    """Toggling the same columns twice brings the header set back."""
    await apply_precondition(view, COLUMN_TOGGLE_PRECONDITIONS[options.mode], options)
    await _toggle_columns(view, options)
    await _expect_headers(view, options.columns)

    content = view.page.locator(sel("popover.content")).first
    for column in options.columns:
        await content.get_by_text(column.name, exact=True).first.click()
    restored = [ColumnToggle(c.name, not c.should_exist) for c in options.columns]
    await _expect_headers(view, restored)


async def verify_expand(view: ListView, options: ExpandOptions):
    """Expand opens the fullscreen wrapper; compress closes it."""
    page = view.page
    wrapper = page.locator(options.fullscreen_wrapper_selector)
    standard = options.variant is FullscreenVariant.STANDARD

    if standard:
        await expect(wrapper).to_have_count(0)

    await page.locator(options.expand_button_selector).first.click()
    await expect(wrapper.first).to_be_attached()

    await page.locator(options.compress_button_selector).nth(options.compress_index).click()
    if standard:
        await expect(wrapper).to_have_count(0)


async def verify_pagination(view: ListView, options: PaginationOptions):
    """Initial state, next/previous, page-size changes and quick jump."""
    await apply_precondition(view, PAGINATION_PRECONDITIONS[options.mode], options)

    page = view.page
    prev = page.locator(options.prev_selector).first
    active = page.locator(sel("pagination.active")).first
    size_selector = page.locator(options.page_size_selector).first

    # initial state
    await expect(prev).to_have_attribute("aria-disabled", "true")
    await expect(active).to_contain_text("1")
    await expect(size_selector).to_contain_text(f"{options.default_page_size} / page")
    total = page.locator("span").filter(has_text=re.compile(r"^Total \d+ items$"))
    await expect(total.first).to_be_attached()

    # forward and back; previous is disabled only on the first page
    await page.locator(options.next_selector).first.click()
    await expect(active).to_contain_text("2")
    await expect(prev).not_to_have_attribute("aria-disabled", "true")
    await prev.click()
    await expect(active).to_contain_text("1")
    await expect(prev).to_have_attribute("aria-disabled", "true")

    # page size is a UI contract, so the row count must match exactly
    rows = page.locator(options.row_selector)
    for size in options.page_size_options:
        await actions.select_option(page, size_selector, f"{size} / page")
        await expect(rows).to_have_count(size, timeout=PAGE_SIZE_TIMEOUT)

    target = str(options.jump_to_page)
    await actions.type_and_submit(page.locator(options.quick_jumper_selector).first, target)
    await expect(active).to_contain_text(target, timeout=QUICK_JUMP_TIMEOUT)


async def verify_column_sort(view: ListView, options: ColumnSortOptions):
    """Each sortable header cycles sorted, sorted, unsorted over three clicks."""
    await apply_precondition(view, COLUMN_SORT_PRECONDITIONS[options.mode], options)

    page = view.page
    unsorted = class_pattern(options.unsorted_class)
    is_sorted = class_pattern(options.sorted_class)

    for label in options.column_headers:
        header = page.locator(sel("table.header")).filter(
            has=page.locator(sel("table.column_title"), has_text=label)
        ).first

        await expect(header).to_have_class(unsorted)
        await expect(header).not_to_have_class(is_sorted)

        for sorted_after_click in SORT_CYCLE:
            await actions.force_click(header.locator(options.sort_button_selector).first)
            if sorted_after_click:
                await expect(header).to_have_class(is_sorted)
            else:
                await expect(header).to_have_class(unsorted)
                await expect(header).not_to_have_class(is_sorted)


async def verify_row_navigation(view: ListView, options: RowNavigationOptions):
    """The first row links to its details page and following it lands there."""
    await apply_precondition(view, ROW_NAVIGATION_PRECONDITIONS[options.mode], options)

    page = view.page
    link = page.locator(options.row_selector).first.locator(options.link_selector).first.locator("a").first
    expected = re.compile(re.escape(options.url_pattern))

    await expect(link).to_have_attribute("href", expected)
    await link.click()
    await expect(page).to_have_url(expected, timeout=NAVIGATION_TIMEOUT)

    if options.mode is SearchMode.CLIENT_SEARCH and options.title_regex is not None:
        title = page.locator(sel("page.title")).filter(has_text=options.title_regex)
        await expect(title.first).to_be_attached(timeout=TITLE_TIMEOUT)


async def verify_export(view: ListView, options: ExportOptions):
    """Export downloads an .xlsx workbook (a zip, so it starts with ``PK``)."""
    page = view.page
    if options.filter_option is not None:
        label, option_text = options.filter_option
        await actions.select_filter_option(page, label, option_text)
        await page.locator("button", has_text="Search").first.click()
        await view.handle(options.intercept).expect_status(200)

    async with page.expect_download(timeout=options.timeout_ms) as download_info:
        await page.locator("button", has_text=options.button_text).first.click(force=True)
    download = await download_info.value

    if options.filename:
        assert download.suggested_filename == options.filename, (
            f"expected download {options.filename!r}, got {download.suggested_filename!r}"
        )
    path = await download.path()
    with open(path, "rb") as f:
        magic = f.read(2)
    assert magic == b"PK", f"{download.suggested_filename}: not an xlsx file (magic bytes {magic!r})"


# =============================================================================
# Registration
# =============================================================================


@dataclass(frozen=True)
class ScenarioCase:
    """One registered test case: a verifier bound to its options."""

    title: str
    verifier: Callable[[ListView, Any], Awaitable[None]]
    options: Any
    retries: int = DEFAULT_RETRIES

    async def run(self, view: ListView):
        await self.verifier(view, self.options)


def search_case(options: SearchOptions, retries: int = DEFAULT_RETRIES) -> ScenarioCase:
    return ScenarioCase("Tests search functionality with table interaction", verify_search, options, retries)


def sync_case(options: SyncOptions, retries: int = DEFAULT_RETRIES) -> ScenarioCase:
    return ScenarioCase("Tests Sync button functionality", verify_sync, options, retries)


def column_toggle_case(options: ColumnToggleOptions, retries: int = DEFAULT_RETRIES) -> ScenarioCase:
    return ScenarioCase("Tests More menu functionality", verify_column_toggle, options, retries)


def toggle_restore_case(options: ColumnToggleOptions, retries: int = DEFAULT_RETRIES) -> ScenarioCase:
    return ScenarioCase("Tests More menu toggles are reversible", verify_toggle_restores, options, retries)


def expand_case(options: ExpandOptions = ExpandOptions(), retries: int = DEFAULT_RETRIES) -> ScenarioCase:
    return ScenarioCase(
        "Tests Expand button functionality based on full-screen wrapper", verify_expand, options, retries
    )


def pagination_case(options: PaginationOptions = PaginationOptions(), retries: int = DEFAULT_RETRIES) -> ScenarioCase:
    return ScenarioCase("Pagination Tests", verify_pagination, options, retries)


def column_sort_case(options: ColumnSortOptions, retries: int = DEFAULT_RETRIES) -> ScenarioCase:
    return ScenarioCase("Tests column sorting functionality", verify_column_sort, options, retries)


def row_navigation_case(options: RowNavigationOptions, retries: int = DEFAULT_RETRIES) -> ScenarioCase:
    return ScenarioCase("Tests navigation to details page", verify_row_navigation, options, retries)


def export_case(options: ExportOptions = ExportOptions(), retries: int = DEFAULT_RETRIES) -> ScenarioCase:
    return ScenarioCase("Should trigger an export request and download a .xlsx file", verify_export, options, retries)

