"""
List-View Verifier E2E Tests

Runs every registered case of every page suite against the fake CRM,
plus the failure paths a verifier must not pass silently.
"""

import pytest
from playwright.async_api import Page, expect

from crm_browser_tests import scenarios
from crm_browser_tests.config import Config
from crm_browser_tests.errors import ScenarioConfigError, WaitTimeoutError
from crm_browser_tests.options import (
    ColumnSortOptions,
    ColumnToggle,
    ColumnToggleOptions,
    ExpandOptions,
    PaginationOptions,
    RowNavigationOptions,
    SearchOptions,
    SyncOptions,
)
from crm_browser_tests.pages import ClientsViewTests, SalesViewTests
from crm_browser_tests.pages.clients import CLIENT_LIST
from crm_browser_tests.runner import TestRunner
from crm_browser_tests.scenarios import (
    verify_column_sort,
    verify_column_toggle,
    verify_expand,
    verify_pagination,
    verify_row_navigation,
    verify_search,
    verify_sync,
)
from crm_browser_tests.waits import Intercept

from .fake_crm import FakeCrm

CASES = [
    pytest.param(suite_class, case.title, id=f"{suite_class.name}: {case.title}")
    for suite_class in TestRunner.SUITE_CLASSES
    for case in suite_class().cases()
]

pytestmark = pytest.mark.e2e


async def run_registered_case(page: Page, config: Config, suite_class, title: str):
    suite = suite_class(config)
    case = next(c for c in suite.cases() if c.title == title)
    view = await suite.open_view(page)
    try:
        await case.run(view)
    finally:
        view.close()


@pytest.fixture
def short_expect():
    """Fail expectations after 2s instead of waiting out the default."""
    expect.set_options(timeout=2000)
    yield
    expect.set_options(timeout=5000)


@pytest.fixture
async def clients_view(page: Page, config: Config):
    """Clients View opened on demand, so a test can set up the fake app first."""
    views = []

    async def open_view():
        view = await ClientsViewTests(config).open_view(page)
        views.append(view)
        return view

    yield open_view
    for view in views:
        view.close()


class TestRegisteredCases:
    """Every case the page suites register passes against a healthy app."""

    @pytest.mark.parametrize("suite_class, title", CASES)
    async def test_case_passes(self, page: Page, config: Config, suite_class, title):
        await run_registered_case(page, config, suite_class, title)


class TestPageSetup:
    """Opening a view awaits its ready calls."""

    async def test_ready_calls_consumed(self, page: Page, config: Config):
        suite = ClientsViewTests(config)
        view = await suite.open_view(page)
        try:
            for intercept in suite.ready:
                assert view.handle(intercept).consumed == 1
            await expect(page.locator(".ant-table-row")).to_have_count(10)
        finally:
            view.close()

    async def test_unregistered_intercept_rejected(self, page: Page, config: Config):
        view = await ClientsViewTests(config).open_view(page)
        try:
            with pytest.raises(ScenarioConfigError):
                view.handle(Intercept("other", "**/other*"))
        finally:
            view.close()


class TestSearchTiming:
    """Search results are checked once the search call has answered."""

    async def test_slow_search_with_fewer_rows_passes(self, page: Page, clients_view, fake_app: FakeCrm):
        fake_app.list_delay_ms = 1500
        view = await clients_view()

        # matches rows 24 and 240 only
        await verify_search(view, SearchOptions(search_term="AddClient Test 24", intercept=CLIENT_LIST))

        assert "GET /api/v1/clients" in fake_app.requests
        assert view.handle(CLIENT_LIST).consumed == 2

    async def test_search_term_matches_two_rows(self, page: Page, clients_view, fake_app: FakeCrm):
        fake_app.list_delay_ms = 1500
        view = await clients_view()

        await page.locator(".ant-input[placeholder='Type and hit Enter']").fill("AddClient Test 24")
        await page.keyboard.press("Enter")
        await view.handle(CLIENT_LIST).expect_status(200)

        await expect(page.locator(".ant-table-row")).to_have_count(2)


class TestFailurePaths:
    """Verifiers raise instead of passing on a broken page."""

    async def test_unexpected_row_count_after_clear_fails(self, clients_view, short_expect):
        view = await clients_view()
        with pytest.raises(AssertionError):
            await verify_search(view, SearchOptions(search_term="AddClient Test", default_row_count=25))

    async def test_empty_search_result_fails(self, clients_view, fake_app: FakeCrm, short_expect):
        fake_app.faults.add("empty_search")
        view = await clients_view()
        with pytest.raises(AssertionError):
            await verify_search(view, SearchOptions(search_term="AddClient Test", intercept=CLIENT_LIST))

    async def test_sync_without_matching_call_times_out(self, page: Page, config: Config):
        never = Intercept("neverCalled", "**/never*")
        suite = SalesViewTests(config)
        suite.intercepts = suite.intercepts + (never,)
        view = await suite.open_view(page)
        try:
            view.handles[never].timeout_ms = 1500
            with pytest.raises(WaitTimeoutError, match="neverCalled"):
                await verify_sync(view, SyncOptions(intercept=never))
        finally:
            view.close()

    async def test_sorter_that_never_clears_fails(self, clients_view, fake_app: FakeCrm, short_expect):
        fake_app.faults.add("sort_sticks")
        view = await clients_view()
        with pytest.raises(AssertionError):
            await verify_column_sort(view, ColumnSortOptions(column_headers=("Last Purchase",)))

    async def test_wrong_rows_per_page_fails(self, clients_view, fake_app: FakeCrm, short_expect, monkeypatch):
        fake_app.faults.add("page_size_ignored")
        monkeypatch.setattr(scenarios, "PAGE_SIZE_TIMEOUT", 2000)
        view = await clients_view()
        with pytest.raises(AssertionError):
            await verify_pagination(view, PaginationOptions(page_size_options=(25,)))

    async def test_previous_disabled_on_page_two_fails(self, clients_view, fake_app: FakeCrm, short_expect):
        fake_app.faults.add("prev_stuck_disabled")
        view = await clients_view()
        with pytest.raises(AssertionError):
            await verify_pagination(view, PaginationOptions())

    async def test_toggle_that_hides_nothing_fails(self, clients_view, fake_app: FakeCrm, short_expect):
        fake_app.faults.add("toggle_ignored")
        view = await clients_view()
        with pytest.raises(AssertionError):
            await verify_column_toggle(view, ColumnToggleOptions(columns=[ColumnToggle("Nationality", False)]))

    async def test_link_leading_elsewhere_fails(self, clients_view, fake_app: FakeCrm, short_expect, monkeypatch):
        fake_app.faults.add("link_mismatch")
        monkeypatch.setattr(scenarios, "NAVIGATION_TIMEOUT", 2000)
        view = await clients_view()
        with pytest.raises(AssertionError):
            await verify_row_navigation(view, RowNavigationOptions(
                url_pattern="/clients_module/ClientDetails?given_client_id=",
            ))


class TestVariants:
    """Option variants the registered cases do not use."""

    async def test_standard_expand_checks_both_ends(self, page: Page, clients_view):
        view = await clients_view()
        await verify_expand(view, ExpandOptions())
        await expect(page.locator('div[style*="position: fixed"]')).to_have_count(0)
