"""
Tests for network wait handles: URL globs, matching and ordered consumption.
"""

import asyncio
import re
from types import SimpleNamespace

import pytest

from crm_browser_tests.errors import WaitTimeoutError
from crm_browser_tests.waits import Intercept, WaitHandle, glob_to_regex


class FakePage:
    def __init__(self):
        self.listeners = {}

    def on(self, event, callback):
        self.listeners.setdefault(event, []).append(callback)

    def remove_listener(self, event, callback):
        self.listeners[event].remove(callback)

    def emit_response(self, url, status=200, method="GET"):
        response = SimpleNamespace(url=url, status=status, request=SimpleNamespace(method=method))
        for callback in list(self.listeners.get("response", [])):
            callback(response)
        return response


class TestGlob:
    """URL glob translation."""

    def test_double_star_crosses_segments(self):
        assert glob_to_regex("**/clients*").match("http://crm.test/api/v1/clients?page=1")

    def test_single_star_stays_in_segment(self):
        # the page document is not the list API
        assert not glob_to_regex("**/clients*").match("http://crm.test/clients_module/View")

    def test_question_mark_is_literal(self):
        regex = glob_to_regex("**/sales?purpose=export*")
        assert regex.match("http://crm.test/api/v1/sales?purpose=export&page=1")
        assert not regex.match("http://crm.test/api/v1/salesXpurpose=export")

    def test_case_sensitive(self):
        assert glob_to_regex("**/ClientSearch").match("http://crm.test/clients_module/ClientSearch")
        assert not glob_to_regex("**/ClientSearch").match("http://crm.test/api/v1/clientSearch")


class TestIntercept:
    """Intercept matching."""

    def test_method_must_match(self):
        login = Intercept("login", "**/login", method="POST")
        assert login.matches("post", "http://crm.test/login")
        assert not login.matches("GET", "http://crm.test/login")

    def test_regex_pattern_is_searched(self):
        intercept = Intercept("export", re.compile(r"purpose=export"))
        assert intercept.matches("GET", "http://crm.test/api/v1/sales?purpose=export")
        assert intercept.describe() == "GET purpose=export"

    def test_hashable_and_comparable(self):
        assert Intercept("a", "**/a*") == Intercept("a", "**/a*")
        assert len({Intercept("a", "**/a*"), Intercept("a", "**/a*")}) == 1


class TestWaitHandle:
    """Ordered consumption of matching responses."""

    async def test_earlier_responses_consumed_first(self):
        page = FakePage()
        handle = WaitHandle(Intercept("clientList", "**/clients*")).attach(page)

        page.emit_response("http://crm.test/api/v1/clients?page=1")
        page.emit_response("http://crm.test/api/v1/platforms")
        page.emit_response("http://crm.test/api/v1/clients?page=2")

        assert handle.pending == 2
        first = await handle.wait(100)
        second = await handle.wait(100)
        assert first.url.endswith("page=1")
        assert second.url.endswith("page=2")
        assert handle.consumed == 2

    async def test_waits_for_future_response(self):
        page = FakePage()
        handle = WaitHandle(Intercept("salesList", "**/sales*")).attach(page)

        asyncio.get_running_loop().call_later(0.01, page.emit_response, "http://crm.test/api/v1/sales")
        response = await handle.wait(1000)

        assert response.status == 200

    async def test_timeout_names_the_intercept(self):
        handle = WaitHandle(Intercept("invoicesList", "**/invoices*")).attach(FakePage())

        with pytest.raises(WaitTimeoutError, match="invoicesList") as exc_info:
            await handle.wait(10)
        assert isinstance(exc_info.value, AssertionError)

    async def test_expect_status_mismatch(self):
        page = FakePage()
        handle = WaitHandle(Intercept("clientList", "**/clients*")).attach(page)
        page.emit_response("http://crm.test/api/v1/clients", status=500)

        with pytest.raises(AssertionError, match="expected status 200, got 500"):
            await handle.expect_status(200, timeout_ms=100)

    async def test_detach_stops_recording(self):
        page = FakePage()
        handle = WaitHandle(Intercept("clientList", "**/clients*")).attach(page)
        handle.detach()

        page.emit_response("http://crm.test/api/v1/clients")

        assert handle.pending == 0
        assert page.listeners["response"] == []
