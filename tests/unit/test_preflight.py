"""
Tests for the preflight reachability check.
"""

import httpx
import pytest

from crm_browser_tests.errors import AppUnreachableError
from crm_browser_tests.preflight import check_reachable


def transport_answering(status: int) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(status))


class TestCheckReachable:
    """Any non-5xx answer counts as reachable."""

    async def test_ok(self):
        assert await check_reachable("http://crm.test/signin", transport=transport_answering(200)) == 200

    async def test_unauthorized_still_reachable(self):
        assert await check_reachable("http://crm.test/signin", transport=transport_answering(401)) == 401

    async def test_server_error(self):
        with pytest.raises(AppUnreachableError, match="503"):
            await check_reachable("http://crm.test/signin", transport=transport_answering(503))

    async def test_connection_refused(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(AppUnreachableError, match="not reachable"):
            await check_reachable("http://crm.test/signin", transport=httpx.MockTransport(refuse))
