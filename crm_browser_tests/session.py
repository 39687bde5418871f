"""
Login Session
=============
Explicit, cached authentication for a suite run.

``SessionContext.acquire`` logs in once (or restores the storage state a
previous run cached on disk) and every test attempt then gets a fresh
browser context seeded with that state through ``new_context``.
A cached login is reused only when it was saved for the configured account,
is younger than ``session_max_age``, holds no expired cookie and still opens
the dashboard. ``invalidate`` forgets the cached login; ``release`` closes
every context the session opened.
"""

import json
import logging
import re
import time
from typing import List, Optional
from urllib.parse import urlparse

from playwright.async_api import Browser, BrowserContext, Page, expect
from playwright.async_api import Error as PlaywrightError

from .config import Config
from .errors import LoginError
from .selectors import sel
from .waits import Intercept, WaitHandle

logger = logging.getLogger(__name__)

LOGIN = Intercept("login", "**/login", method="POST")

SIGNIN_TIMEOUT = 150000
DASHBOARD_TIMEOUT = 35000

DASHBOARD_PATH = "/dashboard_module/Dashboard"
EMAIL_INPUT = 'input[placeholder="Email address"]'


def _path_is(path: str):
    return lambda url: urlparse(url).path == path


async def login(page: Page, config: Config):
    """
    Sign in through the UI and land on the dashboard.

    Accounts with two-factor enabled are sent to the OTP page, where the
    test instance accepts an all-zero code.

    Raises:
        LoginError: the dashboard was not reached.
    """
    handle = WaitHandle(LOGIN, timeout_ms=config.login_timeout).attach(page)
    try:
        await page.goto(config.page_url("/signin"), timeout=SIGNIN_TIMEOUT)

        await page.locator(EMAIL_INPUT).fill(config.email)
        await page.locator('input[id="password"]').fill(config.password)
        await page.locator("button").filter(has_text=re.compile("log in", re.I)).first.click()

        response = await handle.wait()
        if response.status == 200:
            await expect(page.locator(sel("page.title")).first).to_contain_text(
                "Dashboard", timeout=DASHBOARD_TIMEOUT
            )
            logger.info("Logged in as %s", config.email)
            return

        logger.info("Login answered %s - completing OTP step", response.status)
        await page.wait_for_url(_path_is("/Otp"), timeout=DASHBOARD_TIMEOUT)
        await expect(page.get_by_text("Enter your verification code")).to_be_visible(
            timeout=DASHBOARD_TIMEOUT
        )
        code_inputs = page.locator(".ant-input")
        await expect(code_inputs.first).to_be_visible(timeout=DASHBOARD_TIMEOUT)
        for code_input in await code_inputs.all():
            await code_input.press_sequentially("0")
        await page.wait_for_url(_path_is(DASHBOARD_PATH), timeout=DASHBOARD_TIMEOUT)
        logger.info("Logged in as %s (OTP)", config.email)
    except (AssertionError, PlaywrightError) as e:
        raise LoginError(f"Login failed for {config.email or '<no email>'}: {e}") from e
    finally:
        handle.detach()


async def is_logged_in(page: Page, config: Config) -> bool:
    """Open the dashboard and report whether it rendered or sign-in was asked for."""
    dashboard = page.locator(sel("page.title")).filter(has_text="Dashboard")
    signin = page.locator(EMAIL_INPUT)

    await page.goto(config.page_url(DASHBOARD_PATH), timeout=config.page_load_timeout)
    await expect(dashboard.or_(signin).first).to_be_visible(timeout=DASHBOARD_TIMEOUT)
    return await dashboard.count() > 0


class SessionContext:
    """Authenticated browser state shared by every suite of a run."""

    def __init__(self, browser: Browser, config: Config):
        self.browser = browser
        self.config = config
        self.storage_state: Optional[dict] = None
        self._contexts: List[BrowserContext] = []

    @property
    def acquired(self) -> bool:
        return self.storage_state is not None

    def _context_args(self) -> dict:
        return {
            "viewport": self.config.viewport,
            "ignore_https_errors": True,
            "accept_downloads": True,
        }

    def _stale_reason(self, cached) -> Optional[str]:
        """Why a cache entry cannot be reused, or None when it can."""
        if not isinstance(cached, dict) or not isinstance(cached.get("storage_state"), dict):
            return "unreadable"
        if cached.get("email") != self.config.email:
            return "saved for another account"
        now = time.time()
        if now - cached.get("saved_at", 0) > self.config.session_max_age:
            return "older than session_max_age"
        for cookie in cached["storage_state"].get("cookies", []):
            # -1 marks a browser-session cookie
            if 0 < cookie.get("expires", -1) <= now:
                return f"cookie {cookie.get('name')!r} expired"
        return None

    def _read_cache(self) -> Optional[dict]:
        path = self.config.session_cache_path
        if not path.exists():
            return None
        try:
            cached = json.loads(path.read_text())
        except json.JSONDecodeError:
            cached = None

        reason = self._stale_reason(cached)
        if reason:
            logger.info("Discarding session cache %s: %s", path, reason)
            path.unlink(missing_ok=True)
            return None
        return cached["storage_state"]

    def _write_cache(self):
        path = self.config.session_cache_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({
            "email": self.config.email,
            "saved_at": time.time(),
            "storage_state": self.storage_state,
        }))
        logger.debug("Cached login session at %s", path)

    async def _still_logged_in(self, state: dict) -> bool:
        context = await self.browser.new_context(storage_state=state, **self._context_args())
        try:
            page = await context.new_page()
            return await is_logged_in(page, self.config)
        except (AssertionError, PlaywrightError) as e:
            logger.warning("Cached session could not be checked, logging in again: %s", e)
            return False
        finally:
            await context.close()

    async def acquire(self, fresh: bool = False) -> "SessionContext":
        """Log in once, or restore a cached login; ``fresh`` forces a new login."""
        if fresh:
            self.invalidate()
        if self.acquired:
            return self

        cached = self._read_cache()
        if cached is not None:
            if await self._still_logged_in(cached):
                logger.info("Restored login session from %s", self.config.session_cache_path)
                self.storage_state = cached
                return self
            logger.info("Cached login session was signed out, logging in again")
            self.invalidate()

        context = await self.browser.new_context(**self._context_args())
        try:
            page = await context.new_page()
            await login(page, self.config)
            self.storage_state = await context.storage_state()
        finally:
            await context.close()

        self._write_cache()
        return self

    async def new_context(self) -> BrowserContext:
        """A fresh browser context carrying the authenticated state."""
        if not self.acquired:
            raise LoginError("Session not acquired - call acquire() first")
        context = await self.browser.new_context(
            storage_state=self.storage_state, **self._context_args()
        )
        self._contexts.append(context)
        return context

    async def close_context(self, context: BrowserContext):
        if context in self._contexts:
            self._contexts.remove(context)
        await context.close()

    def invalidate(self):
        """Forget the login, in memory and on disk."""
        self.storage_state = None
        self.config.session_cache_path.unlink(missing_ok=True)

    async def release(self):
        """Close every context this session opened."""
        contexts, self._contexts = self._contexts, []
        for context in contexts:
            await context.close()
