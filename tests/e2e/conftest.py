"""
E2E Test Suite - Shared Fixtures

Real headless Chromium against the fake CRM served by ``fake_crm``.
Tests are skipped when Chromium cannot be launched.
"""

import pytest
from playwright.async_api import Browser, async_playwright
from playwright.async_api import Error as PlaywrightError

from crm_browser_tests.config import Config

from .fake_crm import ORIGIN, FakeCrm


@pytest.fixture
def config(tmp_path) -> Config:
    """Config pointing at the fake application."""
    return Config(
        base_url=ORIGIN,
        email="qa@example.com",
        password="secret",
        max_retries=1,
        session_cache_path=tmp_path / "session.json",
        downloads_dir=tmp_path / "downloads",
    )


@pytest.fixture
def fake_app() -> FakeCrm:
    return FakeCrm()


@pytest.fixture
async def browser():
    """Create a browser instance."""
    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(headless=True)
        except PlaywrightError as e:
            pytest.skip(f"Chromium not available: {e}")
        yield browser
        await browser.close()


@pytest.fixture
async def page(browser: Browser, fake_app: FakeCrm, config: Config):
    """Create a new routed page for each test."""
    context = await browser.new_context(viewport=config.viewport, accept_downloads=True)
    await fake_app.install(context)
    page = await context.new_page()
    yield page
    await context.close()
