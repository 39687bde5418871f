"""
Action primitives shared by the verifiers.

Thin wrappers over Playwright locators; each is one user gesture. Nothing
here asserts beyond what Playwright's actionability checks already do.
"""

import logging

from playwright.async_api import Locator, Page

from .selectors import sel

logger = logging.getLogger(__name__)


async def type_and_submit(field: Locator, text: str):
    """Type text into an input and press Enter."""
    await field.fill(text)
    await field.press("Enter")


async def force_click(target: Locator):
    """Click without actionability checks (covered or zero-size controls)."""
    await target.click(force=True)


def form_item(page: Page, label: str) -> Locator:
    """The ``.ant-form-item-row`` holding the filter labelled ``label``."""
    return page.locator(sel("form.row")).filter(
        has=page.locator("label", has_text=label)
    ).first


async def clear_filter(page: Page, label: str):
    """Clear a labelled filter through its close-circle icon."""
    logger.debug("Clearing filter %r", label)
    await force_click(form_item(page, label).locator(sel("form.clear")).first)


async def open_dropdown(trigger: Locator, force: bool = False):
    """Open an Ant select dropdown from its selector element."""
    await trigger.click(force=force)


async def select_option(page: Page, trigger: Locator, option_text: str, force: bool = False):
    """Open a select through ``trigger`` and pick the option with ``option_text``."""
    await open_dropdown(trigger, force=force)
    await page.locator(sel("select.option"), has_text=option_text).first.click()


async def select_filter_option(page: Page, label: str, option_text: str):
    """Pick ``option_text`` in the select of the filter labelled ``label``."""
    trigger = form_item(page, label).locator(".ant-select-selector").first
    await select_option(page, trigger, option_text, force=True)
