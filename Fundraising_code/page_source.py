# page_source.py
"""
Page source backed by a Playwright browser page.

The extractor and the pass orchestrator only talk to this wrapper, so tests
can swap in a fake object exposing the same methods.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from playwright.sync_api import Page, sync_playwright

logger = logging.getLogger(__name__)

NAVIGATION_TIMEOUT_MS = 60000
ACTIVE_PAGER_SELECTOR = ".el-pagination .el-pager li.number.is-active, .el-pagination .el-pager li.number.active"


class PlaywrightPageSource:
    def __init__(self, page: Page):
        self.page = page

    @property
    def url(self) -> str:
        return self.page.url

    def navigate(self, url: str) -> None:
        logger.info("Navigating to %s", url)
        self.page.goto(url, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)

    def wait_for(self, selector: str, timeout: Optional[int] = None, state: str = "visible") -> None:
        self.page.wait_for_selector(selector, timeout=timeout, state=state)

    def click(self, selector: str) -> None:
        self.page.click(selector)

    def fill(self, selector: str, value: str) -> None:
        self.page.fill(selector, value)

    def evaluate(self, script: str, arg: Any = None) -> Any:
        return self.page.evaluate(script, arg)

    def text_content(self, selector: str) -> Optional[str]:
        return self.page.locator(selector).first.text_content()

    def settle(self, ms: int) -> None:
        self.page.wait_for_timeout(ms)

    def current_page_number(self) -> Optional[int]:
        """Number shown on the active pager item, or None when there is none."""
        active = self.page.locator(ACTIVE_PAGER_SELECTOR)
        if active.count() == 0:
            return None
        text = (active.first.text_content() or "").strip()
        return int(text) if text.isdigit() else None


@contextmanager
def open_page_source(headless: bool = True) -> Iterator[PlaywrightPageSource]:
    """Launch Chromium with a fresh context and page; always close the browser."""
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=headless)
        try:
            context = browser.new_context()
            yield PlaywrightPageSource(context.new_page())
        finally:
            browser.close()
            logger.info("Browser closed")
