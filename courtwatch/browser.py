import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright

from . import config

logger = logging.getLogger(__name__)


class BrowserSession:
    """One headless Chromium process shared by every page of a scrape run."""

    def __init__(self, headless: bool = config.HEADLESS, args: Optional[list[str]] = None):
        self.headless = headless
        self.args = args if args is not None else config.BROWSER_ARGS
        self._playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self):
        self._playwright = await async_playwright().start()
        try:
            self.browser = await self._playwright.chromium.launch(
                headless=self.headless, args=self.args
            )
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise
        logger.debug("Browser launched (headless=%s)", self.headless)

    async def close(self):
        try:
            if self.browser is not None:
                await self.browser.close()
        finally:
            self.browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
        logger.debug("Browser closed")

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Open a page that is closed again on every exit path."""
        if self.browser is None:
            raise RuntimeError("Browser session is not started")
        page = await self.browser.new_page()
        try:
            yield page
        finally:
            await page.close()
