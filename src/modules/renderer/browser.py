import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from playwright.async_api import Browser, Page, Playwright, async_playwright

from src.config.settings import settings

logger = logging.getLogger(__name__)


class BrowserPool:
    """Owns the single Chromium instance shared by every rendered fetch.

    The browser is launched on the first lease and shut down when the last
    lease is returned, so no idle browser outlives the requests using it.
    Creation and teardown happen under one lock: a lease taken while another
    request is mid-navigation keeps the browser alive until both finish.
    """

    def __init__(self, headless: bool | None = None) -> None:
        self._headless = settings.browser_headless if headless is None else headless
        self._lock = asyncio.Lock()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._leases = 0

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    async def _launch(self) -> Browser:
        logger.info("Launching headless browser (headless=%s)", self._headless)
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self._headless)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise
        return self._browser

    async def _shutdown(self) -> None:
        browser, driver = self._browser, self._playwright
        self._browser = None
        self._playwright = None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if driver is not None:
                await driver.stop()
        logger.info("Headless browser closed")

    async def acquire(self) -> Browser:
        async with self._lock:
            browser = self._browser
            if browser is None or not browser.is_connected():
                if browser is not None:
                    await self._shutdown()
                browser = await self._launch()
            self._leases += 1
            return browser

    async def release(self) -> None:
        async with self._lock:
            self._leases = max(self._leases - 1, 0)
            if self._leases == 0 and self._browser is not None:
                await self._shutdown()

    @asynccontextmanager
    async def page(self, user_agent: str | None = None) -> AsyncIterator[Page]:
        browser = await self.acquire()
        try:
            page = await browser.new_page(user_agent=user_agent)
            try:
                yield page
            finally:
                await page.close()
        finally:
            await self.release()

    async def close(self) -> None:
        async with self._lock:
            self._leases = 0
            if self._browser is not None or self._playwright is not None:
                await self._shutdown()


browser_pool = BrowserPool()
