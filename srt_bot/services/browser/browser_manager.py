"""Browser lifecycle for a reservation run."""

from typing import Any, Optional

from loguru import logger
from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from ...constants import Delays, Timeouts
from ...core.config.settings import SRTSettings
from .adapter import PlaywrightPageAdapter, translate_errors


class BrowserManager:
    """
    Owns the single automation session of a run.

    The Playwright instance, browser, context and page are acquired on
    ``__aenter__`` and released exactly once on ``__aexit__``, whichever
    way the run ends.
    """

    def __init__(self, settings: SRTSettings):
        """
        Initialize browser manager.

        Args:
            settings: Application settings (headless flag, reservation URL)
        """
        self.settings = settings
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None
        self._closed = False

    async def start(self) -> PlaywrightPageAdapter:
        """Launch Chromium, open the search page and return its adapter."""
        if self.page is not None:
            logger.warning("Browser already started")
            return PlaywrightPageAdapter(self.page)

        logger.info("Starting browser...")
        try:
            async with translate_errors("launch browser"):
                self.playwright = await async_playwright().start()
                self.browser = await self.playwright.chromium.launch(
                    headless=self.settings.headless,
                    args=["--disable-blink-features=AutomationControlled"],
                )
                self.context = await self.browser.new_context(
                    viewport={"width": 1280, "height": 900},
                    locale="ko-KR",
                )
                self.page = await self.context.new_page()
                self.page.set_default_timeout(Timeouts.ACTION)

            async with translate_errors("open reservation page"):
                await self.page.goto(self.settings.reservation_url, timeout=Timeouts.PAGE_LOAD)
            await self.page.wait_for_timeout(Delays.AFTER_BROWSER_START * 1000)
        except Exception:
            # Clean up partial resources on error
            await self.close()
            raise

        logger.info("Browser started successfully")
        return PlaywrightPageAdapter(self.page)

    async def close(self) -> None:
        """Clean up browser resources. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        for name, closer in (
            ("context", self.context.close if self.context else None),
            ("browser", self.browser.close if self.browser else None),
            ("playwright", self.playwright.stop if self.playwright else None),
        ):
            if closer is None:
                continue
            try:
                await closer()
                logger.debug(f"Browser {name} closed")
            except Exception as e:
                logger.warning(f"Error closing browser {name}: {e}")

        self.page = None
        self.context = None
        self.browser = None
        self.playwright = None
        logger.info("Browser resources cleaned up")

    async def __aenter__(self) -> PlaywrightPageAdapter:
        """Async context manager entry."""
        return await self.start()

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
