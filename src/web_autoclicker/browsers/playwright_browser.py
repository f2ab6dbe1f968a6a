"""
Playwright Browser - launch and tear down a Playwright browser.

The recorder bridge and the replay CLI both need a real page; this wraps
the Playwright lifecycle so they only deal with ``new_page()``.
"""

from typing import Any, Optional
import logging

from web_autoclicker.config.settings import BrowserSettings
from web_autoclicker.exceptions import BrowserError, BrowserLaunchError, NavigationError

logger = logging.getLogger(__name__)


class PlaywrightBrowser:
    """
    Owns a Playwright instance, one browser and its default context.

    Example:
        >>> browser = PlaywrightBrowser(BrowserSettings(headless=False))
        >>> await browser.launch()
        >>> page = await browser.new_page("https://example.com")
        >>> await browser.close()
    """

    def __init__(self, settings: Optional[BrowserSettings] = None):
        """Initialize the browser (not launched yet)."""
        self.settings = settings or BrowserSettings()
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None

    @property
    def is_connected(self) -> bool:
        """Check if browser is connected."""
        return self._browser is not None and self._browser.is_connected()

    async def launch(self, **options: Any) -> None:
        """
        Launch the browser.

        Args:
            **options: Additional Playwright launch options
        """
        try:
            from playwright.async_api import async_playwright

            self._playwright = await async_playwright().start()
            launcher = getattr(self._playwright, self.settings.browser_type)

            launch_options = {
                "headless": self.settings.headless,
                "slow_mo": self.settings.slow_mo,
                **options,
            }
            if self.settings.channel:
                launch_options["channel"] = self.settings.channel

            self._browser = await launcher.launch(**launch_options)
            self._context = await self._browser.new_context(
                viewport={
                    "width": self.settings.viewport_width,
                    "height": self.settings.viewport_height,
                },
            )
            self._context.set_default_timeout(self.settings.timeout_ms)

            logger.info(
                f"Launched {self.settings.browser_type} browser (headless={self.settings.headless})"
            )
        except Exception as e:
            await self.close()
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e

    async def new_page(self, url: Optional[str] = None) -> Any:
        """
        Open a new page, optionally navigating to a URL.

        Args:
            url: Page to open

        Returns:
            Playwright Page object
        """
        if not self._context:
            raise BrowserError("Browser not launched. Call launch() first.")

        page = await self._context.new_page()
        if url:
            try:
                await page.goto(url)
            except Exception as e:
                raise NavigationError(f"Failed to navigate to {url}: {e}", url=url) from e
        return page

    async def close(self) -> None:
        """Close the browser and cleanup."""
        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Browser closed")

    async def __aenter__(self) -> "PlaywrightBrowser":
        await self.launch()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
