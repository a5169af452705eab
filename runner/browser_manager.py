"""Browser lifecycle management for feature runs."""

from __future__ import annotations

import logging
from typing import Any

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from core.settings_manager import SettingsManager, settings as default_settings

logger = logging.getLogger(__name__)


class BrowserManager:
    """Manages browser lifecycle: one browser per run, one context and page per scenario."""

    def __init__(self, settings: SettingsManager | None = None, headless: bool | None = None) -> None:
        self.settings = settings or default_settings
        browser_settings = self.settings.browser_settings
        self.browser_name: str = browser_settings["browser"]
        self.headless = browser_settings["headless"] if headless is None else headless
        self.viewport: dict[str, Any] = browser_settings["viewport"]
        self.default_timeout_ms: int = browser_settings["default_timeout_ms"]
        self.navigation_timeout_ms: int = browser_settings["navigation_timeout_ms"]
        self._playwright: Playwright | None = None
        self.browser: Browser | None = None
        self.context: BrowserContext | None = None
        self._page: Page | None = None

    async def start(self) -> Browser:
        """Start Playwright and launch the configured browser."""
        self._playwright = await async_playwright().start()
        launcher = getattr(self._playwright, self.browser_name)
        self.browser = await launcher.launch(headless=self.headless)
        logger.info(f"Browser initialized ({self.browser_name}, headless={self.headless})", extra={"browser": self.browser_name})
        return self.browser

    async def new_page(self) -> Page:
        """Open a fresh, isolated context and page for one scenario."""
        if not self.browser:
            raise RuntimeError("Browser not initialized")

        self.context = await self.browser.new_context(viewport=self.viewport)
        self.context.set_default_timeout(self.default_timeout_ms)
        self.context.set_default_navigation_timeout(self.navigation_timeout_ms)
        self._page = await self.context.new_page()
        return self._page

    async def close_page(self) -> None:
        """Close the scenario page and its context, whatever state they are in."""
        try:
            if self._page:
                await self._page.close()
        finally:
            self._page = None
            if self.context:
                await self.context.close()
                self.context = None

    async def quit(self) -> None:
        """Quit browser and stop Playwright."""
        try:
            if self.browser:
                await self.browser.close()
                self.browser = None
                logger.info("Browser quit")
        finally:
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None

    @property
    def page(self) -> Page:
        """Get current scenario page."""
        if not self._page:
            raise RuntimeError("Page not initialized. Call new_page() first.")
        return self._page

    @property
    def current_url(self) -> str:
        return self.page.url
