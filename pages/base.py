"""Base page object shared by the DemoQA pages."""

from __future__ import annotations

import logging
from typing import Any

from core.settings_manager import SettingsManager, settings as default_settings
from pages.locators import COMMON_SELECTORS, convert_to_playwright_locator

logger = logging.getLogger(__name__)


class BasePage:
    """Holds the Playwright page and the navigation every DemoQA page shares."""

    # Path under BASE_URL that identifies the page, e.g. "/webtables"
    path: str = ""
    # Left-hand menu entry under "Elements"
    menu_item: str = ""

    def __init__(self, page: Any, settings: SettingsManager | None = None) -> None:
        self.page = page
        self.settings = settings or default_settings

    def locate(self, selector: str) -> Any:
        return convert_to_playwright_locator(self.page, selector)

    @property
    def current_url(self) -> str:
        return self.page.url

    def is_at_path(self) -> bool:
        return bool(self.path) and self.path in self.current_url

    async def open_home(self) -> None:
        url = self.settings.base_url + "/"
        logger.info(f"Navigating to: {url}")
        await self.page.goto(
            url,
            wait_until="domcontentloaded",
            timeout=self.settings.get("navigation_timeout_ms"),
        )

    async def open_elements_card(self) -> None:
        await self.locate(COMMON_SELECTORS["elements_card"]).first.click()

    async def open_menu_item(self, text: str) -> None:
        await self.locate(f'span:has-text("{text}")').first.click()

    async def navigate(self) -> None:
        """Reach the page the way a user does: home → Elements → menu entry."""
        await self.open_home()
        await self.open_elements_card()
        if self.menu_item:
            await self.open_menu_item(self.menu_item)
        logger.debug(f"{type(self).__name__} reached {self.current_url}")

    async def page_title(self) -> str:
        return (await self.locate(COMMON_SELECTORS["main_header"]).text_content()) or ""
