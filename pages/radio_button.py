"""Page object for the DemoQA Radio Button page."""

from __future__ import annotations

import logging

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pages.base import BasePage

logger = logging.getLogger(__name__)

OUTPUT_TIMEOUT_MS = 5000


class RadioButtonPage(BasePage):
    path = "/radio-button"
    menu_item = "Radio Button"

    selectors = {
        "output_message": ".mt-3",
    }

    @staticmethod
    def _validate_option(option: str) -> str:
        if not option or not isinstance(option, str) or not option.strip():
            raise ValueError(f"Invalid option parameter: expected non-empty string, got {option!r}")
        return option.strip().lower()

    def _radio_input(self, option: str):
        return self.page.locator(f"input#{self._validate_option(option)}Radio")

    def _radio_label(self, option: str):
        return self.page.locator(f'label[for="{self._validate_option(option)}Radio"]')

    async def select(self, option: str) -> None:
        await self._radio_label(option).click()
        logger.debug(f"Selected radio option {option!r}")

    async def is_selected(self, option: str) -> bool:
        return await self._radio_input(option).is_checked()

    async def is_disabled(self, option: str) -> bool:
        return await self._radio_input(option).is_disabled()

    async def output_message(self) -> str | None:
        """Text of the 'You have selected ...' line, or None if it never shows."""
        locator = self.page.locator(self.selectors["output_message"])
        try:
            await locator.wait_for(state="visible", timeout=OUTPUT_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            logger.debug("Radio output message not visible; no selection made")
            return None
        return await locator.text_content()

    async def is_output_visible(self) -> bool:
        return await self.page.locator(self.selectors["output_message"]).is_visible()
