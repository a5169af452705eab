"""Page object for the DemoQA Text Box form."""

from __future__ import annotations

import logging

from core.exceptions import ConfigurationError
from core.models import TextBoxFormData
from pages.base import BasePage
from pages.locators import COMMON_SELECTORS

logger = logging.getLogger(__name__)


class TextBoxPage(BasePage):
    path = "/text-box"
    menu_item = "Text Box"

    # Selectors - centralized for easy maintenance
    selectors = {
        # Form fields
        "full_name": "#userName",
        "email": "#userEmail",
        "current_address": "#currentAddress",
        "permanent_address": "#permanentAddress",
        "submit_button": "#submit",
        # Output section
        "output": "#output",
        "output_full_name": "#output #name",
        "output_email": "#output #email",
        "output_current_address": "#output #currentAddress",
        "output_permanent_address": "#output #permanentAddress",
        # Page elements
        "form": "#userForm",
    }

    # Display names used by the feature files
    FIELD_NAMES = {
        "full name": "full_name",
        "name": "full_name",
        "email": "email",
        "current address": "current_address",
        "permanent address": "permanent_address",
    }

    def _field_key(self, display_name: str) -> str:
        key = self.FIELD_NAMES.get(display_name.strip().lower())
        if key is None:
            raise ConfigurationError(f"Unknown Text Box field: {display_name}")
        return key

    async def fill_field(self, display_name: str, value: str) -> None:
        locator = self.locate(self.selectors[self._field_key(display_name)])
        await locator.clear()
        await locator.fill(value)

    async def fill_full_name(self, full_name: str) -> None:
        await self.fill_field("full name", full_name)

    async def fill_email(self, email: str) -> None:
        await self.fill_field("email", email)

    async def fill_current_address(self, address: str) -> None:
        await self.fill_field("current address", address)

    async def fill_permanent_address(self, address: str) -> None:
        await self.fill_field("permanent address", address)

    async def fill_complete_form(self, data: TextBoxFormData) -> None:
        await self.fill_full_name(data.full_name)
        await self.fill_email(data.email)
        await self.fill_current_address(data.current_address)
        await self.fill_permanent_address(data.permanent_address)

    async def click_submit(self) -> None:
        await self.locate(self.selectors["submit_button"]).click()

    async def submit_form(self, data: TextBoxFormData) -> None:
        await self.fill_complete_form(data)
        await self.click_submit()
        logger.info(f"Submitted Text Box form for {data.full_name!r}")

    async def is_output_displayed(self) -> bool:
        return await self.locate(self.selectors["output"]).is_visible()

    async def output_text(self) -> str:
        return (await self.locate(self.selectors["output"]).text_content()) or ""

    async def output_value(self, display_name: str) -> str:
        """Text of one output line, e.g. 'Name:John Doe'; '' when the line is absent."""
        locator = self.locate(self.selectors[f"output_{self._field_key(display_name)}"])
        if await locator.count() == 0:
            return ""
        return (await locator.text_content()) or ""

    async def is_form_loaded(self) -> bool:
        return await self.locate(self.selectors["form"]).is_visible()

    async def is_field_empty(self, display_name: str) -> bool:
        value = await self.locate(self.selectors[self._field_key(display_name)]).input_value()
        return value == ""

    async def clear_all_fields(self) -> None:
        for key in ("full_name", "email", "current_address", "permanent_address"):
            await self.locate(self.selectors[key]).clear()

    async def email_validation_state(self) -> str:
        """Return "invalid" while the email input carries the validation error class."""
        flagged = self.locate(self.selectors["email"] + COMMON_SELECTORS["validation_error"])
        return "invalid" if await flagged.count() > 0 else "valid"
