"""Page object for the DemoQA Web Tables page."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from typing_extensions import override

from core.exceptions import ConfigurationError, RowNotFoundError
from core.models import ColumnMap, WebTableRecord
from core.settings_manager import SettingsManager
from pages.base import BasePage
from pages.locators import by_title
from pages.table_state import RowPredicate, TableSelectors, TableStateReader
from utils.polling import poll

logger = logging.getLogger(__name__)

ACTION_TITLES = {"edit": "Edit", "delete": "Delete"}


class WebTablePage(BasePage):
    path = "/webtables"
    menu_item = "Web Tables"

    selectors = {
        "page_header": "h1:has-text('Web Tables')",
        "add_button": "#addNewRecordButton",
        "search_box": "#searchBox",
        "first_name": "#firstName",
        "last_name": "#lastName",
        "email": "#userEmail",
        "age": "#age",
        "salary": "#salary",
        "department": "#department",
        "submit_button": "#submit",
        "close_button": ".close",
        "modal": ".modal-content",
        "rows_per_page": "select[aria-label='rows per page']",
    }

    # Record field → form input selector key (fill order matches the form)
    FORM_FIELDS = ("first_name", "last_name", "email", "age", "salary", "department")

    def __init__(
        self,
        page: Any,
        settings: SettingsManager | None = None,
        column_map: ColumnMap | None = None,
        table_selectors: TableSelectors | None = None,
    ) -> None:
        super().__init__(page, settings)
        poll = self.settings.poll_settings
        self.table = TableStateReader(
            page,
            column_map,
            table_selectors,
            poll_timeout_ms=poll["timeout_ms"],
            poll_interval_ms=poll["interval_ms"],
        )

    @override
    async def navigate(self) -> None:
        await super().navigate()
        logger.info("Web Tables page opened")

    async def is_item_visible(self, item: str) -> bool:
        items = {
            "page": self.selectors["page_header"],
            "add": self.selectors["add_button"],
            "search": self.selectors["search_box"],
            "table": self.table.selectors.table,
        }
        key = item.strip().lower().removesuffix(" button").removesuffix(" box")
        selector = items.get(key)
        if selector is None:
            raise ConfigurationError(f"Item {item} is not found")
        return await self.locate(selector).first.is_visible()

    async def click_button(self, button_name: str) -> None:
        buttons = {
            "add": self.selectors["add_button"],
            "submit": self.selectors["submit_button"],
            "close": self.selectors["close_button"],
        }
        selector = buttons.get(button_name.strip().lower())
        if selector is None:
            raise ConfigurationError(f"Button with name {button_name} not recognized.")
        await self.locate(selector).click()
        logger.debug(f"Clicked {button_name} button")

    async def _fill_input(self, field_name: str, value: str) -> None:
        locator = self.locate(self.selectors[field_name])
        await locator.clear()
        if value:
            await locator.fill(value)

    async def fill_registration_form(self, record: WebTableRecord) -> None:
        for field_name in self.FORM_FIELDS:
            await self._fill_input(field_name, getattr(record, field_name))

    async def update_fields(self, fields: Mapping[str, str]) -> None:
        """Overwrite only the given record fields; empty values are skipped."""
        for field_name, value in fields.items():
            if field_name not in self.FORM_FIELDS:
                raise ConfigurationError(f"Unknown form field: {field_name}")
            if value:
                await self._fill_input(field_name, value)

    async def add_record(self, record: WebTableRecord) -> None:
        await self.click_button("add")
        await self.fill_registration_form(record)
        await self.click_button("submit")
        logger.info(f"Submitted record for {record.first_name} {record.last_name}")

    async def search_for(self, text: str) -> None:
        search_box = self.locate(self.selectors["search_box"])
        await search_box.fill("")
        await search_box.fill(text)

    async def clear_search(self) -> None:
        await self.locate(self.selectors["search_box"]).fill("")

    async def select_page_size(self, rows: int) -> None:
        await self.locate(self.selectors["rows_per_page"]).select_option(str(rows))

    async def is_form_closed(self) -> bool:
        return await self.locate(self.selectors["modal"]).is_hidden()

    async def _click_row_action(self, predicate: RowPredicate, kind: str, timeout_ms: int | None) -> None:
        title = ACTION_TITLES[kind]
        outcome = await self.table.await_rows_matching(predicate, timeout_ms)
        rows = outcome.last_observed or []
        if not rows:
            raise RowNotFoundError(f"No row matches {predicate!r} ({outcome.describe()})", predicate=predicate)
        if len(rows) > 1:
            raise RowNotFoundError(
                f"{len(rows)} rows match {predicate!r}; refusing to click {title} on an ambiguous row",
                predicate=predicate,
                match_count=len(rows),
            )
        await rows[0].handle.locator(by_title(title)).click()
        logger.info(f"Clicked {title} for row {rows[0].index} matching {predicate!r}")

    async def click_edit_for_row(self, predicate: RowPredicate, timeout_ms: int | None = None) -> None:
        await self._click_row_action(predicate, "edit", timeout_ms)

    async def click_delete_for_row(self, predicate: RowPredicate, timeout_ms: int | None = None) -> None:
        await self._click_row_action(predicate, "delete", timeout_ms)

    async def each_data_row_has_action(self, kind: str) -> bool:
        title = ACTION_TITLES.get(kind.strip().lower())
        if title is None:
            raise ConfigurationError(f"Unknown row action: {kind}")
        for row in await self.table.read_data_rows():
            if not await row.handle.locator(by_title(title)).is_visible():
                return False
        return True

    async def delete_all_records(self, max_records: int = 100) -> int:
        """Click every Delete button until none remain; returns how many were clicked."""
        delete_buttons = self.locate(by_title("Delete"))
        deleted = 0
        remaining = await delete_buttons.count()
        while remaining > 0 and deleted < max_records:
            before = remaining
            await delete_buttons.first.click()
            deleted += 1
            outcome = await poll(
                delete_buttons.count,
                lambda count: count < before,
                timeout_ms=self.table.poll_timeout_ms,
                interval_ms=self.table.poll_interval_ms,
                expected=f"fewer than {before} Delete buttons",
                description="Delete buttons after click",
            )
            remaining = outcome.last_observed
            if not outcome:
                logger.warning(f"Delete click did not remove a row ({outcome.describe()})")
                break
        if remaining > 0 and deleted >= max_records:
            logger.warning(f"Stopped after {max_records} deletions with {remaining} Delete buttons still shown")
        logger.info(f"Deleted {deleted} records")
        return deleted
