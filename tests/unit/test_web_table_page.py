from __future__ import annotations

import asyncio
import logging

import pytest

from core.exceptions import ConfigurationError, RowNotFoundError
from core.models import WebTableRecord
from core.settings_manager import SettingsManager
from pages.web_table import WebTablePage

DELETE_BUTTON = '[title="Delete"]'


@pytest.fixture
def fast_settings():
    manager = SettingsManager(use_dotenv=False)
    manager.set("poll_timeout_ms", 50)
    manager.set("poll_interval_ms", 5)
    return manager


def test_reader_uses_poll_settings(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    assert page.table.poll_timeout_ms == 50
    assert page.table.poll_interval_ms == 5


def test_add_record_fills_form_in_order(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)
    record = WebTableRecord(first_name="John", last_name="Doe", email="test@gmail.com", age="20", salary="20", department="Test")

    asyncio.run(page.add_record(record))

    fills = [action[1:] for action in fake_page.actions if action[0] == "fill"]
    assert fills == [
        ("#firstName", "John"),
        ("#lastName", "Doe"),
        ("#userEmail", "test@gmail.com"),
        ("#age", "20"),
        ("#salary", "20"),
        ("#department", "Test"),
    ]
    assert fake_page.actions[0] == ("click", "#addNewRecordButton")
    assert fake_page.actions[-1] == ("click", "#submit")


def test_empty_fields_are_cleared_but_not_filled(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    asyncio.run(page.fill_registration_form(WebTableRecord(first_name="John")))

    assert ("clear", "#lastName") in fake_page.actions
    assert not any(action[0] == "fill" and action[1] == "#lastName" for action in fake_page.actions)


def test_update_fields_rejects_unknown_field(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    with pytest.raises(ConfigurationError):
        asyncio.run(page.update_fields({"phone": "555"}))


def test_click_edit_targets_the_matching_row(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    asyncio.run(page.click_edit_for_row("Alden"))

    assert ("click", 'row[Alden] [title="Edit"]') in fake_page.actions


def test_click_delete_on_ambiguous_row_refuses(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    with pytest.raises(RowNotFoundError) as exc_info:
        asyncio.run(page.click_delete_for_row("ierra"))

    assert exc_info.value.match_count == 2
    assert not any(action[0] == "click" for action in fake_page.actions)


def test_click_delete_on_missing_row(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    with pytest.raises(RowNotFoundError, match="No row matches 'Nobody'"):
        asyncio.run(page.click_delete_for_row("Nobody"))


def test_is_item_visible_accepts_display_names(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)
    fake_page.visible["#searchBox"] = False

    assert asyncio.run(page.is_item_visible("add button")) is True
    assert asyncio.run(page.is_item_visible("Search box")) is False
    with pytest.raises(ConfigurationError):
        asyncio.run(page.is_item_visible("footer"))


def test_click_button_unknown(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    with pytest.raises(ConfigurationError):
        asyncio.run(page.click_button("Cancel"))


def test_each_data_row_has_action(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    assert asyncio.run(page.each_data_row_has_action("Delete")) is True

    fake_page.visible['row[Kierra] [title="Delete"]'] = False
    assert asyncio.run(page.each_data_row_has_action("delete")) is False


def _delete_buttons_left(fake_page, total: int):
    return lambda: max(total - sum(1 for action in fake_page.actions if action == ("click", DELETE_BUTTON)), 0)


def test_delete_all_records_clears_every_row(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)
    fake_page.counts[DELETE_BUTTON] = _delete_buttons_left(fake_page, 3)

    assert asyncio.run(page.delete_all_records()) == 3


def test_delete_all_records_warns_when_capped(fake_page, fast_settings, caplog) -> None:
    page = WebTablePage(fake_page, fast_settings)
    fake_page.counts[DELETE_BUTTON] = _delete_buttons_left(fake_page, 10)

    with caplog.at_level(logging.WARNING, logger="pages.web_table"):
        assert asyncio.run(page.delete_all_records(max_records=5)) == 5

    assert any("Stopped after 5 deletions with 5 Delete buttons" in record.getMessage() for record in caplog.records)


def test_delete_all_records_stops_when_a_row_does_not_go(fake_page, fast_settings, caplog) -> None:
    page = WebTablePage(fake_page, fast_settings)
    fake_page.counts[DELETE_BUTTON] = 3

    with caplog.at_level(logging.WARNING, logger="pages.web_table"):
        assert asyncio.run(page.delete_all_records(max_records=5)) == 1

    assert any("did not remove a row" in record.getMessage() for record in caplog.records)


def test_search_for_replaces_previous_term(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    asyncio.run(page.search_for("Kierra"))

    assert fake_page.actions == [("fill", "#searchBox", ""), ("fill", "#searchBox", "Kierra")]


def test_navigate_goes_through_elements_menu(fake_page, fast_settings) -> None:
    page = WebTablePage(fake_page, fast_settings)

    asyncio.run(page.navigate())

    assert fake_page.goto_calls[0][0] == "https://demoqa.com/"
    assert fake_page.goto_calls[0][1]["wait_until"] == "domcontentloaded"
    clicks = [action[1] for action in fake_page.actions if action[0] == "click"]
    assert clicks == ["div.card:has-text(Elements)", "span:has-text(Web Tables)"]
