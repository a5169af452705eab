from __future__ import annotations

import pytest

from pages.locators import by_aria_label, by_role, by_test_id, by_text, by_title, combine, convert_to_playwright_locator, nth_child


class _RecordingPage:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def locator(self, selector: str) -> _RecordingPage:
        self.calls.append(("locator", selector))
        return self

    def filter(self, has_text: str) -> _RecordingPage:
        self.calls.append(("filter", has_text))
        return self

    def get_by_text(self, text: str, exact: bool = False) -> _RecordingPage:
        self.calls.append(("get_by_text", text, exact))
        return self


def test_css_selector_passes_through() -> None:
    page = _RecordingPage()
    convert_to_playwright_locator(page, "  #addNewRecordButton ")
    assert page.calls == [("locator", "#addNewRecordButton")]


def test_has_text_becomes_filter() -> None:
    page = _RecordingPage()
    convert_to_playwright_locator(page, "span:has-text('Web Tables')")
    assert page.calls == [("locator", "span"), ("filter", "Web Tables")]


def test_text_selector_becomes_get_by_text() -> None:
    page = _RecordingPage()
    convert_to_playwright_locator(page, "text='Elements'")
    assert page.calls == [("get_by_text", "Elements", False)]


def test_xpath_gets_prefix() -> None:
    page = _RecordingPage()
    convert_to_playwright_locator(page, "//div[@class='rt-td']")
    assert page.calls == [("locator", "xpath=//div[@class='rt-td']")]


def test_selector_helpers() -> None:
    assert by_test_id("submit") == '[data-testid="submit"]'
    assert by_text("button", "Add") == 'button:has-text("Add")'
    assert nth_child(".rt-tr-group", 0) == ".rt-tr-group:nth-child(1)"
    assert by_aria_label("rows per page") == '[aria-label="rows per page"]'
    assert by_role("button", "Submit") == 'role=button[name="Submit"]'
    assert by_role("table") == "role=table"
    assert by_title("Delete") == '[title="Delete"]'
    assert combine(".rt-tbody", ".rt-td") == ".rt-tbody .rt-td"


@pytest.mark.parametrize(
    "call",
    [
        lambda: by_test_id(""),
        lambda: by_text("", "x"),
        lambda: nth_child("li", -1),
        lambda: by_aria_label(""),
        lambda: by_role(""),
        lambda: by_title(""),
        lambda: combine(),
    ],
)
def test_selector_helpers_reject_empty_input(call) -> None:
    with pytest.raises(ValueError):
        call()
