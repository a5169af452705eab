"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

DEFAULT_ROWS = [
    ["Cierra", "Vega", "39", "cierra@example.com", "10000", "Insurance", ""],
    ["Alden", "Cantrell", "45", "alden@example.com", "12000", "Compliance", ""],
    ["Kierra", "Gentry", "29", "kierra@example.com", "2000", "Legal", ""],
]
PADDING_ROW = [" ", " ", "", "", "", "", ""]
HEADERS = ["First Name", "Last Name", "Age", "Email", "Salary", "Department", "Action"]


def pytest_configure(config):
    """Configure pytest with required path modifications."""
    project_root = Path(__file__).resolve().parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


def _resolve(value: Any) -> Any:
    """Fake page state may be a callable, re-evaluated on every read."""
    return value() if callable(value) else value


class FakeLocator:
    """Minimal stand-in for a Playwright locator; interactions are recorded on the page."""

    def __init__(self, page: FakePage, selector: str, *, texts: list[str] | None = None, items: list[Any] | None = None):
        self.page = page
        self.selector = selector
        self.texts = texts if texts is not None else []
        self.items = items if items is not None else []

    @property
    def first(self) -> FakeLocator:
        return self

    def filter(self, has_text: str) -> FakeLocator:
        return FakeLocator(self.page, f"{self.selector}:has-text({has_text})")

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self.page, f"{self.selector} {selector}")

    async def all(self) -> list[Any]:
        return list(self.items)

    async def all_inner_texts(self) -> list[str]:
        return list(self.texts)

    async def click(self) -> None:
        self.page.actions.append(("click", self.selector))

    async def fill(self, value: str) -> None:
        self.page.actions.append(("fill", self.selector, value))

    async def clear(self) -> None:
        self.page.actions.append(("clear", self.selector))

    async def select_option(self, value: str) -> None:
        self.page.actions.append(("select", self.selector, value))

    async def is_visible(self) -> bool:
        return _resolve(self.page.visible.get(self.selector, True))

    async def is_hidden(self) -> bool:
        return not await self.is_visible()

    async def count(self) -> int:
        return _resolve(self.page.counts.get(self.selector, 1))

    async def text_content(self) -> str | None:
        return self.page.text.get(self.selector)


class FakeRowHandle:
    def __init__(self, page: FakePage, cells: list[str]):
        self.page = page
        self.cells = cells

    def locator(self, selector: str) -> FakeLocator:
        if selector == ".rt-td":
            return FakeLocator(self.page, selector, texts=self.cells)
        return FakeLocator(self.page, f"row[{self.cells[0]}] {selector}")


class FakePage:
    """
    Page double backed by a sequence of table snapshots.

    Each read of the row selector advances to the next snapshot and the last
    one sticks, so a table that settles after N reads is easy to describe.
    """

    url = "https://demoqa.com/webtables"

    def __init__(self, *snapshots: list[list[str]], headers: list[str] | None = None):
        self.snapshots = [list(snapshot) for snapshot in snapshots] or [[]]
        self.headers = headers if headers is not None else list(HEADERS)
        self.row_reads = 0
        self.read_error: Exception | None = None
        self.actions: list[tuple] = []
        self.visible: dict[str, Any] = {}
        self.counts: dict[str, Any] = {}
        self.text: dict[str, str] = {}
        self.goto_calls: list[tuple[str, dict[str, Any]]] = []

    def current_snapshot(self) -> list[list[str]]:
        return self.snapshots[min(self.row_reads, len(self.snapshots)) - 1]

    def locator(self, selector: str) -> FakeLocator:
        if selector == ".rt-tbody .rt-tr-group":
            if self.read_error is not None:
                raise self.read_error
            self.row_reads += 1
            handles = [FakeRowHandle(self, cells) for cells in self.current_snapshot()]
            return FakeLocator(self, selector, items=handles)
        if selector == ".rt-thead .rt-th":
            return FakeLocator(self, selector, texts=self.headers)
        return FakeLocator(self, selector)

    def get_by_text(self, text: str, exact: bool = False) -> FakeLocator:
        return FakeLocator(self, f"text={text}")

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.goto_calls.append((url, kwargs))
        self.url = url


@pytest.fixture
def default_rows() -> list[list[str]]:
    return [list(row) for row in DEFAULT_ROWS] + [list(PADDING_ROW) for _ in range(7)]


@pytest.fixture
def fake_page(default_rows) -> FakePage:
    return FakePage(default_rows)


@pytest.fixture
def make_page():
    return FakePage
