"""
TableStateReader - read/reconcile layer over the Web Tables grid.

Translates the live, asynchronously-updating grid into structured records and
locates rows and cells by content. Nothing is cached: every read re-queries the
page, and observations of mutated state go through the poll primitive.

The reader never asserts. It returns data, booleans and PollOutcome objects;
deciding what is a failure is left to the step layer.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from core.exceptions import MalformedPredicateError, RowNotFoundError
from core.models import ColumnMap, WebTableRecord
from utils.polling import DEFAULT_INTERVAL_MS, DEFAULT_TIMEOUT_MS, PollOutcome, poll

logger = logging.getLogger(__name__)

# Column name -> expected substring, or a bare string matched against any cell
RowPredicate = Union[Mapping[str, str], str]


@dataclass(frozen=True)
class TableSelectors:
    """CSS selectors describing the rendered grid."""

    table: str = ".rt-table"
    rows: str = ".rt-tbody .rt-tr-group"
    cells: str = ".rt-td"
    header_cells: str = ".rt-thead .rt-th"


@dataclass(frozen=True)
class Row:
    """One rendered row: its driver handle, on-screen index and cell texts."""

    handle: Any
    index: int
    cells: tuple[str, ...]

    def cell(self, position: int) -> str:
        """Trimmed text at a 1-based column position ('' if the row is short)."""
        if 1 <= position <= len(self.cells):
            return self.cells[position - 1].strip()
        return ""

    @property
    def is_data_bearing(self) -> bool:
        return any(text.strip() for text in self.cells)

    def __repr__(self) -> str:
        return f"Row(index={self.index}, cells={[text.strip() for text in self.cells]!r})"


class TableStateReader:
    def __init__(
        self,
        page: Any,
        column_map: ColumnMap | None = None,
        selectors: TableSelectors | None = None,
        *,
        poll_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        poll_interval_ms: int = DEFAULT_INTERVAL_MS,
    ) -> None:
        """
        Args:
            page: Playwright page (anything exposing locator())
            column_map: Column name → position mapping (DemoQA default if None)
            selectors: Grid selectors (DemoQA react-table default if None)
            poll_timeout_ms: Default budget for the await_* operations
            poll_interval_ms: Fixed interval between poll attempts
        """
        self.page = page
        self.column_map = column_map or ColumnMap()
        self.selectors = selectors or TableSelectors()
        self.poll_timeout_ms = poll_timeout_ms
        self.poll_interval_ms = poll_interval_ms

    # ============================================
    # Column mapping
    # ============================================

    def get_column_index(self, name: str) -> int:
        return self.column_map.index_of(name)

    async def read_header_names(self) -> list[str]:
        texts = await self.page.locator(self.selectors.header_cells).all_inner_texts()
        return [text.strip() for text in texts]

    # ============================================
    # Row reads
    # ============================================

    async def _read_rows(self) -> list[Row]:
        handles = await self.page.locator(self.selectors.rows).all()
        rows = []
        for index, handle in enumerate(handles):
            cells = await handle.locator(self.selectors.cells).all_inner_texts()
            rows.append(Row(handle=handle, index=index, cells=tuple(cells)))
        return rows

    async def read_data_rows(self) -> list[Row]:
        return [row for row in await self._read_rows() if row.is_data_bearing]

    async def count_data_rows(self) -> int:
        count = len(await self.read_data_rows())
        logger.debug(f"Data-bearing rows: {count}")
        return count

    def _compile_predicate(self, predicate: RowPredicate) -> list[tuple[int | None, str]]:
        """Validate a predicate up front; unknown columns fail before any page read."""
        if isinstance(predicate, str):
            if not predicate:
                raise MalformedPredicateError("Row text predicate must be a non-empty string")
            return [(None, predicate)]

        if not isinstance(predicate, Mapping) or not predicate:
            raise MalformedPredicateError(f"Row predicate must be a non-empty mapping or string, got {predicate!r}")

        compiled: list[tuple[int | None, str]] = []
        for column, expected in predicate.items():
            if not isinstance(expected, str) or not expected:
                raise MalformedPredicateError(f"Expected value for column '{column}' must be a non-empty string, got {expected!r}")
            compiled.append((self.column_map.index_of(column), expected))
        return compiled

    @staticmethod
    def _row_matches(row: Row, compiled: list[tuple[int | None, str]]) -> bool:
        for position, expected in compiled:
            if position is None:
                if not any(expected in text for text in row.cells):
                    return False
            elif expected not in row.cell(position):
                return False
        return True

    async def find_rows_matching(self, predicate: RowPredicate) -> list[Row]:
        """All data-bearing rows matching the predicate, in on-screen order (may be empty)."""
        compiled = self._compile_predicate(predicate)
        matches = [row for row in await self.read_data_rows() if self._row_matches(row, compiled)]
        logger.debug(f"Rows matching {predicate!r}: {len(matches)}")
        return matches

    async def is_row_present(self, predicate: RowPredicate) -> bool:
        return bool(await self.find_rows_matching(predicate))

    async def count_rows_containing(self, text: str) -> int:
        return len(await self.find_rows_matching(text))

    async def table_contains(self, text: str) -> bool:
        """True if any cell of any data-bearing row contains text."""
        return await self.is_row_present(text)

    # ============================================
    # Cell reads
    # ============================================

    async def get_cell_values(self, predicate: RowPredicate, column: str) -> list[str]:
        position = self.get_column_index(column)
        return [row.cell(position) for row in await self.find_rows_matching(predicate)]

    async def get_cell_value(self, predicate: RowPredicate, column: str, *, allow_multiple: bool = False) -> str:
        """
        Trimmed text of one cell, resolving the row by content.

        Raises:
            UnknownColumnError: column (or a predicate column) is not mapped
            RowNotFoundError: no row matches, or several match and allow_multiple is False
        """
        position = self.get_column_index(column)
        matches = await self.find_rows_matching(predicate)
        if not matches:
            raise RowNotFoundError(f"No row matches {predicate!r}", predicate=predicate, match_count=0)
        if len(matches) > 1 and not allow_multiple:
            raise RowNotFoundError(
                f"{len(matches)} rows match {predicate!r}; narrow the predicate or pass allow_multiple=True",
                predicate=predicate,
                match_count=len(matches),
            )
        return matches[0].cell(position)

    # ============================================
    # Records
    # ============================================

    async def extract_all_records(self) -> list[WebTableRecord]:
        records = [WebTableRecord.from_cells(row.cells, self.column_map) for row in await self.read_data_rows()]
        logger.debug(f"Extracted {len(records)} records from table")
        return records

    # ============================================
    # Polling
    # ============================================

    async def await_predicate(
        self,
        condition_fn: Callable[[], Awaitable[Any]],
        timeout_ms: int | None = None,
        *,
        expected: Any = True,
        description: str = "table condition",
    ) -> PollOutcome:
        """Poll any async read until it returns expected (default True)."""
        return await poll(
            condition_fn,
            lambda value: value == expected,
            timeout_ms=self.poll_timeout_ms if timeout_ms is None else timeout_ms,
            interval_ms=self.poll_interval_ms,
            expected=expected,
            description=description,
        )

    async def await_row_count(self, expected: int, timeout_ms: int | None = None) -> PollOutcome:
        return await self.await_predicate(
            self.count_data_rows,
            timeout_ms,
            expected=expected,
            description="data row count",
        )

    async def await_rows_matching(
        self,
        predicate: RowPredicate,
        timeout_ms: int | None = None,
        *,
        expected_count: int | None = None,
    ) -> PollOutcome:
        """
        Poll until rows matching predicate appear (expected_count=None),
        or until exactly expected_count of them are shown (0 awaits removal).

        The outcome's last_observed is the list of matching rows.
        """
        self._compile_predicate(predicate)
        if expected_count is None:
            until: Callable[[list[Row]], bool] = lambda rows: len(rows) > 0
            expected: Any = "at least one matching row"
        else:
            until = lambda rows: len(rows) == expected_count
            expected = f"{expected_count} matching rows"

        return await poll(
            lambda: self.find_rows_matching(predicate),
            until,
            timeout_ms=self.poll_timeout_ms if timeout_ms is None else timeout_ms,
            interval_ms=self.poll_interval_ms,
            expected=expected,
            description=f"rows matching {predicate!r}",
        )
