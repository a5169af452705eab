from __future__ import annotations

from typing import Any


class ConfigurationError(Exception):
    pass


class TableError(Exception):
    """Base class for programmer errors raised by the table reader."""


class UnknownColumnError(TableError):
    def __init__(self, column: str, known: list[str] | None = None):
        self.column = column
        self.known = known or []
        message = f"Column mapping not found for: {column}"
        if self.known:
            message = f"{message} (known columns: {', '.join(self.known)})"
        super().__init__(message)


class MalformedPredicateError(TableError):
    pass


class RowNotFoundError(TableError):
    def __init__(self, message: str, predicate: Any = None, match_count: int = 0):
        self.predicate = predicate
        self.match_count = match_count
        super().__init__(message)


class PollTimeoutError(AssertionError):
    """A polled read never reached the expected state within its budget."""

    def __init__(
        self,
        description: str,
        expected: Any,
        last_observed: Any,
        elapsed_ms: int,
    ):
        self.description = description
        self.expected = expected
        self.last_observed = last_observed
        self.elapsed_ms = elapsed_ms
        super().__init__(f"{description}: expected {expected!r}, last observed {last_observed!r} after {elapsed_ms} ms")
