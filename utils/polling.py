"""
Bounded polling for eventually-consistent page state.

Every observation of state mutated by a UI action (submit, delete, edit) goes
through poll(): the probe is re-evaluated at a fixed short interval until the
condition holds or the budget is spent. Probe exceptions are never retried.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from core.exceptions import PollTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_INTERVAL_MS = 100


@dataclass(frozen=True)
class PollOutcome(Generic[T]):
    """Result of a bounded poll: success or timeout, with the last observation."""

    satisfied: bool
    expected: Any
    last_observed: T | None
    attempts: int
    elapsed_ms: int
    description: str = "condition"

    def __bool__(self) -> bool:
        return self.satisfied

    def describe(self) -> str:
        return f"expected {self.expected!r}, last observed {self.last_observed!r}"

    def check(self) -> T | None:
        """Return the observed value, or raise PollTimeoutError if the poll timed out."""
        if not self.satisfied:
            raise PollTimeoutError(self.description, self.expected, self.last_observed, self.elapsed_ms)
        return self.last_observed


async def poll(
    probe: Callable[[], Awaitable[T]],
    until: Callable[[T], bool],
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
    expected: Any = None,
    description: str = "condition",
) -> PollOutcome[T]:
    """
    Re-evaluate probe until until(value) is true or timeout_ms elapses.

    The probe always runs at least once, even with a zero budget.

    Args:
        probe: Async read of the current state (no side effects)
        until: Predicate over the probed value
        timeout_ms: Total budget in milliseconds
        interval_ms: Sleep between attempts in milliseconds
        expected: Expected value, reported in the outcome for diagnostics
        description: Human-readable name of what is being awaited

    Returns:
        PollOutcome carrying the last observed value
    """
    if timeout_ms < 0:
        raise ValueError(f"timeout_ms must be non-negative, got {timeout_ms}")
    if interval_ms <= 0:
        raise ValueError(f"interval_ms must be positive, got {interval_ms}")

    start_time = time.monotonic()
    end_time = start_time + timeout_ms / 1000
    attempts = 0

    while True:
        value = await probe()
        attempts += 1
        elapsed_ms = int((time.monotonic() - start_time) * 1000)

        if until(value):
            # Performance warning for slow settles (efficiency check)
            if elapsed_ms > timeout_ms * 0.5 and elapsed_ms > 2000:
                logger.warning(f"Slow settle: {description} held after {elapsed_ms} ms (>50% of {timeout_ms} ms budget)")
            else:
                logger.debug(f"{description} held after {elapsed_ms} ms ({attempts} attempts)")
            return PollOutcome(True, expected, value, attempts, elapsed_ms, description)

        remaining = end_time - time.monotonic()
        if remaining <= 0:
            logger.info(f"TIMEOUT: {description} not reached within {timeout_ms} ms: expected {expected!r}, last observed {value!r}")
            return PollOutcome(False, expected, value, attempts, elapsed_ms, description)

        await asyncio.sleep(min(interval_ms / 1000, remaining))
