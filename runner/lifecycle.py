"""
Suite lifecycle shared by the behave hooks.

A single asyncio event loop drives every coroutine of a run: the Playwright
objects are bound to the loop that created them, and behave steps are plain
functions, so steps hand their coroutines to SuiteLifecycle.run().
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import time
from collections.abc import Awaitable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from core.settings_manager import SettingsManager, settings as default_settings
from runner.browser_manager import BrowserManager
from runner.debug_capture import DebugArtifactCapture

logger = logging.getLogger(__name__)

T = TypeVar("T")


def init_results_dir(results_dir: str | Path) -> Path:
    """Empty the results directory and recreate the screenshot folders."""
    root = Path(results_dir)
    if root.exists():
        shutil.rmtree(root)
    for sub in ("screenshots/failed", "screenshots/success"):
        (root / sub).mkdir(parents=True, exist_ok=True)
    logger.info(f"Test results directory initialized: {root}")
    return root


@dataclass
class ScenarioState:
    """Per-scenario values shared between steps (replaces module-level globals)."""

    name: str
    started_at: float = field(default_factory=time.monotonic)
    row_count_before: int | None = None
    added_records: list[Any] = field(default_factory=list)
    deleted_names: list[str] = field(default_factory=list)
    pages: dict[str, Any] = field(default_factory=dict)


class SuiteLifecycle:
    def __init__(self, settings: SettingsManager | None = None, *, headless: bool | None = None) -> None:
        self.settings = settings or default_settings
        self.loop = asyncio.new_event_loop()
        self.browser_manager = BrowserManager(self.settings, headless=headless)
        self.capture = DebugArtifactCapture(self.settings.results_dir)

    def run(self, awaitable: Awaitable[T]) -> T:
        """Drive a coroutine to completion on the suite loop."""
        return self.loop.run_until_complete(awaitable)

    def start(self) -> None:
        self.run(self.browser_manager.start())

    def start_scenario(self, name: str) -> tuple[Any, ScenarioState]:
        page = self.run(self.browser_manager.new_page())
        logger.info(f"Scenario started: {name}", extra={"scenario": name})
        return page, ScenarioState(name=name)

    def finish_scenario(self, state: ScenarioState, *, failed: bool, error: BaseException | None = None) -> dict[str, Any]:
        """Capture artifacts, then close the page and context even if capture fails."""
        try:
            page = self.browser_manager.page
        except RuntimeError:
            page = None

        try:
            artifacts = self.run(self.capture.capture_scenario(state.name, page, failed=failed, error=error))
        finally:
            self.run(self.browser_manager.close_page())

        duration_ms = int((time.monotonic() - state.started_at) * 1000)
        log = logger.error if failed else logger.info
        log(
            f"Scenario {'failed' if failed else 'passed'}: {state.name}",
            extra={
                "scenario": state.name,
                "status": artifacts["status"],
                "duration_ms": duration_ms,
                "screenshot": artifacts.get("screenshot_path"),
            },
        )
        return artifacts

    def stop(self) -> None:
        try:
            self.run(self.browser_manager.quit())
        finally:
            self.loop.close()
