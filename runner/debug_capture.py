"""
Scenario artifact capture: screenshots (and page source on failure).

Files land under <results_dir>/screenshots/{failed,success}/.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class BrowserPage(Protocol):
    """Protocol for browser page interface."""

    @property
    def url(self) -> str: ...

    async def content(self) -> str: ...

    async def screenshot(self, *, path: str | None = None, type: str = "png", timeout: float | None = None) -> bytes: ...


def safe_filename(name: str, max_length: int = 120) -> str:
    """Scenario names become file names: keep word characters, dashes and dots."""
    cleaned = re.sub(r"[^\w.-]+", "_", name.strip()).strip("_")
    return (cleaned or "scenario")[:max_length]


class DebugArtifactCapture:
    """Captures screenshots and page source for finished scenarios."""

    SCREENSHOT_TIMEOUT_MS = 30000

    def __init__(self, results_dir: str | Path, *, capture_success: bool = True) -> None:
        """
        Args:
            results_dir: Root of the run's results (e.g. test-results)
            capture_success: Also screenshot passing scenarios
        """
        self.results_dir = Path(results_dir)
        self.capture_success = capture_success

    def screenshot_dir(self, failed: bool) -> Path:
        return self.results_dir / "screenshots" / ("failed" if failed else "success")

    async def capture_scenario(
        self,
        scenario_name: str,
        page: BrowserPage | None,
        *,
        failed: bool,
        error: BaseException | None = None,
    ) -> dict[str, Any]:
        """
        Capture the end state of a scenario.

        Capture problems are logged and never raised: a broken screenshot must not
        mask the scenario's own result.

        Returns:
            Dictionary describing what was captured
        """
        debug_data: dict[str, Any] = {
            "scenario": scenario_name,
            "status": "failed" if failed else "passed",
            "timestamp": datetime.now().isoformat(),
        }
        if error:
            debug_data["error"] = str(error)
            debug_data["error_type"] = type(error).__name__

        if page is None or (not failed and not self.capture_success):
            return debug_data

        try:
            debug_data["url"] = page.url
        except Exception:
            pass

        filename = safe_filename(scenario_name)
        directory = self.screenshot_dir(failed)
        directory.mkdir(parents=True, exist_ok=True)

        screenshot_path = directory / f"{filename}.png"
        try:
            await page.screenshot(path=str(screenshot_path), type="png", timeout=self.SCREENSHOT_TIMEOUT_MS)
            debug_data["screenshot_path"] = str(screenshot_path)
            logger.debug(f"Saved screenshot to {screenshot_path}")
        except Exception as e:
            logger.warning(f"Failed to capture screenshot for '{scenario_name}': {e}")

        if failed:
            source_path = directory / f"{filename}.html"
            try:
                source_path.write_text(await page.content(), encoding="utf-8")
                debug_data["page_source_path"] = str(source_path)
            except Exception as e:
                logger.debug(f"Failed to dump page source: {e}")

        return debug_data
