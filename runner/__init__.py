from __future__ import annotations

from runner.browser_manager import BrowserManager
from runner.debug_capture import DebugArtifactCapture
from runner.lifecycle import ScenarioState, SuiteLifecycle, init_results_dir

__all__ = ["BrowserManager", "DebugArtifactCapture", "ScenarioState", "SuiteLifecycle", "init_results_dir"]
