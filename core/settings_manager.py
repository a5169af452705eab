"""
Settings Manager for the DemoQA end-to-end suite.

All values come from environment variables (optionally seeded from a local
.env file) with the defaults below.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Project root directory - used by various modules for file paths
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class SettingsManager:
    """Manages suite configuration via environment variables."""

    DEFAULTS = {
        "base_url": "https://demoqa.com",
        "homepage_url": "https://www.demoblaze.com/",
        "headless": True,
        "browser": "chromium",
        "navigation_timeout_ms": 30000,
        "default_timeout_ms": 10000,
        "poll_timeout_ms": 5000,
        "poll_interval_ms": 100,
        "viewport_width": 1920,
        "viewport_height": 1080,
        "results_dir": "test-results",
    }

    ENV_MAPPINGS = {
        "base_url": "BASE_URL",
        "homepage_url": "HOMEPAGE_URL",
        "headless": "HEADLESS",
        "browser": "BROWSER",
        "navigation_timeout_ms": "NAVIGATION_TIMEOUT_MS",
        "default_timeout_ms": "DEFAULT_TIMEOUT_MS",
        "poll_timeout_ms": "POLL_TIMEOUT_MS",
        "poll_interval_ms": "POLL_INTERVAL_MS",
        "viewport_width": "VIEWPORT_WIDTH",
        "viewport_height": "VIEWPORT_HEIGHT",
        "results_dir": "RESULTS_DIR",
        "debug_mode": "E2E_DEBUG",
    }

    def __init__(self, *, use_dotenv: bool = True) -> None:
        self._cache: dict = {}
        if use_dotenv:
            load_dotenv(PROJECT_ROOT / ".env")
        self._load_from_env()

    def _load_from_env(self) -> None:
        for setting_key, env_key in self.ENV_MAPPINGS.items():
            env_value = os.getenv(env_key)
            if env_value:
                self.set(setting_key, env_value)

    def get(self, key: str, default=None):
        if default is None:
            default = self.DEFAULTS.get(key, "")

        value = self._cache.get(key, default)

        if isinstance(value, str) and value.lower() in ("true", "false", "1", "0"):
            return value.lower() in ("true", "1")

        if isinstance(value, str) and value.isdigit():
            return int(value)

        return value

    def set(self, key: str, value):
        self._cache[key] = value

    def get_all(self) -> dict:
        all_settings = {}
        for key in self.DEFAULTS.keys():
            all_settings[key] = self.get(key)
        return all_settings

    def reload(self) -> None:
        self._cache.clear()
        self._load_from_env()

    @property
    def debug_mode(self) -> bool:
        return bool(self.get("debug_mode"))

    @property
    def base_url(self) -> str:
        return str(self.get("base_url")).rstrip("/")

    @property
    def browser_name(self) -> str:
        name = str(self.get("browser")).strip().lower()
        if name not in SUPPORTED_BROWSERS:
            raise ConfigurationError(f"Unsupported browser '{name}'. Expected one of: {', '.join(SUPPORTED_BROWSERS)}")
        return name

    @property
    def results_dir(self) -> Path:
        path = Path(str(self.get("results_dir")))
        return path if path.is_absolute() else PROJECT_ROOT / path

    @property
    def browser_settings(self) -> dict:
        return {
            "browser": self.browser_name,
            "headless": bool(self.get("headless")),
            "navigation_timeout_ms": self.get("navigation_timeout_ms"),
            "default_timeout_ms": self.get("default_timeout_ms"),
            "viewport": {
                "width": self.get("viewport_width"),
                "height": self.get("viewport_height"),
            },
        }

    @property
    def poll_settings(self) -> dict:
        return {
            "timeout_ms": self.get("poll_timeout_ms"),
            "interval_ms": self.get("poll_interval_ms"),
        }


settings = SettingsManager()
