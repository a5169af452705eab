from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

# Define project root
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Track if logging has been configured to avoid duplicate setup
_logging_configured = False


class JSONFormatter(logging.Formatter):
    """JSON formatter that outputs log records as JSON lines."""

    # Context attached by the behave hooks via `extra=`
    OPTIONAL_FIELDS = ("feature", "scenario", "step", "status", "browser", "screenshot")

    def __init__(self, *, include_context: bool = True):
        super().__init__()
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            for field in self.OPTIONAL_FIELDS:
                value = getattr(record, field, None)
                if value is not None and value != "":
                    log_data[field] = value

        if record.exc_info:
            log_data["error_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None
            log_data["error_message"] = str(record.exc_info[1]) if record.exc_info[1] else None

        duration_ms = getattr(record, "duration_ms", None)
        if duration_ms is not None:
            log_data["duration_ms"] = duration_ms

        return json.dumps(log_data)


def _get_log_level() -> int:
    """Determine log level from environment or default."""
    env_level = os.environ.get("LOG_LEVEL", "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return getattr(logging, env_level)
    return logging.INFO


def _get_log_format() -> str:
    """Determine log format from environment (default: json)."""
    env_format = os.environ.get("LOG_FORMAT", "json").lower()
    if env_format == "pretty":
        return "pretty"
    return "json"


class NoDriverNoiseFilter(logging.Filter):
    """Filter to suppress Playwright/asyncio internals from suite logging."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not (record.name.startswith("playwright") or record.name.startswith("asyncio"))


def setup_logging(
    debug_mode: bool = False,
    *,
    json_output: bool = True,
    use_file_handler: bool = True,
    log_dir: str | Path | None = None,
) -> None:
    """Configure centralized logging for the e2e suite.

    Args:
        debug_mode: If True, set log level to DEBUG.
        json_output: If True, emit JSON to stdout.
        use_file_handler: If True, also write rotating logs to file.
        log_dir: Directory for the rotating log file (default: <project>/logs).
    """
    global _logging_configured

    # Idempotent: skip if already configured
    if _logging_configured and not debug_mode:
        return

    log_level = logging.DEBUG if debug_mode else _get_log_level()
    use_pretty = _get_log_format() == "pretty"

    logger = logging.getLogger()
    logger.setLevel(log_level)

    if logger.hasHandlers():
        logger.handlers.clear()

    if json_output and not use_pretty:
        console_formatter: logging.Formatter = JSONFormatter()
    else:
        # Pretty output for local runs
        console_formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.addFilter(NoDriverNoiseFilter())
    logger.addHandler(console_handler)

    if use_file_handler:
        directory = Path(log_dir) if log_dir else Path(PROJECT_ROOT) / "logs"
        directory.mkdir(parents=True, exist_ok=True)

        # File handler always uses JSON for consistency
        file_handler = RotatingFileHandler(directory / "e2e.log", maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    _logging_configured = True

    level_name = logging.getLevelName(log_level)
    mode = "pretty" if use_pretty or not json_output else "JSON"
    logging.getLogger().info(f"Logging initialized ({mode} mode). Level: {level_name}")


def reset_logging() -> None:
    """Reset logging configuration (useful for testing)."""
    global _logging_configured
    _logging_configured = False

    logger = logging.getLogger()
    if logger.hasHandlers():
        logger.handlers.clear()
