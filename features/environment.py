"""behave hooks: browser per run, fresh page per scenario, screenshots on the way out."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Make the project packages importable when behave is run from a checkout
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.settings_manager import settings  # noqa: E402
from runner.lifecycle import SuiteLifecycle  # noqa: E402
from utils.logger import setup_logging  # noqa: E402

logger = logging.getLogger("features.environment")


def _userdata_flag(context, name: str) -> bool | None:
    value = context.config.userdata.get(name)
    if value is None:
        return None
    return str(value).strip().lower() in ("1", "true", "yes")


def before_all(context):
    setup_logging(debug_mode=bool(_userdata_flag(context, "debug")))

    browser = context.config.userdata.get("browser")
    if browser:
        settings.set("browser", browser)

    context.settings = settings
    context.lifecycle = SuiteLifecycle(settings, headless=_userdata_flag(context, "headless"))
    context.lifecycle.start()


def before_feature(context, feature):
    logger.info(f"Feature started: {feature.name}", extra={"feature": feature.name})


def before_scenario(context, scenario):
    context.page, context.state = context.lifecycle.start_scenario(scenario.name)


def after_step(context, step):
    if step.status.name == "failed":
        logger.error(
            f"Step failed: {step.keyword} {step.name}",
            extra={"scenario": context.state.name, "step": step.name, "status": "failed"},
        )


def after_scenario(context, scenario):
    state = getattr(context, "state", None)
    if state is None:
        return
    failed = scenario.status.name == "failed"
    error = next((step.exception for step in scenario.all_steps if step.status.name == "failed"), None)
    context.lifecycle.finish_scenario(state, failed=failed, error=error)
    context.page = None


def after_all(context):
    lifecycle = getattr(context, "lifecycle", None)
    if lifecycle is not None:
        lifecycle.stop()
