from __future__ import annotations

import argparse
import logging
import sys

from behave.__main__ import main as behave_main

from core.settings_manager import PROJECT_ROOT, settings
from runner.lifecycle import init_results_dir
from utils.logger import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the DemoQA end-to-end feature suite")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Reset the test-results directory")

    run = sub.add_parser("run", help="Run the behave feature suite")
    run.add_argument("paths", nargs="*", help="Feature files or directories (default: features/)")
    run.add_argument("--tags", action="append", default=[], help="Behave tag expression (repeatable)")
    run.add_argument("--headed", action="store_true", help="Show the browser window")
    run.add_argument("--browser", choices=["chromium", "firefox", "webkit"], help="Override BROWSER")
    run.add_argument("--debug", action="store_true", help="Enable debug logging")
    run.add_argument("--keep-results", action="store_true", help="Do not reset test-results before the run")
    return parser.parse_args(argv)


def build_behave_args(args: argparse.Namespace, report_path: str) -> list[str]:
    behave_args = list(args.paths) or [str(PROJECT_ROOT / "features")]
    for tag in args.tags:
        behave_args += ["--tags", tag]
    # Outfiles pair with formats in order: JSON to the report, pretty to stdout
    behave_args += ["-f", "json.pretty", "-o", report_path, "-f", "pretty"]
    if args.headed:
        behave_args += ["-D", "headless=false"]
    if args.browser:
        behave_args += ["-D", f"browser={args.browser}"]
    if args.debug:
        behave_args += ["-D", "debug=true"]
    return behave_args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(debug_mode=getattr(args, "debug", False))

    results_dir = settings.results_dir
    if args.command == "init":
        init_results_dir(results_dir)
        return 0

    if not args.keep_results:
        init_results_dir(results_dir)

    report_path = str(results_dir / "cucumber-report.json")
    behave_args = build_behave_args(args, report_path)
    logger.info(f"[Runner] behave {' '.join(behave_args)}")

    exit_code = behave_main(behave_args)
    if exit_code == 0:
        logger.info(f"[Runner] Suite passed. JSON report: {report_path}")
    else:
        logger.error(f"[Runner] Suite failed (exit code {exit_code}). Screenshots: {results_dir / 'screenshots'}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
