"""
Command-line entry point for the workflow runner.

CI invokes this after deploying the application under test. It resolves
configuration, optionally waits for the health endpoint, runs the
battery, writes report artifacts and prints a summary table.

Exit codes follow a three-state convention so that CI can distinguish
"scenarios failed" from "the run never happened":

- ``0``: every scenario passed
- ``1``: at least one scenario failed
- ``2``: run-fatal error (bad configuration, unhealthy app, no browser)
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from workflow_runner import configure_logging
from workflow_runner.config import get_config
from workflow_runner.exceptions import SessionError
from workflow_runner.health import wait_for_app_healthy
from workflow_runner.profiles import PROFILES
from workflow_runner.report import format_summary, write_json, write_junit_xml
from workflow_runner.runner import WorkflowRunner

logger = logging.getLogger(__name__)

EXIT_PASS = 0
EXIT_SCENARIO_FAILURE = 1
EXIT_RUN_ERROR = 2


def _positions(value: str) -> list[int]:
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected comma-separated positions, got '{value}'") from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the runner."""
    parser = argparse.ArgumentParser(
        prog="workflow-runner",
        description="Run the UI workflow battery against a task/bug tracker.",
    )
    parser.add_argument(
        "--app",
        choices=sorted(PROFILES),
        default=None,
        help="Target application profile (default: $WORKFLOW_APP or task-manager)",
    )
    parser.add_argument(
        "--app-url",
        default=None,
        help="Base URL of the application (APP_URL environment variable wins)",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Explicit wait budget in seconds (default: 10)",
    )
    parser.add_argument(
        "--strict-actions",
        action="store_true",
        help="Fail scenarios whose optional per-item action is missing",
    )
    parser.add_argument(
        "--only",
        type=_positions,
        default=None,
        help="Comma-separated scenario positions to run, e.g. 1,2,10",
    )
    parser.add_argument("--json", type=Path, default=None, help="Write a JSON report here")
    parser.add_argument("--junit", type=Path, default=None, help="Write a JUnit XML report here")
    parser.add_argument(
        "--wait-healthy",
        type=float,
        default=0,
        metavar="SECONDS",
        help="Poll /health for up to SECONDS before running",
    )
    parser.add_argument(
        "--screenshot-dir",
        type=Path,
        default=None,
        help="Directory for failure screenshots",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the battery and return a process exit code."""
    args = parse_args(argv)
    configure_logging(args.log_level.upper())

    overrides = {}
    if args.headed:
        overrides["headless"] = False
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.strict_actions:
        overrides["strict_actions"] = True
    if args.screenshot_dir is not None:
        overrides["screenshot_dir"] = args.screenshot_dir

    try:
        config = get_config(args.app, app_url=args.app_url, **overrides)
        if args.wait_healthy:
            wait_for_app_healthy(config.base_url, timeout=args.wait_healthy)
        report = WorkflowRunner(config).run(only=args.only)
    except (SessionError, RuntimeError, ValueError) as exc:
        logger.error(f"Run aborted: {exc}")
        return EXIT_RUN_ERROR

    if args.json:
        logger.info(f"JSON report written to {write_json(report, args.json)}")
    if args.junit:
        logger.info(f"JUnit report written to {write_junit_xml(report, args.junit)}")

    print(format_summary(report))
    return EXIT_PASS if report.ok else EXIT_SCENARIO_FAILURE


if __name__ == "__main__":
    sys.exit(main())
