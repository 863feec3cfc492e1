"""
Declarative UI-workflow test runner.

This package drives a single browser session through a fixed, ordered
battery of scenarios against a task/bug-tracking web application and
reports a pass/fail verdict per scenario.

The battery is written once and instantiated per target application
through an :class:`~workflow_runner.profiles.AppProfile` (Task Manager,
Bug Fixer), so the same workflow covers both vocabularies.
"""

import logging

from workflow_runner.config import RunnerConfig, get_config
from workflow_runner.exceptions import SessionError, WaitTimeout, WorkflowError
from workflow_runner.models import RunReport, ScenarioResult
from workflow_runner.runner import WorkflowRunner

__version__ = "1.0.0"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure root logging with the project-wide format."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def create_runner(
    app_name: str | None = None,
    app_url: str | None = None,
    **overrides,
) -> WorkflowRunner:
    """
    Create a runner for the given target application.

    Args:
        app_name: Profile name (``task-manager`` or ``bug-fixer``).
                  If None, uses the WORKFLOW_APP environment variable.
        app_url: Base URL override, used when APP_URL is not set.
        **overrides: Extra :class:`RunnerConfig` field values.

    Returns:
        Configured WorkflowRunner instance.
    """
    config = get_config(app_name, app_url=app_url, **overrides)
    logger.info(f"Creating runner for {config.profile.display_name} at {config.base_url}")
    return WorkflowRunner(config)


__all__ = [
    "RunReport",
    "RunnerConfig",
    "ScenarioResult",
    "SessionError",
    "WaitTimeout",
    "WorkflowError",
    "WorkflowRunner",
    "configure_logging",
    "create_runner",
    "get_config",
]
