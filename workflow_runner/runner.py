"""
Workflow Runner.

Drives one browser session through the ordered scenario battery and
produces a structured pass/fail result per scenario.

Execution model:
- One session, acquired before the first scenario and released after
  the last, even when a scenario fails.
- Strictly sequential: a scenario starts only after the previous one
  has fully finished.
- Fail-fast within a scenario, never across scenarios: the first
  violated assertion ends that scenario's verdict and the run moves on.
- Only session acquisition failure aborts the run.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable, Iterable
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Any

from playwright.sync_api import Error as PlaywrightError

from workflow_runner.cleanup import clear_all_entities
from workflow_runner.config import RunnerConfig
from workflow_runner.driver import browser_session
from workflow_runner.models import RunReport, Scenario, ScenarioResult
from workflow_runner.scenarios import SCENARIOS, ScenarioContext

logger = logging.getLogger(__name__)

SessionFactory = Callable[[RunnerConfig], AbstractContextManager[Any]]
ContextFactory = Callable[[Any, RunnerConfig], ScenarioContext]


class WorkflowRunner:
    """
    Executes the scenario battery against a live application.

    Attributes:
        config: Runner configuration.
        scenarios: Scenarios to run, executed in ascending position.
        session_factory: Context manager factory yielding a browser page.
        context_factory: Builds the scenario context around that page.
    """

    def __init__(
        self,
        config: RunnerConfig,
        scenarios: Iterable[Scenario] | None = None,
        session_factory: SessionFactory = browser_session,
        context_factory: ContextFactory = ScenarioContext.for_page,
        clear_all: Callable[[Any], Any] = clear_all_entities,
    ):
        self.config = config
        self.scenarios = sorted(SCENARIOS if scenarios is None else scenarios, key=lambda s: s.position)
        self.session_factory = session_factory
        self.context_factory = context_factory
        self.clear_all = clear_all

    def run(self, only: Iterable[int] | None = None) -> RunReport:
        """
        Run the battery in a single browser session.

        Args:
            only: Positions to run; all scenarios when None. Order is
                  always ascending position regardless of this argument.

        Returns:
            RunReport with one result per executed scenario.

        Raises:
            SessionError: If the browser session could not be acquired.
        """
        selected = self._select(only)
        profile = self.config.profile
        report = RunReport(app=profile.name, base_url=self.config.base_url)

        logger.info(
            f"Running {len(selected)} scenario(s) for {profile.display_name} "
            f"at {self.config.base_url}"
        )
        try:
            with self.session_factory(self.config) as page:
                context = self.context_factory(page, self.config)
                for scenario in selected:
                    report.results.append(self.run_scenario(scenario, context))
        finally:
            report.finished_at = datetime.now(timezone.utc)

        logger.info(f"Run finished: {report.passed}/{report.total} passed, {report.failed} failed")
        return report

    def run_scenario(self, scenario: Scenario, context: ScenarioContext) -> ScenarioResult:
        """
        Run one scenario and capture its verdict.

        Assertion failures, wait timeouts and driver errors fail the
        scenario with their message; nothing escapes to the caller.
        """
        name = scenario.display_name(self.config.profile.noun)
        context.notes = []
        logger.info(f"Running {name}")

        started = time.perf_counter()
        message = None
        try:
            if scenario.requires_clean:
                self.clear_all(context.page)
            scenario.steps(context)
        except (AssertionError, PlaywrightError) as exc:
            message = str(exc).strip() or exc.__class__.__name__
        except Exception as exc:
            logger.exception(f"{name} raised an unexpected error")
            message = f"{exc.__class__.__name__}: {exc}"
        elapsed = time.perf_counter() - started

        result = ScenarioResult(
            position=scenario.position,
            name=name,
            passed=message is None,
            elapsed=elapsed,
            message=message,
            notes=list(context.notes),
        )
        if result.passed:
            logger.info(f"✓ {name} passed in {elapsed:.2f}s")
        else:
            logger.error(f"✗ {name} failed in {elapsed:.2f}s: {message}")
            result.screenshot = self._capture_screenshot(context, name)
        return result

    def _select(self, only: Iterable[int] | None) -> list[Scenario]:
        if only is None:
            return list(self.scenarios)
        wanted = set(only)
        known = {scenario.position for scenario in self.scenarios}
        unknown = wanted - known
        if unknown:
            raise ValueError(f"Unknown scenario position(s): {sorted(unknown)}")
        return [scenario for scenario in self.scenarios if scenario.position in wanted]

    def _capture_screenshot(self, context: ScenarioContext, name: str) -> str | None:
        """Best-effort screenshot of the page at the moment a scenario failed."""
        filename = re.sub(r"[^A-Za-z0-9]+", "_", f"{self.config.profile.name}_{name}").strip("_")
        try:
            path = context.page.take_screenshot(filename, self.config.screenshot_dir)
        except (PlaywrightError, OSError) as exc:
            logger.warning(f"Failed to capture screenshot: {exc}")
            return None
        logger.info(f"Screenshot saved: {path}")
        return path
