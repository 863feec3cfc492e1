"""
Shared pytest fixtures for the workflow runner test suite.

This module contains fixtures shared across unit and e2e tests: runner
configuration, report factories and in-memory stand-ins for the browser
session so orchestration logic can be tested without launching Chromium.

Key Concepts Demonstrated:
- Fixture dependencies
- Test data factories (Faker)
- Fakes at the driver seam instead of a real browser
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any

import pytest
from faker import Faker

from workflow_runner.config import RunnerConfig, get_config
from workflow_runner.models import RunReport, Scenario, ScenarioResult
from workflow_runner.scenarios import ScenarioContext

# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Command-line Options
# -----------------------------------------------------------------------------

def pytest_addoption(parser):
    parser.addoption(
        "--app-url",
        action="store",
        default=None,
        help="Base URL of a deployed application for the smoke suite (APP_URL wins)",
    )


# -----------------------------------------------------------------------------
# Configuration Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment variables that influence configuration."""
    for name in ("APP_URL", "WORKFLOW_APP", "HEADLESS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def config(clean_env, tmp_path) -> RunnerConfig:
    """Task Manager configuration pointed at a dummy URL."""
    return get_config(
        "task-manager",
        app_url="http://app.test",
        screenshot_dir=tmp_path / "screenshots",
    )


# -----------------------------------------------------------------------------
# Fake Browser Session
# -----------------------------------------------------------------------------

class FakeSessionPage:
    """Stand-in for the entity list page object in orchestration tests."""

    def __init__(self):
        self.screenshots: list[str] = []
        self.state: dict[str, Any] = {}

    def take_screenshot(self, name: str, directory) -> str:
        path = f"{directory}/{name}.png"
        self.screenshots.append(path)
        return path


class FakeSession:
    """Records acquisition and release of a fake browser session."""

    def __init__(self, fail_with: Exception | None = None):
        self.fail_with = fail_with
        self.entered = 0
        self.exited = 0
        self.page = FakeSessionPage()

    @contextmanager
    def __call__(self, config: RunnerConfig) -> Generator[FakeSessionPage, None, None]:
        if self.fail_with is not None:
            raise self.fail_with
        self.entered += 1
        try:
            yield self.page
        finally:
            self.exited += 1


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def fake_context_factory() -> Callable[[Any, RunnerConfig], ScenarioContext]:
    """Build scenario contexts around the fake page without a dialog guard."""

    def _build(page: FakeSessionPage, config: RunnerConfig) -> ScenarioContext:
        return ScenarioContext(page=page, dialogs=None, config=config)

    return _build


@pytest.fixture
def make_scenario() -> Callable[..., Scenario]:
    """Factory for scenarios with arbitrary step functions."""

    def _make(position: int, steps=None, name: str | None = None, requires_clean: bool = False) -> Scenario:
        return Scenario(
            position=position,
            name=name or f"TC{position:02d}: {fake.sentence(nb_words=3).rstrip('.')}",
            steps=steps or (lambda ctx: None),
            requires_clean=requires_clean,
        )

    return _make


# -----------------------------------------------------------------------------
# Report Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def sample_report() -> RunReport:
    """A report with two passes and one failure."""
    report = RunReport(app="task-manager", base_url="http://app.test")
    report.results = [
        ScenarioResult(position=1, name="TC01: Verify Homepage Title", passed=True, elapsed=0.4),
        ScenarioResult(
            position=2,
            name="TC02: Create New Task",
            passed=False,
            elapsed=1.25,
            message="Exactly one task should be listed: expected 1, found 0 (waited 10s)",
            screenshot="test-results/screenshots/task_manager_TC02.png",
        ),
        ScenarioResult(
            position=3,
            name="TC03: Mark Task Complete",
            passed=True,
            elapsed=0.8,
            notes=["No 'Mark Complete' action found, skipping (lenient)"],
        ),
    ]
    return report
