"""
Fixtures for end-to-end runs of the scenario battery.

Each test gets its own demo tracker served from a background thread on a
free port, so application state never leaks between tests. The runner
then drives a real headless Chromium against it.

Tests are skipped, not failed, when Playwright's Chromium build is not
installed (``playwright install chromium``).
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Generator, Iterable
from contextlib import ExitStack

import pytest
from flask import Flask
from werkzeug.serving import make_server

from tests.e2e.demo_app import create_demo_app
from workflow_runner.config import RunnerConfig, get_config
from workflow_runner.driver import browser_session
from workflow_runner.exceptions import SessionError
from workflow_runner.models import RunReport
from workflow_runner.profiles import BUG_FIXER, TASK_MANAGER, AppProfile
from workflow_runner.runner import WorkflowRunner
from workflow_runner.scenarios import ScenarioContext


def _serve(app: Flask) -> Generator[str, None, None]:
    """Serve *app* on a free local port until the generator is closed."""
    server = make_server("127.0.0.1", 0, app, threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_port}"
    finally:
        server.shutdown()
        thread.join(timeout=5)


@pytest.fixture(autouse=True)
def _no_app_url_env(monkeypatch):
    """APP_URL would otherwise win over the demo server's URL."""
    monkeypatch.delenv("APP_URL", raising=False)


@pytest.fixture(params=[TASK_MANAGER, BUG_FIXER], ids=lambda profile: profile.name)
def profile(request) -> AppProfile:
    """Run the test once per application profile."""
    return request.param


@pytest.fixture
def serve_app() -> Generator[Callable[[Flask], str], None, None]:
    """
    Factory that starts a demo app and returns its base URL.

    Every server started through the factory is shut down after the test.
    """
    servers = []

    def _start(app: Flask) -> str:
        server = _serve(app)
        servers.append(server)
        return next(server)

    yield _start

    for server in servers:
        server.close()


@pytest.fixture
def live_server(profile: AppProfile, serve_app) -> str:
    """Base URL of a fully featured demo app for the current profile."""
    return serve_app(create_demo_app(profile))


@pytest.fixture
def make_config(profile: AppProfile, tmp_path) -> Callable[..., RunnerConfig]:
    """Build a runner config pointed at a demo server."""

    def _make(base_url: str, **overrides) -> RunnerConfig:
        overrides.setdefault("timeout", 5.0)
        overrides.setdefault("dialog_timeout", 0.5)
        overrides.setdefault("screenshot_dir", tmp_path / "screenshots")
        return get_config(profile.name, app_url=base_url, headless=True, **overrides)

    return _make


@pytest.fixture
def run_battery() -> Callable[..., RunReport]:
    """Run the battery, skipping the test when no browser is available."""

    def _run(config: RunnerConfig, only: Iterable[int] | None = None) -> RunReport:
        try:
            return WorkflowRunner(config).run(only=only)
        except SessionError as exc:
            pytest.skip(f"Chromium is not available: {exc}")

    return _run


@pytest.fixture
def session_context(live_server: str, make_config) -> Generator[ScenarioContext, None, None]:
    """A scenario context on a live browser page, for driving steps directly."""
    config = make_config(live_server)
    with ExitStack() as stack:
        try:
            page = stack.enter_context(browser_session(config))
        except SessionError as exc:
            pytest.skip(f"Chromium is not available: {exc}")
        context = ScenarioContext.for_page(page, config)
        context.page.navigate()
        yield context
