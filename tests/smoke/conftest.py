"""
Smoke-test fixtures for a deployed application under test.

Provides the ``smoke_base_url`` session-scoped fixture. The URL comes
from ``APP_URL`` (the same variable the runner honours) or, failing that,
the ``--app-url`` pytest option; when neither is set the smoke suite is
skipped rather than guessing a host.

Key SDET Concepts Demonstrated:
- Session-scoped URL fixtures to share a single deployment across tests
- Waiting for readiness before asserting on behaviour
"""

from __future__ import annotations

import os

import pytest

from workflow_runner.health import wait_for_app_healthy


@pytest.fixture(scope="session")
def smoke_base_url(pytestconfig) -> str:
    """Return a healthy application URL for smoke tests."""
    base_url = (os.environ.get("APP_URL") or pytestconfig.getoption("--app-url") or "").rstrip("/")
    if not base_url:
        pytest.skip("Neither APP_URL nor --app-url is set; no deployed application to smoke test")

    wait_for_app_healthy(base_url, timeout=int(os.environ.get("SMOKE_WAIT", "30")))
    return base_url
