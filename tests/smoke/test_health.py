"""
Smoke tests for a deployed task/bug tracker.

Smoke tests are lightweight, fast checks that answer one question before
the browser battery starts: "is the application up and serving?" They use
plain ``requests`` (no browser) so a broken deployment is reported in
seconds rather than after a Chromium launch.

Key SDET Concepts Demonstrated:
- Smoke testing against a running deployment
- Health-endpoint verification
- Using plain ``requests`` for fast HTTP-level checks
"""

import pytest
import requests

from workflow_runner.scenarios import HEALTHY_TOKENS

pytestmark = pytest.mark.smoke


def test_homepage_is_served(smoke_base_url):
    """Test that the application root responds with an HTML page."""
    # Act
    response = requests.get(f"{smoke_base_url}/", timeout=5)

    # Assert
    assert response.status_code == 200
    assert "<h1" in response.text.lower()


def test_health_reports_status_and_timestamp(smoke_base_url):
    """Test that /health carries a healthy status and a timestamp."""
    # Act
    response = requests.get(f"{smoke_base_url}/health", timeout=5)

    # Assert
    assert response.status_code == 200
    body = response.json()
    assert "timestamp" in body
    assert any(token in str(body.get("status")) for token in HEALTHY_TOKENS)
