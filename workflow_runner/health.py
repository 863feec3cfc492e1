"""Pre-run health probe for the application under test."""

from __future__ import annotations

import logging
import time

import requests

from workflow_runner.waits import poll_until

logger = logging.getLogger(__name__)

HEALTH_PATH = "/health"


def is_app_ready(url: str, timeout: int = 2) -> bool:
    """Return True when the health endpoint responds with 200."""
    try:
        response = requests.get(f"{url}{HEALTH_PATH}", timeout=timeout)
    except requests.RequestException:
        return False
    return response.status_code == 200


def wait_for_app_healthy(url: str, timeout: float = 60, interval: float = 1) -> None:
    """Poll the health endpoint until ready or timeout."""
    if not poll_until(lambda: is_app_ready(url), timeout=timeout, interval=interval, sleep=time.sleep):
        raise RuntimeError(f"Application at {url} not healthy after {timeout}s")
    logger.info(f"Application at {url} is healthy")
