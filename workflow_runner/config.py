"""
Runner configuration module.

This module defines the configuration for a run: which application
profile to target, where it lives, and how the browser session and waits
behave. Values are loaded from environment variables with sensible
defaults.

Base URL precedence:
    1. APP_URL environment variable
    2. Explicit override (``--app-url`` on the command line or in pytest)
    3. The profile's hardcoded default
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from workflow_runner.profiles import AppProfile, get_profile

DEFAULT_APP = "task-manager"
DEFAULT_TIMEOUT = 10.0
DEFAULT_DIALOG_TIMEOUT = 1.0

DEFAULT_BROWSER_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)

_FALSEY = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in _FALSEY


@dataclass
class RunnerConfig:
    """
    Settings for one runner invocation.

    Attributes:
        profile: Selector map and vocabulary of the target application.
        base_url: Root URL of the application under test.
        timeout: Explicit wait budget in seconds.
        dialog_timeout: How long to wait for a native dialog after an action.
        headless: Whether the browser runs without a window.
        viewport: Fixed browser viewport size.
        browser_args: Extra Chromium command-line switches.
        screenshot_dir: Where failure screenshots are written.
        strict_actions: Fail instead of passing leniently when an optional
                        per-item action is not exposed by the page.
    """

    profile: AppProfile
    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    dialog_timeout: float = DEFAULT_DIALOG_TIMEOUT
    headless: bool = True
    viewport: dict[str, int] = field(default_factory=lambda: {"width": 1920, "height": 1080})
    browser_args: list[str] = field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))
    screenshot_dir: Path = field(default_factory=lambda: Path("test-results") / "screenshots")
    strict_actions: bool = False

    @property
    def timeout_ms(self) -> float:
        """Explicit wait budget in milliseconds, as Playwright expects."""
        return self.timeout * 1000


def resolve_base_url(profile: AppProfile, override: str | None = None) -> str:
    """
    Resolve the application base URL.

    Args:
        profile: Target application profile (supplies the default).
        override: Explicit URL from the command line or pytest option.

    Returns:
        Base URL without a trailing slash.
    """
    url = os.environ.get("APP_URL") or override or profile.default_url
    return url.rstrip("/")


def get_config(
    app_name: str | None = None,
    app_url: str | None = None,
    **overrides,
) -> RunnerConfig:
    """
    Build the configuration for the specified application.

    Args:
        app_name: Profile name (task-manager, bug-fixer).
                  If None, uses WORKFLOW_APP environment variable.
        app_url: Base URL override (see module docstring for precedence).
        **overrides: Values for any other RunnerConfig field.

    Returns:
        RunnerConfig for the requested application.

    Raises:
        ValueError: If the application name is unknown.
    """
    if app_name is None:
        app_name = os.environ.get("WORKFLOW_APP", DEFAULT_APP)
    profile = get_profile(app_name)

    overrides.setdefault("headless", _env_flag("HEADLESS", True))
    if "screenshot_dir" in overrides:
        overrides["screenshot_dir"] = Path(overrides["screenshot_dir"])

    return RunnerConfig(
        profile=profile,
        base_url=resolve_base_url(profile, app_url),
        **overrides,
    )
