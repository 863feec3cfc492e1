"""
Base Page class for the Page Object Model.

This class provides the browser capabilities every page object shares:
navigation, reload, title and source access, waits and screenshots.
Scenarios never talk to Playwright directly; they go through page objects.

Key Concepts Demonstrated:
- Base class pattern for code reuse
- Bounded waits instead of fixed sleeps
- Screenshot capture for failure diagnostics
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypeVar

from playwright.sync_api import Error as PlaywrightError, Locator, Page, expect

from workflow_runner.waits import DEFAULT_INTERVAL, poll_until

T = TypeVar("T")


class BasePage:
    """
    Base class for all page objects.

    Attributes:
        page: Playwright page instance.
        base_url: Base URL of the application.
        timeout: Explicit wait budget in seconds.
    """

    def __init__(self, page: Page, base_url: str, timeout: float = 10.0):
        """
        Initialize the base page.

        Args:
            page: Playwright page instance.
            base_url: Base URL of the application.
            timeout: Explicit wait budget in seconds.
        """
        self.page = page
        self.base_url = base_url
        self.timeout = timeout

    @property
    def timeout_ms(self) -> float:
        return self.timeout * 1000

    # -------------------------------------------------------------------------
    # Common Locators
    # -------------------------------------------------------------------------

    @property
    def heading(self) -> Locator:
        """Locator for the top-level page heading."""
        return self.page.locator("h1")

    @property
    def body(self) -> Locator:
        return self.page.locator("body")

    # -------------------------------------------------------------------------
    # Navigation Methods
    # -------------------------------------------------------------------------

    def navigate_to(self, path: str = "") -> None:
        """
        Navigate to a specific path.

        Args:
            path: URL path relative to base URL.
        """
        url = f"{self.base_url}{path}"
        self.page.goto(url)

    def reload(self) -> None:
        """Reload the current page."""
        self.page.reload()
        self.wait_for_page_load()

    # -------------------------------------------------------------------------
    # Page Data
    # -------------------------------------------------------------------------

    def title(self) -> str:
        return self.page.title()

    def source(self) -> str:
        """Return the current page source."""
        return self.page.content()

    # -------------------------------------------------------------------------
    # Wait Methods
    # -------------------------------------------------------------------------

    def wait_for_page_load(self) -> None:
        """Wait for page to finish loading."""
        self.page.wait_for_load_state("networkidle")

    def wait_for_heading(self) -> None:
        """Wait until the top-level heading is present in the DOM."""
        expect(self.heading.first).to_be_attached(timeout=self.timeout_ms)

    def is_visible_within(self, locator: Locator, timeout: float) -> bool:
        """
        Return whether an element becomes visible within *timeout* seconds.

        Absence is not an error.
        """
        try:
            locator.wait_for(state="visible", timeout=timeout * 1000)
        except PlaywrightError:
            return False
        return True

    def poll(
        self,
        predicate: Callable[[], T],
        timeout: float | None = None,
        message: str | None = None,
    ) -> T:
        """
        Poll a page condition until it holds.

        Pauses through Playwright so dialogs and other page events keep
        being processed between checks.
        """
        return poll_until(
            predicate,
            timeout=self.timeout if timeout is None else timeout,
            interval=DEFAULT_INTERVAL,
            message=message,
            sleep=lambda seconds: self.page.wait_for_timeout(seconds * 1000),
        )

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def take_screenshot(self, name: str, directory: str | os.PathLike = "test-results/screenshots") -> str:
        """
        Take a screenshot of the current page.

        Args:
            name: Name for the screenshot file.
            directory: Directory the screenshot is written to.

        Returns:
            Path to the saved screenshot.
        """
        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, f"{name}.png")
        self.page.screenshot(path=path)
        return path
