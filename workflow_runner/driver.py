"""
Browser session acquisition and native dialog suppression.

The runner owns exactly one Playwright browser session for the whole
run. :func:`browser_session` acquires it and guarantees release, and
:class:`DialogGuard` keeps native alert/confirm dialogs from blocking the
page between steps.

Key Concepts Demonstrated:
- Scoped resource acquisition with guaranteed release
- Headless Chromium with a fixed viewport
- Event-driven dialog handling with a bounded wait for presence
"""

from __future__ import annotations

import logging
import time
from collections.abc import Generator
from contextlib import contextmanager

from playwright.sync_api import Dialog, Error as PlaywrightError, Page, sync_playwright

from workflow_runner.config import RunnerConfig
from workflow_runner.exceptions import SessionError

logger = logging.getLogger(__name__)

DIALOG_POLL_MS = 50


@contextmanager
def browser_session(config: RunnerConfig) -> Generator[Page, None, None]:
    """
    Acquire a browser session for the run.

    Launches Chromium with the configured switches, opens a context with
    a fixed viewport and yields a single page. Browser, context and
    Playwright driver are released when the block exits, whether or not
    it raised.

    Args:
        config: Runner configuration.

    Yields:
        Page: The Playwright page every scenario drives.

    Raises:
        SessionError: If the browser could not be started.
    """
    logger.info("Setting up Chromium browser session...")
    try:
        playwright = sync_playwright().start()
    except PlaywrightError as exc:
        raise SessionError(f"Failed to start Playwright: {exc}") from exc

    try:
        browser = playwright.chromium.launch(
            headless=config.headless,
            args=config.browser_args,
        )
        context = browser.new_context(
            viewport=config.viewport,
            ignore_https_errors=True,
        )
        context.set_default_timeout(config.timeout_ms)
        page = context.new_page()
    except PlaywrightError as exc:
        playwright.stop()
        raise SessionError(f"Failed to launch browser: {exc}") from exc

    logger.info("Browser session initialized successfully")
    try:
        yield page
    finally:
        try:
            context.close()
            browser.close()
        finally:
            playwright.stop()
        logger.info("Browser session closed successfully")


class DialogGuard:
    """
    Accepts every native dialog the page raises and records its text.

    Playwright dispatches dialogs as events; once a handler is registered
    the dialog is accepted as soon as the driver processes the event.
    :meth:`handle_alert` gives the page a short window to raise a dialog
    after an action so its text can be logged before the next step.

    Attributes:
        page: Page the guard is attached to.
        timeout: Default wait for a dialog to appear, in seconds.
        messages: Text of every dialog seen, in order.
    """

    def __init__(self, page: Page, timeout: float = 1.0):
        self.page = page
        self.timeout = timeout
        self.messages: list[str] = []
        self._observed = 0
        page.on("dialog", self._on_dialog)

    def _on_dialog(self, dialog: Dialog) -> None:
        self.messages.append(dialog.message)
        dialog.accept()

    def handle_alert(self, timeout: float | None = None) -> str | None:
        """
        Wait briefly for a dialog raised since the last call.

        Args:
            timeout: Seconds to wait; defaults to the guard's timeout.

        Returns:
            The dialog text, or None if no new dialog appeared in time.
        """
        budget = self.timeout if timeout is None else timeout
        deadline = time.monotonic() + budget
        try:
            while len(self.messages) <= self._observed:
                if time.monotonic() >= deadline:
                    return None
                # wait_for_timeout keeps Playwright dispatching events
                self.page.wait_for_timeout(DIALOG_POLL_MS)
        except PlaywrightError as exc:
            logger.debug(f"Stopped waiting for dialog: {exc}")
            return None

        self._observed = len(self.messages)
        text = self.messages[-1]
        logger.info(f"Alert detected: {text}")
        return text
