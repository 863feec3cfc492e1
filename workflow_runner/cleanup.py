"""
Clear-all procedure for scenario isolation.

Scenarios that need a clean slate call :func:`clear_all_entities` first.
Clearing is best-effort: it prefers the page's bulk delete control, falls
back to deleting items one at a time, and never raises into the calling
scenario. Leftover state, if any, surfaces through that scenario's own
assertions.
"""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError

from workflow_runner.pages.entity_list_page import EntityListPage

logger = logging.getLogger(__name__)

# Settle budgets (seconds) for the list to reflect a deletion
DELETE_ALL_SETTLE = 2.0
SINGLE_DELETE_SETTLE = 0.5

MAX_SINGLE_DELETES = 50


def clear_all_entities(page: EntityListPage, max_iterations: int = MAX_SINGLE_DELETES) -> int:
    """
    Empty the entity list, best-effort.

    Args:
        page: Entity list page object.
        max_iterations: Safety cap on single deletes in the fallback path.

    Returns:
        Number of entities still rendered afterwards, or -1 if the page
        could not be read.
    """
    noun = page.profile.noun
    try:
        page.navigate()
        page.wait_for_heading()
        page.dialogs.handle_alert()

        if not _delete_all(page):
            _delete_individually(page, max_iterations)

        page.dialogs.handle_alert()
    except PlaywrightError as exc:
        logger.warning(f"No existing {noun}s to clear or page loading: {exc}")
        page.dialogs.handle_alert()

    try:
        remaining = page.count()
    except PlaywrightError as exc:
        logger.warning(f"Could not count remaining {noun}s: {exc}")
        return -1

    if remaining:
        logger.warning(f"{remaining} {noun}(s) left after clearing")
    return remaining


def _delete_all(page: EntityListPage) -> bool:
    """Use the bulk delete control if the page exposes one."""
    noun = page.profile.noun
    try:
        if not page.delete_all_button.is_visible():
            return False
        page.delete_all()
    except PlaywrightError as exc:
        logger.info(f"Bulk delete unavailable, deleting {noun}s individually: {exc}")
        return False

    page.wait_for_count(0, timeout=DELETE_ALL_SETTLE)
    page.dialogs.handle_alert()
    logger.info(f"All existing {noun}s cleared successfully")
    return True


def _delete_individually(page: EntityListPage, max_iterations: int) -> None:
    """Delete the first item repeatedly until none remain or the cap is hit."""
    noun = page.profile.noun
    deleted = 0
    for _ in range(max_iterations):
        try:
            if page.delete_action_count() == 0:
                break
            before = page.count()
            page.delete_first()
            page.wait_for_count(before - 1, timeout=SINGLE_DELETE_SETTLE)
            deleted += 1
        except PlaywrightError as exc:
            logger.warning(f"Error during individual {noun} deletion: {exc}")
            page.dialogs.handle_alert()
            break

    logger.info(f"Individual {noun} deletion completed ({deleted} deleted)")
