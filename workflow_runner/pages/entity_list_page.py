"""
Entity List Page Object.

This page object encapsulates every interaction with the single-page
tracker UI: the create form, the rendered entity list, per-item actions
and the optional bulk delete control. All selectors come from the
application profile, so one page object serves both Task Manager and
Bug Fixer.

Key Concepts Demonstrated:
- Profile-driven locators
- Dialog suppression after every mutating action
- Data extraction from rendered items
- Waiting on observable postconditions (item counts, status markers)
"""

from __future__ import annotations

from playwright.sync_api import Locator, Page

from workflow_runner.driver import DialogGuard
from workflow_runner.exceptions import WaitTimeout
from workflow_runner.models import Priority, Status
from workflow_runner.pages.base_page import BasePage
from workflow_runner.profiles import AppProfile


class EntityListPage(BasePage):
    """
    Page object for the tracker home page.

    Provides methods for:
    - Filling and submitting the create form
    - Reading rendered entities (titles, descriptions, style markers)
    - Per-item actions (complete, start work, delete)
    - Bulk deletion
    """

    URL_PATH = "/"

    def __init__(
        self,
        page: Page,
        base_url: str,
        profile: AppProfile,
        dialogs: DialogGuard,
        timeout: float = 10.0,
    ):
        """
        Initialize EntityListPage.

        Args:
            page: Playwright page instance.
            base_url: Base URL of the application.
            profile: Selector map of the target application.
            dialogs: Dialog guard attached to the same page.
            timeout: Explicit wait budget in seconds.
        """
        super().__init__(page, base_url, timeout)
        self.profile = profile
        self.dialogs = dialogs

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate(self) -> "EntityListPage":
        """
        Navigate to the entity list page.

        Returns:
            Self for method chaining.
        """
        self.navigate_to(self.URL_PATH)
        self.wait_for_page_load()
        return self

    # -------------------------------------------------------------------------
    # Form Locators
    # -------------------------------------------------------------------------

    @property
    def title_input(self) -> Locator:
        return self.page.locator(f"#{self.profile.title_input_id}")

    @property
    def description_input(self) -> Locator:
        return self.page.locator(f"#{self.profile.description_input_id}")

    @property
    def priority_select(self) -> Locator:
        return self.page.locator(f"#{self.profile.priority_select_id}")

    @property
    def submit_button(self) -> Locator:
        return self.page.locator(f"#{self.profile.submit_id}")

    @property
    def delete_all_button(self) -> Locator:
        """Locator for the optional bulk delete control."""
        return self.page.locator(f"#{self.profile.delete_all_id}")

    # -------------------------------------------------------------------------
    # Item Locators
    # -------------------------------------------------------------------------

    @property
    def items(self) -> Locator:
        """Locator for every rendered entity."""
        return self.page.locator(f".{self.profile.item_class}")

    @property
    def item_titles(self) -> Locator:
        return self.items.locator(f".{self.profile.item_title_class}")

    def item_action(self, label: str, item: Locator | None = None) -> Locator:
        """
        Locator for buttons whose text contains *label*.

        Args:
            label: Action label, e.g. "Delete" or "Mark Complete".
            item: Restrict the search to one item; defaults to all items.
        """
        scope = self.items if item is None else item
        return scope.locator("button", has_text=label)

    # -------------------------------------------------------------------------
    # Form Actions
    # -------------------------------------------------------------------------

    def fill_form(
        self,
        title: str,
        description: str = "",
        priority: Priority | str | None = None,
    ) -> "EntityListPage":
        """
        Fill the create form, replacing any existing field values.

        Args:
            title: Entity title.
            description: Entity description.
            priority: Priority to select; leaves the current one if None.

        Returns:
            Self for method chaining.
        """
        self.title_input.fill(title)
        self.description_input.fill(description)
        if priority is not None:
            self.priority_select.select_option(Priority(priority).value)
        return self

    def submit(self) -> str | None:
        """
        Click the submit control and dismiss any resulting dialog.

        Returns:
            Text of the dialog the page raised, if any.
        """
        self.submit_button.click()
        return self.dialogs.handle_alert()

    def create_entity(
        self,
        title: str,
        description: str,
        priority: Priority | str = Priority.MEDIUM,
    ) -> str | None:
        """
        Fill the form and submit it to create a new entity.

        Returns:
            Text of the dialog the page raised, if any.
        """
        self.fill_form(title, description, priority)
        return self.submit()

    def title_validation_message(self) -> str:
        """Return the browser's constraint validation message for the title input."""
        return self.title_input.evaluate("element => element.validationMessage") or ""

    # -------------------------------------------------------------------------
    # Item Actions
    # -------------------------------------------------------------------------

    def click_action(self, label: str, item: Locator | None = None) -> str | None:
        """
        Click the first action labelled *label* and dismiss any dialog.

        Returns:
            Text of the dialog the page raised, if any.
        """
        self.item_action(label, item).first.click()
        return self.dialogs.handle_alert()

    def delete_first(self) -> str | None:
        """Delete the first rendered entity."""
        return self.click_action(self.profile.delete_label)

    def delete_all(self) -> str | None:
        """Click the bulk delete control and dismiss any dialog."""
        self.delete_all_button.click()
        return self.dialogs.handle_alert()

    # -------------------------------------------------------------------------
    # Data Extraction
    # -------------------------------------------------------------------------

    def count(self) -> int:
        """Return the number of rendered entities."""
        return self.items.count()

    def delete_action_count(self) -> int:
        return self.item_action(self.profile.delete_label).count()

    def titles(self) -> list[str]:
        """
        Get titles of all rendered entities.

        Returns:
            List of titles (whitespace stripped), in DOM order.
        """
        return [text.strip() for text in self.item_titles.all_inner_texts()]

    def item_title(self, item: Locator) -> str:
        return item.locator(f".{self.profile.item_title_class}").first.inner_text().strip()

    def item_description(self, item: Locator) -> str:
        return item.locator(f".{self.profile.item_description_class}").first.inner_text().strip()

    def item_classes(self) -> list[str]:
        """Return the class attribute of every rendered entity."""
        return [item.get_attribute("class") or "" for item in self.items.all()]

    def has_priority_marker(self, item: Locator, priority: Priority | str) -> bool:
        marker = self.profile.priority_marker(priority)
        return marker in (item.get_attribute("class") or "").split()

    def status_classes(self) -> list[str]:
        """
        Return the class attribute of each entity's status badge.

        Entities without a status badge are skipped.
        """
        classes = []
        for item in self.items.all():
            badge = item.locator(f".{self.profile.item_status_class}")
            if badge.count():
                classes.append(badge.first.get_attribute("class") or "")
        return classes

    def has_status(self, status: Status | str) -> bool:
        """Return whether any entity's status badge carries *status*."""
        marker = self.profile.status_marker(status)
        return any(marker in classes.split() for classes in self.status_classes())

    # -------------------------------------------------------------------------
    # Waits
    # -------------------------------------------------------------------------

    def wait_for_count(
        self,
        expected: int,
        timeout: float | None = None,
        message: str | None = None,
    ) -> bool:
        """
        Wait until exactly *expected* entities are rendered.

        Args:
            expected: Target entity count.
            timeout: Seconds to wait (defaults to page timeout).
            message: Raise WaitTimeout with this message on timeout;
                     when omitted, return False instead.
        """
        budget = self.timeout if timeout is None else timeout
        if self.poll(lambda: self.count() == expected, budget):
            return True
        if message is not None:
            raise WaitTimeout(
                f"{message}: expected {expected}, found {self.count()} (waited {budget:g}s)"
            )
        return False
