"""
Application profiles.

A profile is the selector map and vocabulary for one target application.
The Task Manager and Bug Fixer apps share the same page structure but
differ in their entity noun, priority style prefix and the label of the
"start work" action, so the scenario battery reads everything it needs
from the profile instead of hardcoding either vocabulary.
"""

from __future__ import annotations

from dataclasses import dataclass

from workflow_runner.models import Priority, Status


@dataclass(frozen=True)
class AppProfile:
    """
    Selector map and vocabulary for one target application.

    Attributes:
        name: Profile key used on the command line.
        display_name: Expected page title / heading text.
        noun: Entity noun (``task`` or ``bug``).
        default_url: Base URL used when no override is given.
        priority_prefix: Class prefix marking priority on an item.
        complete_label: Text of the per-item "complete" action.
        start_label: Text of the per-item "start work" action.
        delete_label: Text of the per-item delete action.
        delete_all_id: Element id of the bulk delete control.
    """

    name: str
    display_name: str
    noun: str
    default_url: str
    priority_prefix: str = "priority-"
    complete_label: str = "Mark Complete"
    start_label: str = "In Progress"
    delete_label: str = "Delete"
    delete_all_id: str = "delete-all"

    @property
    def title_input_id(self) -> str:
        return f"{self.noun}-title"

    @property
    def description_input_id(self) -> str:
        return f"{self.noun}-description"

    @property
    def priority_select_id(self) -> str:
        return f"{self.noun}-priority"

    @property
    def submit_id(self) -> str:
        return f"submit-{self.noun}"

    @property
    def item_class(self) -> str:
        return f"{self.noun}-item"

    @property
    def item_title_class(self) -> str:
        return f"{self.noun}-title"

    @property
    def item_description_class(self) -> str:
        return f"{self.noun}-description"

    @property
    def item_status_class(self) -> str:
        return f"{self.noun}-status"

    @property
    def title_noun(self) -> str:
        """Capitalized noun for user-facing strings."""
        return self.noun.capitalize()

    def priority_marker(self, priority: Priority | str) -> str:
        """Class name marking an item with the given priority."""
        return f"{self.priority_prefix}{Priority(priority).value}"

    @staticmethod
    def status_marker(status: Status | str) -> str:
        """Class name marking a status badge with the given status."""
        return f"status-{Status(status).value}"


TASK_MANAGER = AppProfile(
    name="task-manager",
    display_name="Task Manager",
    noun="task",
    default_url="http://host.docker.internal:3000",
)

BUG_FIXER = AppProfile(
    name="bug-fixer",
    display_name="Bug Fixer",
    noun="bug",
    default_url="http://host.docker.internal:5000",
    priority_prefix="severity-",
    start_label="Start Work",
)

PROFILES: dict[str, AppProfile] = {
    TASK_MANAGER.name: TASK_MANAGER,
    BUG_FIXER.name: BUG_FIXER,
}


def get_profile(name: str) -> AppProfile:
    """
    Look up a profile by name.

    Raises:
        ValueError: If no profile has that name.
    """
    try:
        return PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise ValueError(f"Unknown application '{name}' (expected one of: {known})") from None
