"""
Data model for the workflow runner.

This module defines the enumerations shared with the application under
test (priority and status vocabularies) and the result records the runner
produces for each scenario and for the run as a whole.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Priority(str, Enum):
    """Enumeration of entity priorities offered by the create form."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Status(str, Enum):
    """Enumeration of entity statuses, in lifecycle order."""

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Scenario:
    """
    One named, ordered test case in the battery.

    Attributes:
        position: Execution index; scenarios run in ascending order.
        name: Display name template; ``{noun}`` and ``{Noun}`` are
              replaced with the profile's entity noun.
        steps: Callable that receives the scenario context.
        requires_clean: Whether the entity list is cleared first.
    """

    position: int
    name: str
    steps: Callable[[Any], None]
    requires_clean: bool = False

    def display_name(self, noun: str) -> str:
        """Render the name for a concrete entity noun."""
        return self.name.format(noun=noun, Noun=noun.capitalize())


@dataclass
class ScenarioResult:
    """Verdict of a single scenario."""

    position: int
    name: str
    passed: bool
    elapsed: float
    message: str | None = None
    notes: list[str] = field(default_factory=list)
    screenshot: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to a JSON-friendly dictionary."""
        return {
            "position": self.position,
            "name": self.name,
            "passed": self.passed,
            "elapsed": round(self.elapsed, 3),
            "message": self.message,
            "notes": list(self.notes),
            "screenshot": self.screenshot,
        }


@dataclass
class RunReport:
    """
    Aggregate outcome of one runner invocation.

    Attributes:
        app: Profile name of the target application.
        base_url: Base URL the scenarios ran against.
        started_at: UTC timestamp when the run began.
        finished_at: UTC timestamp when the session was released.
        results: Per-scenario results in execution order.
    """

    app: str
    base_url: str
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None
    results: list[ScenarioResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def ok(self) -> bool:
        """True when every scenario passed."""
        return self.failed == 0

    @property
    def elapsed(self) -> float:
        return sum(result.elapsed for result in self.results)

    def to_dict(self) -> dict[str, Any]:
        """Convert the report to a JSON-friendly dictionary."""
        return {
            "app": self.app,
            "base_url": self.base_url,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "summary": {
                "total": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "elapsed": round(self.elapsed, 3),
            },
            "results": [result.to_dict() for result in self.results],
        }
