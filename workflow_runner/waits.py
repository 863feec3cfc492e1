"""
Bounded polling waits.

The runner never sleeps for a fixed duration when the page exposes an
observable postcondition. Instead it polls the postcondition at short
intervals until it holds or a deadline passes.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TypeVar

from workflow_runner.exceptions import WaitTimeout

T = TypeVar("T")

DEFAULT_INTERVAL = 0.1


def poll_until(
    predicate: Callable[[], T],
    timeout: float,
    interval: float = DEFAULT_INTERVAL,
    message: str | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Evaluate *predicate* until it returns a truthy value or *timeout* expires.

    The predicate is always evaluated at least once, and once more at the
    deadline, so a zero timeout still performs a single check.

    Args:
        predicate: Zero-argument callable checked on every poll.
        timeout: Maximum time to wait, in seconds.
        interval: Pause between polls, in seconds.
        message: When given, a timeout raises WaitTimeout with this message.
                 When omitted, the last falsy value is returned instead.
        sleep: Pause function. Browser code passes one that keeps the
               driver's event loop running.

    Returns:
        The first truthy predicate value, or the last falsy one.

    Raises:
        WaitTimeout: If the deadline passes and *message* was given.
    """
    deadline = time.monotonic() + timeout
    while True:
        value = predicate()
        if value:
            return value
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        sleep(min(interval, remaining))

    if message is not None:
        raise WaitTimeout(f"{message} (waited {timeout:g}s)")
    return value
