"""
Unit tests for bounded polling waits.
"""

from __future__ import annotations

import pytest

from workflow_runner.exceptions import WaitTimeout
from workflow_runner.waits import poll_until

pytestmark = pytest.mark.unit


def test_returns_first_truthy_value():
    # Arrange
    values = iter([0, None, "", "ready", "later"])

    # Act
    result = poll_until(lambda: next(values), timeout=1.0, interval=0.001)

    # Assert
    assert result == "ready"


def test_immediate_success_does_not_sleep():
    sleeps = []

    result = poll_until(lambda: True, timeout=5.0, sleep=sleeps.append)

    assert result is True
    assert sleeps == []


def test_timeout_without_message_returns_falsy_value():
    result = poll_until(lambda: 0, timeout=0.05, interval=0.01)

    assert result == 0


def test_timeout_with_message_raises_wait_timeout():
    with pytest.raises(WaitTimeout, match="count should drop"):
        poll_until(lambda: False, timeout=0.05, interval=0.01, message="count should drop")


def test_wait_timeout_is_an_assertion_error():
    """Test that timeouts are reported like failed assertions."""
    with pytest.raises(AssertionError):
        poll_until(lambda: False, timeout=0, message="never")


def test_zero_timeout_checks_once():
    calls = []

    poll_until(lambda: calls.append(1), timeout=0)

    assert calls == [1]


def test_sleep_never_overshoots_deadline():
    # Arrange
    sleeps = []

    # Act
    poll_until(lambda: False, timeout=0.05, interval=10.0, sleep=lambda s: sleeps.append(s))

    # Assert
    assert sleeps
    assert all(duration <= 0.05 for duration in sleeps)
