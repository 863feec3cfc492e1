"""Exception hierarchy for the workflow runner."""


class WorkflowError(Exception):
    """Base class for runner errors."""


class SessionError(WorkflowError):
    """The browser session could not be acquired. Fatal to the whole run."""


class WaitTimeout(AssertionError):
    """
    A bounded wait expired before its condition held.

    Subclasses AssertionError so a scenario that times out waiting for a
    postcondition is reported the same way as a failed assertion.
    """
