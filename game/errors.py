"""Exceptions raised by the trial engine and its collaborators."""


class GoNoGoError(Exception):
    """Base class for all task errors."""


class InvalidProfileError(GoNoGoError, ValueError):
    """Age/sex rejected before a session is allowed to start."""

    def __init__(self, field: str, value, reason: str) -> None:
        super().__init__(f"invalid {field}={value!r}: {reason}")
        self.field = field
        self.value = value
        self.reason = reason


class InvalidConfigError(GoNoGoError, ValueError):
    pass


class SessionLifecycleError(GoNoGoError, RuntimeError):
    """
    A timer callback reached a session that is disposed, not current,
    or not in the phase the timer belongs to. Results can no longer be trusted.
    """


class TimerOverlapError(SessionLifecycleError):
    def __init__(self, tag: str) -> None:
        super().__init__(f"timer '{tag}' is already pending")
        self.tag = tag
