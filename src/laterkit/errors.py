# src/laterkit/errors.py

"""
Exceptions raised by laterkit.

Only the dispatch facade (later_api) raises configuration errors.
LaterTaskRejected is what a task's awaiters see after reject() was called
with something that is not an exception.
"""

from __future__ import annotations

from typing import Any


class LaterError(Exception):
    """Base class for laterkit errors."""


class LaterTaskRejected(LaterError):
    """A task was rejected before it started."""

    def __init__(self, reason: Any = None) -> None:
        self.reason = reason
        msg = "task rejected before start" if reason is None else f"task rejected: {reason!r}"
        super().__init__(msg)


class UnknownLaterMethod(LaterError, ValueError):
    def __init__(self, method: Any) -> None:
        self.method = method
        super().__init__(f"Unknown later method {method!r}")


class DurationRequired(LaterError, ValueError):
    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"An object containing type and duration must be specified for {method!r}")


class InvalidDuration(LaterError, ValueError):
    def __init__(self, method: str, duration: Any) -> None:
        self.method = method
        self.duration = duration
        super().__init__(f"Duration for {method!r} must be a non-negative number, got {duration!r}")
