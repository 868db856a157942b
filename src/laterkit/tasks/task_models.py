# src/laterkit/tasks/task_models.py

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import TypeAlias, TypeVar

T = TypeVar("T")


class TaskState(StrEnum):
    """
    LaterTask lifecycle state.

    Notes:
    - SCHEDULED is the only state start/cancel/reject accept.
    - STARTED stays put when the callback raises; the failure lives in the
      task's future, not here.
    - CANCELLED is shared by cancel() and reject().
    """

    SCHEDULED = "scheduled"
    STARTED = "started"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


LaterCallback: TypeAlias = "Callable[[], T | Awaitable[T]] | None"
