"""
laterkit: deferred tasks over several scheduling mechanisms.

    task = timeout(0.1, lambda: 42)
    task.start()      # run early, skipping the delay
    task.cancel(7)    # or never run it; awaiting gives 7
    value = await task
"""

from .core.host import LoopHost, get_host, set_host
from .backends.frames import FrameClock
from .backends.idle import IdleQueue
from .errors import (
    DurationRequired,
    InvalidDuration,
    LaterError,
    LaterTaskRejected,
    UnknownLaterMethod,
)
from .tasks.adapters import animation_frame, idle, immediate, microtask, now, timeout
from .tasks.later_api import LaterMethod, LaterSpec, later
from .tasks.later_task import LaterTask
from .tasks.task_models import TaskState

__all__ = [
    "LaterTask",
    "TaskState",
    "LaterMethod",
    "LaterSpec",
    "later",
    "now",
    "immediate",
    "microtask",
    "timeout",
    "idle",
    "animation_frame",
    "LoopHost",
    "get_host",
    "set_host",
    "IdleQueue",
    "FrameClock",
    "LaterError",
    "LaterTaskRejected",
    "UnknownLaterMethod",
    "DurationRequired",
    "InvalidDuration",
]
