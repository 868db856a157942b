# src/laterkit/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the adapters.

Adapters depend on these Protocols instead of reaching for the running loop
directly. This keeps the scheduling primitives swappable and lets tests drive
everything from a deterministic fake clock.
"""

import asyncio
from collections.abc import Callable
from typing import Protocol

FireCallback = Callable[[], object]
# Zero-argument function the backend invokes once (LaterTask.start).

CancelThunk = Callable[[], None]
# Releases one outstanding backend registration.


class Backend(Protocol):
    """
    One scheduling mechanism.

    schedule() requests a single future call of fire() and returns a thunk
    that cancels exactly that request, or None when the mechanism has no way
    to cancel.
    """

    def schedule(self, fire: FireCallback) -> CancelThunk | None: ...


class Host(Protocol):
    """
    Scheduling capabilities for one event loop.

    A backend factory returning None means "not supported here"; the adapter
    then applies its documented fallback.
    """

    loop: asyncio.AbstractEventLoop
    frame_fallback_delay: float

    def microtask_backend(self) -> Backend: ...
    def immediate_backend(self) -> Backend | None: ...
    def timer_backend(self, delay: float) -> Backend: ...
    def idle_backend(self, timeout: float) -> Backend | None: ...
    def frame_backend(self) -> Backend | None: ...
