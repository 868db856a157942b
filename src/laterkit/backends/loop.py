# src/laterkit/backends/loop.py

"""
Backends built directly on an asyncio event loop.

asyncio has no separate microtask queue, so the mapping is:
- microtask: loop.call_soon, i.e. end of the current loop iteration
- immediate: also loop.call_soon. It shares the FIFO ready queue with
  microtasks, so it runs ahead of any timer that comes due, but an immediate
  queued before a microtask in the same turn runs first
- timer: loop.call_later, cancellable through its own TimerHandle
"""

from __future__ import annotations

import asyncio

from ..core.ports import CancelThunk, FireCallback


class NowBackend:
    """Fires synchronously, before schedule() returns."""

    def schedule(self, fire: FireCallback) -> CancelThunk | None:
        fire()
        return None


class MicrotaskBackend:
    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    def schedule(self, fire: FireCallback) -> CancelThunk | None:
        self.loop.call_soon(fire)
        return None


class ImmediateBackend:
    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    def schedule(self, fire: FireCallback) -> CancelThunk | None:
        self.loop.call_soon(fire)
        return None


class TimerBackend:
    def __init__(self, loop: asyncio.AbstractEventLoop, delay: float) -> None:
        self.loop = loop
        self.delay = max(0.0, float(delay))

    def schedule(self, fire: FireCallback) -> CancelThunk | None:
        handle = self.loop.call_later(self.delay, fire)
        return handle.cancel
