# src/laterkit/backends/frames.py

from __future__ import annotations

"""
Redraw-frame clock.

FrameClock collects "run on the next frame" callbacks and flushes them on
tick(). A renderer can call tick() from its own refresh loop, or start() the
clock to tick on the asyncio loop at a fixed rate.
"""

import asyncio
import logging

from ..config import get_settings
from ..core.ports import CancelThunk, FireCallback

logger = logging.getLogger(__name__)


class FrameClock:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None, *, fps: float | None = None) -> None:
        if fps is None:
            fps = get_settings().frame_rate
        if fps <= 0:
            raise ValueError("fps must be > 0")
        self.loop = loop or asyncio.get_running_loop()
        self.interval = 1.0 / float(fps)
        self._next_handle = 1
        self._callbacks: dict[int, FireCallback] = {}
        self._timer: asyncio.TimerHandle | None = None
        self.frame_count = 0

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    @property
    def running(self) -> bool:
        return self._timer is not None

    def request_frame(self, fire: FireCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = fire
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    def tick(self) -> int:
        """Run callbacks requested before this frame. Returns how many ran."""
        self.frame_count += 1
        batch, self._callbacks = self._callbacks, {}
        for handle, fire in batch.items():
            try:
                fire()
            except Exception:
                logger.exception("frame callback failed handle=%s frame=%s", handle, self.frame_count)
        return len(batch)

    def start(self) -> None:
        if self._timer is None:
            self._timer = self.loop.call_later(self.interval, self._on_timer)

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = self.loop.call_later(self.interval, self._on_timer)
        self.tick()


class FrameBackend:
    def __init__(self, clock: FrameClock) -> None:
        self.clock = clock

    def schedule(self, fire: FireCallback) -> CancelThunk | None:
        handle = self.clock.request_frame(fire)
        return lambda: self.clock.cancel_frame(handle)
