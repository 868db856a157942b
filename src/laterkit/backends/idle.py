# src/laterkit/backends/idle.py

from __future__ import annotations

"""
Idle-callback queue.

Callers request a callback "when the loop is idle, but no later than
timeout". Idle periods are announced either by the application calling
run_idle() (e.g. a render loop with time left in its frame) or by serve(),
which treats a low scheduling lag as an idle loop.

Each request gets its own integer handle so requests can be cancelled
independently.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..config import get_settings
from ..core.ports import CancelThunk, FireCallback

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _IdleRequest:
    handle: int
    fire: FireCallback
    deadline_timer: asyncio.TimerHandle | None = None


class IdleQueue:
    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.loop = loop or asyncio.get_running_loop()
        self._clock = clock
        self._next_handle = 1
        self._requests: dict[int, _IdleRequest] = {}

    @property
    def pending(self) -> int:
        return len(self._requests)

    def request(self, fire: FireCallback, timeout: float | None = None) -> int:
        """Queue fire() for the next idle period; with timeout, run it after that many seconds at the latest."""
        handle = self._next_handle
        self._next_handle += 1

        req = _IdleRequest(handle=handle, fire=fire)
        if timeout is not None:
            req.deadline_timer = self.loop.call_later(max(0.0, float(timeout)), self._expire, handle)
        self._requests[handle] = req
        return handle

    def cancel(self, handle: int) -> None:
        req = self._requests.pop(handle, None)
        if req is not None and req.deadline_timer is not None:
            req.deadline_timer.cancel()

    def run_idle(self, budget: float | None = None) -> int:
        """
        Run queued callbacks in request order.

        budget (seconds) bounds the idle period; at least one callback runs
        when any is queued. Requests made while running wait for the next
        idle period. Returns how many callbacks ran.
        """
        deadline = None if budget is None else self._clock() + max(0.0, float(budget))
        batch = list(self._requests)
        executed = 0

        for handle in batch:
            if executed and deadline is not None and self._clock() >= deadline:
                break
            req = self._requests.pop(handle, None)
            if req is None:
                continue
            self._run(req)
            executed += 1
        return executed

    async def serve(
        self,
        *,
        interval: float | None = None,
        budget: float | None = None,
        max_lag: float | None = None,
    ) -> None:
        """
        Detect idle periods by loop lag and run queued callbacks in them.

        Every interval seconds, if the sleep overshot by less than max_lag the
        loop is considered idle and up to budget seconds of callbacks run.
        Unset arguments come from settings (LATER_IDLE_*).
        To stop, cancel the coroutine/task.
        """
        settings = get_settings()
        interval = settings.idle_interval if interval is None else interval
        budget = settings.idle_budget if budget is None else budget
        max_lag = settings.idle_max_lag if max_lag is None else max_lag

        sleep_s = max(0.001, float(interval))
        while True:
            expected = self._clock() + sleep_s
            await asyncio.sleep(sleep_s)
            lag = self._clock() - expected
            if lag <= max_lag and self._requests:
                self.run_idle(budget)

    def _expire(self, handle: int) -> None:
        req = self._requests.pop(handle, None)
        if req is not None:
            req.deadline_timer = None
            self._run(req)

    def _run(self, req: _IdleRequest) -> None:
        if req.deadline_timer is not None:
            req.deadline_timer.cancel()
        try:
            req.fire()
        except Exception:
            logger.exception("idle callback failed handle=%s", req.handle)


class IdleBackend:
    def __init__(self, queue: IdleQueue, timeout: float) -> None:
        self.queue = queue
        self.timeout = timeout

    def schedule(self, fire: FireCallback) -> CancelThunk | None:
        handle = self.queue.request(fire, timeout=self.timeout)
        return lambda: self.queue.cancel(handle)
