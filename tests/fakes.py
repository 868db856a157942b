# tests/fakes.py

from __future__ import annotations

import asyncio
from collections.abc import Callable
from heapq import heappop, heappush

Fire = Callable[[], object]


class FakeClock:
    """
    Manual clock with one-shot timers.

    Nothing fires until advance() is called, so tests control time exactly.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = 0
        self._queue: list[tuple[float, int]] = []
        self._timers: dict[int, Fire] = {}
        self.delays: list[float] = []

    @property
    def pending(self) -> int:
        return len(self._timers)

    def call_later(self, delay: float, fire: Fire) -> int:
        self._seq += 1
        self.delays.append(delay)
        self._timers[self._seq] = fire
        heappush(self._queue, (self.now + delay, self._seq))
        return self._seq

    def cancel(self, timer_id: int) -> None:
        self._timers.pop(timer_id, None)

    def advance(self, delta: float) -> int:
        self.now += delta
        executed = 0
        while self._queue and self._queue[0][0] <= self.now:
            _, timer_id = heappop(self._queue)
            fire = self._timers.pop(timer_id, None)
            if fire is None:
                continue
            fire()
            executed += 1
        return executed


class QueueBackend:
    """Non-cancellable backend: fire() runs when the test drains the queue."""

    def __init__(self, queue: list[Fire]) -> None:
        self.queue = queue

    def schedule(self, fire: Fire):
        self.queue.append(fire)
        return None


class ClockBackend:
    def __init__(self, host: FakeHost, delay: float) -> None:
        self.host = host
        self.delay = delay

    def schedule(self, fire: Fire):
        timer_id = self.host.clock.call_later(self.delay, fire)

        def _cancel() -> None:
            self.host.cancel_calls.append(("timer", timer_id))
            self.host.clock.cancel(timer_id)

        return _cancel


class RegistryBackend:
    """Cancellable backend keyed by handle (idle requests, frame requests)."""

    def __init__(self, host: FakeHost, kind: str, registry: dict[int, Fire]) -> None:
        self.host = host
        self.kind = kind
        self.registry = registry

    def schedule(self, fire: Fire):
        self.host.seq += 1
        handle = self.host.seq
        self.registry[handle] = fire

        def _cancel() -> None:
            self.host.cancel_calls.append((self.kind, handle))
            self.registry.pop(handle, None)

        return _cancel


class FakeHost:
    """
    Deterministic Host for adapter and state-machine tests.

    Futures still live on the real running loop; only the scheduling
    primitives are fake.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        *,
        immediate: bool = True,
        idle: bool = True,
        frames: bool = True,
        frame_fallback_delay: float = 0.015,
    ) -> None:
        self.loop = loop or asyncio.get_running_loop()
        self.frame_fallback_delay = frame_fallback_delay
        self.supports_immediate = immediate
        self.supports_idle = idle
        self.supports_frames = frames

        self.clock = FakeClock()
        self.microtasks: list[Fire] = []
        self.immediates: list[Fire] = []
        self.idle_requests: dict[int, Fire] = {}
        self.idle_timeouts: list[float] = []
        self.frame_requests: dict[int, Fire] = {}
        self.cancel_calls: list[tuple[str, int]] = []
        self.seq = 0

    def microtask_backend(self):
        return QueueBackend(self.microtasks)

    def immediate_backend(self):
        if not self.supports_immediate:
            return None
        return QueueBackend(self.immediates)

    def timer_backend(self, delay: float):
        return ClockBackend(self, delay)

    def idle_backend(self, timeout: float):
        if not self.supports_idle:
            return None
        self.idle_timeouts.append(timeout)
        return RegistryBackend(self, "idle", self.idle_requests)

    def frame_backend(self):
        if not self.supports_frames:
            return None
        return RegistryBackend(self, "frame", self.frame_requests)

    # ---------- drive ----------

    def run_microtasks(self) -> int:
        return _drain_list(self.microtasks)

    def run_immediates(self) -> int:
        return _drain_list(self.immediates)

    def run_idle(self) -> int:
        return _drain_dict(self.idle_requests)

    def run_frame(self) -> int:
        return _drain_dict(self.frame_requests)


def _drain_list(queue: list[Fire]) -> int:
    batch = list(queue)
    queue.clear()
    for fire in batch:
        fire()
    return len(batch)


def _drain_dict(registry: dict[int, Fire]) -> int:
    batch = list(registry.values())
    registry.clear()
    for fire in batch:
        fire()
    return len(batch)
