# src/laterkit/core/host.py

from __future__ import annotations

"""
Default Host implementation on top of asyncio, plus a per-loop registry.

Adapters that are not given a host explicitly use get_host(), which returns
the host registered for the running loop (creating a plain LoopHost on first
use). Register a host with an IdleQueue / FrameClock via set_host() to enable
real idle and frame scheduling; without them those adapters fall back to
timers.

The registry is keyed weakly by loop and LoopHost only holds a weak
reference back, so a default host goes away with its loop. Hosts that own an
IdleQueue or FrameClock (which hold their loop strongly) are dropped from the
registry once their loop is closed.
"""

import asyncio
import logging
import weakref

from ..backends.frames import FrameBackend, FrameClock
from ..backends.idle import IdleBackend, IdleQueue
from ..backends.loop import ImmediateBackend, MicrotaskBackend, TimerBackend
from ..config import get_settings
from .ports import Backend, Host

logger = logging.getLogger(__name__)


class LoopHost:
    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        *,
        idle_queue: IdleQueue | None = None,
        frame_clock: FrameClock | None = None,
        frame_fallback_delay: float | None = None,
    ) -> None:
        self._loop_ref = weakref.ref(loop)
        self.idle_queue = idle_queue
        self.frame_clock = frame_clock
        if frame_fallback_delay is None:
            frame_fallback_delay = get_settings().frame_fallback_delay
        self.frame_fallback_delay = frame_fallback_delay

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        loop = self._loop_ref()
        if loop is None:
            raise RuntimeError("event loop of this host no longer exists")
        return loop

    def __repr__(self) -> str:
        return (
            f"LoopHost(idle={'yes' if self.idle_queue else 'no'}, "
            f"frames={'yes' if self.frame_clock else 'no'}, "
            f"frame_fallback_delay={self.frame_fallback_delay})"
        )

    def microtask_backend(self) -> Backend:
        return MicrotaskBackend(self.loop)

    def immediate_backend(self) -> Backend | None:
        return ImmediateBackend(self.loop)

    def timer_backend(self, delay: float) -> Backend:
        return TimerBackend(self.loop, delay)

    def idle_backend(self, timeout: float) -> Backend | None:
        if self.idle_queue is None:
            return None
        return IdleBackend(self.idle_queue, timeout)

    def frame_backend(self) -> Backend | None:
        if self.frame_clock is None:
            return None
        return FrameBackend(self.frame_clock)


_hosts: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Host] = weakref.WeakKeyDictionary()


def _prune_closed() -> None:
    for loop in [lp for lp in list(_hosts.keys()) if lp.is_closed()]:
        _hosts.pop(loop, None)


def get_host(loop: asyncio.AbstractEventLoop | None = None) -> Host:
    loop = loop or asyncio.get_running_loop()
    _prune_closed()
    host = _hosts.get(loop)
    if host is None:
        host = LoopHost(loop)
        _hosts[loop] = host
        logger.debug("Created default %r", host)
    return host


def set_host(host: Host) -> None:
    """Register host for its loop; adapters called without host= will use it."""
    _prune_closed()
    _hosts[host.loop] = host
    logger.debug("Registered %r", host)
