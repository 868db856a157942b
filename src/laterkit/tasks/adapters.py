# src/laterkit/tasks/adapters.py

from __future__ import annotations

"""
Scheduling adapters.

Each adapter builds a LaterTask and hands its start() to one backend:

    now             synchronous                         not cancellable
    immediate       ready queue, ahead of due timers    not cancellable  -> timeout(0)
    microtask       end of the current loop iteration   not cancellable
    timeout(d)      after at least d seconds            cancellable
    idle(d)         next idle period, at most d seconds cancellable      -> timeout(d)
    animation_frame next redraw frame                   cancellable      -> timeout(frame_fallback_delay)

The arrow is the fallback used when the host reports the backend as
unsupported. Adapters never raise; bad input is rejected by later().
"""

from typing import TypeVar

from ..backends.loop import NowBackend
from ..core.host import get_host
from ..core.ports import Backend, CancelThunk, Host
from .later_task import LaterTask
from .task_models import LaterCallback

T = TypeVar("T")


def _deferred(callback: LaterCallback[T], backend: Backend, host: Host) -> LaterTask[T]:
    cancel_thunk: CancelThunk | None = None

    def _release() -> None:
        if cancel_thunk is not None:
            cancel_thunk()

    task: LaterTask[T] = LaterTask(callback, _release, loop=host.loop)
    cancel_thunk = backend.schedule(task.start)
    return task


def now(callback: LaterCallback[T] = None, *, host: Host | None = None) -> LaterTask[T]:
    host = host or get_host()
    return _deferred(callback, NowBackend(), host)


def immediate(callback: LaterCallback[T] = None, *, host: Host | None = None) -> LaterTask[T]:
    host = host or get_host()
    backend = host.immediate_backend()
    if backend is None:
        return timeout(0, callback, host=host)
    return _deferred(callback, backend, host)


def microtask(callback: LaterCallback[T] = None, *, host: Host | None = None) -> LaterTask[T]:
    host = host or get_host()
    return _deferred(callback, host.microtask_backend(), host)


def timeout(duration: float, callback: LaterCallback[T] = None, *, host: Host | None = None) -> LaterTask[T]:
    host = host or get_host()
    return _deferred(callback, host.timer_backend(duration), host)


def idle(duration: float, callback: LaterCallback[T] = None, *, host: Host | None = None) -> LaterTask[T]:
    host = host or get_host()
    backend = host.idle_backend(duration)
    if backend is None:
        return timeout(duration, callback, host=host)
    return _deferred(callback, backend, host)


def animation_frame(callback: LaterCallback[T] = None, *, host: Host | None = None) -> LaterTask[T]:
    host = host or get_host()
    backend = host.frame_backend()
    if backend is None:
        return timeout(host.frame_fallback_delay, callback, host=host)
    return _deferred(callback, backend, host)
