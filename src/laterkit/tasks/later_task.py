# src/laterkit/tasks/later_task.py

from __future__ import annotations

"""
LaterTask: a deferred unit of work with a four-state lifecycle.

The task owns one asyncio future (private) and exposes:
- state: SCHEDULED -> STARTED -> COMPLETED, or SCHEDULED -> CANCELLED
- start(): run the work now (backends call this when they fire)
- cancel(value): never run; resolve with value and release the backend request
- reject(reason): never run; fail the future, leave the backend alone

Only the first transition out of SCHEDULED wins. Later calls return False and
never raise, so a manual start() can race a backend firing safely.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any, Generic, TypeVar

from ..core.ports import CancelThunk
from ..errors import LaterTaskRejected
from .task_models import LaterCallback, TaskState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LaterTask(Generic[T]):
    def __init__(
        self,
        callback: LaterCallback[T] = None,
        on_cancel: CancelThunk | None = None,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[T] = self._loop.create_future()
        self._state = TaskState.SCHEDULED
        self._callback = callback
        self._on_cancel = on_cancel
        self._done_callbacks: list[tuple[Callable[[LaterTask[T]], object], Callable[..., object]]] = []

    def __repr__(self) -> str:
        return f"<LaterTask state={self._state.value}>"

    @property
    def state(self) -> TaskState:
        return self._state

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    # ---------- transitions ----------

    def start(self) -> bool:
        if self._state is not TaskState.SCHEDULED:
            return False

        callback = self._callback
        if callback is None:
            self._resolve(None)  # type: ignore[arg-type]
            self._state = TaskState.COMPLETED
            logger.debug("%r completed (no callback)", self)
            return True

        self._state = TaskState.STARTED
        try:
            ret = callback()
        except (Exception, asyncio.CancelledError) as exc:
            logger.debug("%r callback raised %r", self, exc)
            self._fail(exc)
            return True

        if inspect.isawaitable(ret):
            self._adopt(ret)
        else:
            self._resolve(ret)
            self._state = TaskState.COMPLETED
            logger.debug("%r completed", self)
        return True

    def cancel(self, value: T | None = None) -> bool:
        if self._state is not TaskState.SCHEDULED:
            return False

        self._state = TaskState.CANCELLED
        self._resolve(value)  # type: ignore[arg-type]
        logger.debug("%r cancelled", self)

        if self._on_cancel is not None:
            try:
                self._on_cancel()
            except Exception:
                logger.exception("cancel hook failed for %r", self)
        return True

    def reject(self, reason: Any = None) -> bool:
        if self._state is not TaskState.SCHEDULED:
            return False

        exc = _as_exception(reason)
        self._state = TaskState.CANCELLED
        self._fail(exc)
        logger.debug("%r rejected", self)
        return True

    # ---------- awaitable surface ----------

    def __await__(self) -> Generator[Any, None, T]:
        # shield: cancelling an awaiter must not settle the task itself
        return asyncio.shield(self._future).__await__()

    def done(self) -> bool:
        return self._future.done()

    def result(self) -> T:
        return self._future.result()

    def exception(self) -> BaseException | None:
        return self._future.exception()

    def add_done_callback(self, fn: Callable[[LaterTask[T]], object]) -> None:
        """Call fn(task) once the outcome is settled (scheduled via the loop, like asyncio)."""

        def _relay(_fut: asyncio.Future[T]) -> None:
            fn(self)

        self._done_callbacks.append((fn, _relay))
        self._future.add_done_callback(_relay)

    def remove_done_callback(self, fn: Callable[[LaterTask[T]], object]) -> int:
        removed = 0
        kept = []
        for registered, relay in self._done_callbacks:
            if registered == fn:
                removed += self._future.remove_done_callback(relay)
            else:
                kept.append((registered, relay))
        self._done_callbacks = kept
        return removed

    # ---------- settlement (first writer wins) ----------

    def _resolve(self, value: T) -> None:
        if not self._future.done():
            self._future.set_result(value)

    def _fail(self, exc: BaseException) -> None:
        if self._future.done():
            return
        if isinstance(exc, asyncio.CancelledError):
            self._future.cancel()
        else:
            self._future.set_exception(exc)

    def _adopt(self, awaitable: Awaitable[T]) -> None:
        inner = asyncio.ensure_future(awaitable, loop=self._loop)

        def _settled(fut: asyncio.Future[T]) -> None:
            self._state = TaskState.COMPLETED
            if self._future.done():
                return
            if fut.cancelled():
                self._future.cancel()
            elif fut.exception() is not None:
                self._fail(fut.exception())  # type: ignore[arg-type]
            else:
                self._future.set_result(fut.result())
            logger.debug("%r completed (awaited)", self)

        inner.add_done_callback(_settled)


def _as_exception(reason: Any) -> BaseException:
    if isinstance(reason, BaseException):
        return reason
    if isinstance(reason, type) and issubclass(reason, BaseException):
        try:
            return reason()
        except Exception:
            # class needs constructor arguments
            return LaterTaskRejected(reason)
    return LaterTaskRejected(reason)
