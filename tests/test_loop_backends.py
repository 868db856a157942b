# tests/test_loop_backends.py

from __future__ import annotations

import asyncio
import gc

import pytest

from laterkit.backends.idle import IdleQueue
from laterkit.backends.loop import ImmediateBackend, MicrotaskBackend, NowBackend, TimerBackend
from laterkit.config import get_settings
from laterkit.core.host import LoopHost, get_host, set_host
from laterkit.tasks.adapters import animation_frame, idle, immediate, microtask, timeout
from laterkit.tasks.task_models import TaskState


@pytest.mark.asyncio
async def test_microtask_completes_after_one_loop_turn() -> None:
    task = microtask(lambda: "x")
    assert task.state is TaskState.SCHEDULED

    await asyncio.sleep(0)
    assert task.state is TaskState.COMPLETED
    assert await task == "x"


@pytest.mark.asyncio
async def test_immediate_runs_before_zero_delay_timer_scheduled_earlier() -> None:
    ran: list[str] = []
    timer = timeout(0, lambda: ran.append("timer0"))
    imm = immediate(lambda: ran.append("immediate"))

    await asyncio.sleep(0.01)
    assert ran == ["immediate", "timer0"]
    assert imm.state is TaskState.COMPLETED
    assert timer.state is TaskState.COMPLETED


@pytest.mark.asyncio
async def test_immediate_keeps_fifo_order_with_microtasks() -> None:
    ran: list[str] = []
    micro = microtask(lambda: ran.append("microtask"))
    imm = immediate(lambda: ran.append("immediate"))

    await asyncio.sleep(0)
    assert micro.state is TaskState.COMPLETED
    assert imm.state is TaskState.COMPLETED
    assert ran == ["microtask", "immediate"]


@pytest.mark.asyncio
async def test_timeout_on_real_loop() -> None:
    task = timeout(0.05, lambda: "done")

    await asyncio.sleep(0)
    assert task.state is TaskState.SCHEDULED
    await asyncio.sleep(0.1)
    assert task.state is TaskState.COMPLETED
    assert await task == "done"


@pytest.mark.asyncio
async def test_timeout_cancel_on_real_loop_never_runs() -> None:
    ran: list[int] = []
    task = timeout(0.02, lambda: ran.append(1))

    assert task.cancel("stop") is True
    await asyncio.sleep(0.05)
    assert ran == []
    assert await task == "stop"


@pytest.mark.asyncio
async def test_idle_and_frame_fall_back_to_timers_by_default() -> None:
    frame = animation_frame(lambda: "frame")
    idle_task = idle(0.03, lambda: "idle")

    await asyncio.sleep(0)
    assert frame.state is TaskState.SCHEDULED
    assert idle_task.state is TaskState.SCHEDULED

    await asyncio.sleep(0.1)
    assert await frame == "frame"
    assert await idle_task == "idle"


@pytest.mark.asyncio
async def test_timer_backend_thunk_cancels_that_handle_only() -> None:
    loop = asyncio.get_running_loop()
    fired: list[str] = []
    backend = TimerBackend(loop, 0.01)

    cancel_a = backend.schedule(lambda: fired.append("a"))
    backend.schedule(lambda: fired.append("b"))
    assert cancel_a is not None
    cancel_a()

    await asyncio.sleep(0.05)
    assert fired == ["b"]


@pytest.mark.asyncio
async def test_non_cancellable_backends_return_no_thunk() -> None:
    loop = asyncio.get_running_loop()
    fired: list[str] = []

    assert NowBackend().schedule(lambda: fired.append("now")) is None
    assert fired == ["now"]
    assert MicrotaskBackend(loop).schedule(lambda: fired.append("micro")) is None
    assert ImmediateBackend(loop).schedule(lambda: fired.append("imm")) is None

    await asyncio.sleep(0)
    assert fired == ["now", "micro", "imm"]


@pytest.mark.asyncio
async def test_get_host_is_cached_per_loop_and_replaceable() -> None:
    loop = asyncio.get_running_loop()
    default = get_host()
    assert get_host() is default
    assert isinstance(default, LoopHost)
    assert default.frame_fallback_delay == get_settings().frame_fallback_delay
    assert default.idle_backend(1.0) is None
    assert default.frame_backend() is None

    custom = LoopHost(loop, frame_fallback_delay=0.001)
    set_host(custom)
    assert get_host() is custom


def test_host_registry_does_not_keep_finished_loops(host_registry) -> None:
    async def touch_host() -> None:
        get_host()
        await asyncio.sleep(0)

    for _ in range(5):
        asyncio.run(touch_host())
    gc.collect()

    assert len(host_registry) == 0


def test_closed_loop_host_with_idle_queue_is_pruned(host_registry) -> None:
    async def register() -> None:
        loop = asyncio.get_running_loop()
        set_host(LoopHost(loop, idle_queue=IdleQueue(loop)))

    asyncio.run(register())

    async def touch_host() -> None:
        get_host()

    asyncio.run(touch_host())
    gc.collect()

    assert len(host_registry) == 0
