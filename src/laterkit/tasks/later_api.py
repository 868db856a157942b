# src/laterkit/tasks/later_api.py

from __future__ import annotations

"""
Dispatch facade: later(spec, callback).

A spec names one adapter, either as a bare string ("now", "microtask", ...)
or as a mapping {"type": ..., "duration": ...}. "timeout" and "idle" need a
duration, so they must be given as a mapping (or LaterSpec).
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from numbers import Real
from typing import Any, TypeVar

from ..core.ports import Host
from ..errors import DurationRequired, InvalidDuration, UnknownLaterMethod
from . import adapters
from .later_task import LaterTask
from .task_models import LaterCallback

T = TypeVar("T")


class LaterMethod(StrEnum):
    NOW = "now"
    IMMEDIATE = "immediate"
    MICROTASK = "microtask"
    ANIMATION_FRAME = "animationFrame"
    TIMEOUT = "timeout"
    IDLE = "idle"

    @classmethod
    def _missing_(cls, value: object) -> LaterMethod | None:
        if value == "animation_frame":
            return cls.ANIMATION_FRAME
        return None

    @property
    def requires_duration(self) -> bool:
        return self in (LaterMethod.TIMEOUT, LaterMethod.IDLE)


@dataclass(frozen=True, slots=True)
class LaterSpec:
    method: LaterMethod
    duration: float | None = None

    @classmethod
    def parse(cls, spec: str | Mapping[str, Any] | LaterSpec) -> LaterSpec:
        if isinstance(spec, LaterSpec):
            return cls._checked(spec.method, spec.duration, from_string=False)

        if isinstance(spec, str):
            return cls._checked(_method(spec), None, from_string=True)

        if isinstance(spec, Mapping):
            method = _method(spec.get("type"))
            return cls._checked(method, spec.get("duration"), from_string=False)

        raise UnknownLaterMethod(spec)

    @classmethod
    def _checked(cls, method: LaterMethod, duration: Any, *, from_string: bool) -> LaterSpec:
        if not method.requires_duration:
            return cls(method=method)

        if from_string or duration is None:
            raise DurationRequired(method.value)
        if isinstance(duration, bool) or not isinstance(duration, Real):
            raise InvalidDuration(method.value, duration)
        value = float(duration)
        if math.isnan(value) or value < 0:
            raise InvalidDuration(method.value, duration)
        return cls(method=method, duration=value)


def _method(raw: Any) -> LaterMethod:
    try:
        return LaterMethod(raw)
    except ValueError:
        raise UnknownLaterMethod(raw) from None


def later(
    spec: str | Mapping[str, Any] | LaterSpec,
    callback: LaterCallback[T] = None,
    *,
    host: Host | None = None,
) -> LaterTask[T]:
    """
    Schedule callback with the adapter named by spec.

    Raises UnknownLaterMethod, DurationRequired or InvalidDuration for a bad
    spec; nothing is scheduled in that case.
    """
    parsed = LaterSpec.parse(spec)
    if parsed.method.requires_duration and parsed.duration is None:
        raise DurationRequired(parsed.method.value)

    match parsed.method:
        case LaterMethod.NOW:
            return adapters.now(callback, host=host)
        case LaterMethod.IMMEDIATE:
            return adapters.immediate(callback, host=host)
        case LaterMethod.MICROTASK:
            return adapters.microtask(callback, host=host)
        case LaterMethod.ANIMATION_FRAME:
            return adapters.animation_frame(callback, host=host)
        case LaterMethod.TIMEOUT:
            return adapters.timeout(parsed.duration, callback, host=host)
        case LaterMethod.IDLE:
            return adapters.idle(parsed.duration, callback, host=host)
