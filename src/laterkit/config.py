# src/laterkit/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole library.
- Every value has a default, so importing never requires configuration.
- Malformed values fall back to the default instead of failing at import.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "LATER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float, *, minimum: float = 0.0) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if value != value or value < minimum:  # NaN or out of range
        return default
    return value


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Logging ----
    log_level: str
    log_dir: Path | None

    # ---- Redraw frames ----
    # Delay used by animation_frame() when the host has no frame clock.
    # ~one frame at 60 Hz; tune for the target display.
    frame_fallback_delay: float
    frame_rate: float

    # ---- Idle detection (IdleQueue.serve) ----
    idle_interval: float
    idle_budget: float
    idle_max_lag: float

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            log_level=_env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO",
            log_dir=_env_path(_k("LOG_DIR")),
            frame_fallback_delay=_env_float(_k("FRAME_FALLBACK_DELAY"), 0.015),
            frame_rate=_env_float(_k("FRAME_RATE"), 60.0, minimum=1.0),
            idle_interval=_env_float(_k("IDLE_INTERVAL"), 0.05),
            idle_budget=_env_float(_k("IDLE_BUDGET"), 0.01),
            idle_max_lag=_env_float(_k("IDLE_MAX_LAG"), 0.005),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
