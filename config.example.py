# config.example.py

"""
Documentation-only module (safe to commit).

laterkit reads its settings from environment variables (optionally via a
local .env file). Every variable is optional.
"""

ENV_VARS = {
    # Logging
    "LATER_LOG_LEVEL": "Console logging level for the CLI (default: INFO).",
    "LATER_LOG_DIR": "Directory for laterkit.log; unset => console only.",
    # Redraw frames
    "LATER_FRAME_FALLBACK_DELAY": (
        "Seconds animation_frame() waits when no FrameClock is registered (default: 0.015)."
    ),
    "LATER_FRAME_RATE": "Frames per second for a self-driven FrameClock (default: 60).",
    # Idle detection
    "LATER_IDLE_INTERVAL": "IdleQueue.serve() probe interval in seconds (default: 0.05).",
    "LATER_IDLE_BUDGET": "Seconds of idle callbacks per idle period (default: 0.01).",
    "LATER_IDLE_MAX_LAG": "Max loop lag in seconds that still counts as idle (default: 0.005).",
}
