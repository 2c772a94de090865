"""Timer package."""

from .engine import (
    TimerEngine,
    TimerSettings,
    TimerState,
    TimerMode,
    NotifyKind,
    FocusCompleted,
    Notify,
)
from .clock import TimerController, TICK_INTERVAL_MS

__all__ = [
    "TimerEngine",
    "TimerSettings",
    "TimerState",
    "TimerMode",
    "NotifyKind",
    "FocusCompleted",
    "Notify",
    "TimerController",
    "TICK_INTERVAL_MS",
]
