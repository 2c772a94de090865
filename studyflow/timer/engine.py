"""Pomodoro state machine for StudyFlow.

Modes
-----
FOCUS         Work interval counting down.
SHORT_BREAK   Short rest after a focus interval.
LONG_BREAK    Long rest after every Nth completed focus interval.

Transitions
-----------
FOCUS → SHORT_BREAK | LONG_BREAK   (tick completes the interval)
{any break} → FOCUS                (tick completes the interval)
Any → chosen mode                  (skip_to_mode, always paused)

The engine is pure Python: it never sleeps, never touches Qt, and never
does I/O.  Something else (see ``clock.TimerController``) calls ``tick()``
once per second while ``running`` is true.  Completed focus intervals and
mode changes are handed to an optional recorder and notifier; errors from
either are logged and otherwise ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerMode(Enum):
    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


class NotifyKind(Enum):
    FOCUS_STARTED = "focus-started"
    SHORT_BREAK_STARTED = "short-break-started"
    LONG_BREAK_STARTED = "long-break-started"


_MODE_TO_NOTIFY: dict[TimerMode, NotifyKind] = {
    TimerMode.FOCUS: NotifyKind.FOCUS_STARTED,
    TimerMode.SHORT_BREAK: NotifyKind.SHORT_BREAK_STARTED,
    TimerMode.LONG_BREAK: NotifyKind.LONG_BREAK_STARTED,
}


# ── value types ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSettings:
    """Immutable snapshot of everything the engine needs to know."""

    focus_seconds: int = 25 * 60
    short_break_seconds: int = 5 * 60
    long_break_seconds: int = 15 * 60
    long_break_interval: int = 4
    auto_start_breaks: bool = False
    auto_start_focus: bool = False

    @classmethod
    def from_minutes(
        cls,
        focus: int = 25,
        short_break: int = 5,
        long_break: int = 15,
        long_break_interval: int = 4,
        *,
        auto_start_breaks: bool = False,
        auto_start_focus: bool = False,
    ) -> TimerSettings:
        return cls(
            focus_seconds=focus * 60,
            short_break_seconds=short_break * 60,
            long_break_seconds=long_break * 60,
            long_break_interval=long_break_interval,
            auto_start_breaks=auto_start_breaks,
            auto_start_focus=auto_start_focus,
        )

    def duration_for(self, mode: TimerMode) -> int:
        if mode == TimerMode.FOCUS:
            return self.focus_seconds
        if mode == TimerMode.SHORT_BREAK:
            return self.short_break_seconds
        return self.long_break_seconds


@dataclass(frozen=True)
class TimerState:
    """What a view needs to render the countdown."""

    mode: TimerMode
    remaining_seconds: int
    running: bool
    completed_focus_count: int


@dataclass(frozen=True)
class FocusCompleted:
    duration_seconds: int
    completed_at: datetime


@dataclass(frozen=True)
class Notify:
    kind: NotifyKind


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine:
    """Single-owner Pomodoro state machine driven by one-second ticks.

    Collaborators
    -------------
    recorder
        Anything with ``record_focus_session(duration_seconds, completed_at)``.
        Called exactly once per completed focus interval.
    notifier
        Anything with ``notify(kind: NotifyKind)``.  Called on every
        tick-driven mode transition.

    Commands are idempotent: ``start`` while running, ``pause`` while
    paused, and ``tick`` while paused all do nothing.
    """

    def __init__(
        self,
        settings: TimerSettings | None = None,
        *,
        recorder=None,
        notifier=None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings: TimerSettings = settings or TimerSettings()
        self._recorder = recorder
        self._notifier = notifier
        self._now = now

        self._mode: TimerMode = TimerMode.FOCUS
        self._remaining: int = self._settings.focus_seconds
        self._interval_duration: int = self._remaining
        self._running: bool = False
        self._completed_focus_count: int = 0
        self._focused_seconds: int = 0

        self._last_events: list[FocusCompleted | Notify] = []

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return TimerState(
            mode=self._mode,
            remaining_seconds=self._remaining,
            running=self._running,
            completed_focus_count=self._completed_focus_count,
        )

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    @property
    def mode(self) -> TimerMode:
        return self._mode

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def running(self) -> bool:
        return self._running

    @property
    def completed_focus_count(self) -> int:
        return self._completed_focus_count

    @property
    def focused_seconds(self) -> int:
        """Total length of every focus interval completed so far."""
        return self._focused_seconds

    @property
    def interval_duration(self) -> int:
        """Seconds the current interval was loaded with."""
        return self._interval_duration

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current interval."""
        if self._interval_duration <= 0:
            return 0.0
        elapsed = self._interval_duration - self._remaining
        return max(0.0, min(1.0, elapsed / self._interval_duration))

    @property
    def last_events(self) -> list[FocusCompleted | Notify]:
        """Events produced by the most recent ``tick()``."""
        return list(self._last_events)

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        logger.debug("timer started in %s (%ds left)", self._mode.value, self._remaining)

    def pause(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.debug("timer paused in %s (%ds left)", self._mode.value, self._remaining)

    def reset(self) -> None:
        """Stop and refill the current mode.  The focus count is kept."""
        self._running = False
        self._load_interval(self._mode)

    def skip_to_mode(self, mode: TimerMode) -> None:
        """Manual mode switch (the mode tabs).  Never counts as a completion."""
        self._running = False
        self._mode = mode
        self._load_interval(mode)
        logger.debug("switched to %s", mode.value)

    def apply_settings(self, settings: TimerSettings) -> None:
        """Swap the settings snapshot.

        While paused the countdown is refilled right away so the display
        shows the edited duration.  While running the in-flight interval
        is left alone; the new durations apply from the next transition
        or reset.
        """
        self._settings = settings
        if not self._running:
            self._load_interval(self._mode)

    def tick(self) -> TimerState:
        """Advance one second.  The only way a mode transition happens."""
        if not self._running:
            return self.state

        self._last_events = []
        if self._remaining > 1:
            self._remaining -= 1
            return self.state

        self._complete_interval()
        return self.state

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _load_interval(self, mode: TimerMode) -> None:
        self._remaining = self._settings.duration_for(mode)
        self._interval_duration = self._remaining

    def _complete_interval(self) -> None:
        self._running = False
        finished = self._mode

        if finished == TimerMode.FOCUS:
            duration = self._interval_duration
            self._completed_focus_count += 1
            self._focused_seconds += duration
            self._emit(FocusCompleted(duration, self._now()))

            if self._completed_focus_count % self._settings.long_break_interval == 0:
                next_mode = TimerMode.LONG_BREAK
            else:
                next_mode = TimerMode.SHORT_BREAK
            auto_continue = self._settings.auto_start_breaks
        else:
            next_mode = TimerMode.FOCUS
            auto_continue = self._settings.auto_start_focus

        self._mode = next_mode
        self._load_interval(next_mode)
        logger.info(
            "%s finished → %s (%d focus intervals completed)",
            finished.value, next_mode.value, self._completed_focus_count,
        )
        self._emit(Notify(_MODE_TO_NOTIFY[next_mode]))

        if auto_continue:
            self._running = True

    def _emit(self, event: FocusCompleted | Notify) -> None:
        """Record *event* and hand it to its collaborator, fire-and-forget."""
        self._last_events.append(event)
        try:
            if isinstance(event, FocusCompleted):
                if self._recorder is not None:
                    self._recorder.record_focus_session(
                        event.duration_seconds, event.completed_at,
                    )
            elif self._notifier is not None:
                self._notifier.notify(event.kind)
        except Exception:
            logger.warning("ignoring failed delivery of %r", event, exc_info=True)
