"""Qt clock source for the timer engine.

``TimerController`` is the glue between a ``TimerEngine`` and a view: it
owns the 1-second ``QTimer``, delivers ticks only while the engine is
running, and re-emits everything the engine produces as Qt signals.  Each
timer view gets its own controller (and so its own engine).
"""

from __future__ import annotations

import logging
from datetime import datetime

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .engine import TimerEngine, TimerMode, TimerSettings, TimerState, NotifyKind


logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TimerController(QObject):
    """Drives a ``TimerEngine`` from a ``QTimer``.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every delivered tick.
    state_changed(state: TimerState)
        Emitted after every command and after ticks that change the mode.
    focus_completed(duration_seconds: int)
        Emitted once per completed focus interval, after the recorder
        stored it.
    notified(kind: NotifyKind)
        Emitted on every tick-driven mode transition.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    focus_completed = pyqtSignal(int)
    notified = pyqtSignal(object)

    def __init__(
        self,
        settings_provider=None,
        *,
        recorder=None,
        notifier=None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._provider = settings_provider
        self._recorder = recorder
        self._notifier = notifier

        initial = (
            settings_provider.current_settings()
            if settings_provider is not None
            else TimerSettings()
        )
        # The controller stands in as the engine's recorder and notifier so
        # engine output also reaches Qt signals.
        self._engine = TimerEngine(initial, recorder=self, notifier=self)

        if settings_provider is not None:
            settings_provider.changed.connect(self.apply_settings)

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ── properties ────────────────────────────────────────────────────

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def state(self) -> TimerState:
        return self._engine.state

    @property
    def is_ticking(self) -> bool:
        """True while the QTimer is delivering ticks."""
        return self._qt_timer.isActive()

    # ── commands ──────────────────────────────────────────────────────

    def start(self) -> None:
        self._engine.start()
        self._sync()

    def pause(self) -> None:
        self._engine.pause()
        self._sync()

    def toggle(self) -> None:
        if self._engine.running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self._engine.reset()
        self._sync()

    def skip_to_mode(self, mode: TimerMode) -> None:
        self._engine.skip_to_mode(mode)
        self._sync()

    def apply_settings(self, settings: TimerSettings) -> None:
        self._engine.apply_settings(settings)
        self._sync()

    def shutdown(self) -> None:
        """Stop delivering ticks.  Call when the owning view goes away."""
        self._qt_timer.stop()
        if self._provider is not None:
            try:
                self._provider.changed.disconnect(self.apply_settings)
            except TypeError:
                pass
        logger.debug("timer controller shut down")

    # ── engine collaborator interface ─────────────────────────────────

    def record_focus_session(self, duration_seconds: int, completed_at: datetime) -> None:
        # A recorder error propagates to the engine, which logs it; listeners
        # only hear about sessions that were actually stored.
        if self._recorder is not None:
            self._recorder.record_focus_session(duration_seconds, completed_at)
        self.focus_completed.emit(duration_seconds)

    def notify(self, kind: NotifyKind) -> None:
        self.notified.emit(kind)
        if self._notifier is not None:
            self._notifier.notify(kind)

    # ── internal ──────────────────────────────────────────────────────

    def _on_tick(self) -> None:
        before = self._engine.mode
        state = self._engine.tick()
        self.tick.emit(state.remaining_seconds)
        if state.mode != before or not state.running:
            self._sync()

    def _sync(self) -> None:
        """Match tick delivery to the engine's running flag, then publish."""
        if self._engine.running:
            if not self._qt_timer.isActive():
                self._qt_timer.start()
        else:
            self._qt_timer.stop()
        self.state_changed.emit(self._engine.state)
