"""User-facing messages for timer transitions."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from .timer.engine import NotifyKind


logger = logging.getLogger(__name__)

MESSAGES: dict[NotifyKind, tuple[str, str]] = {
    NotifyKind.SHORT_BREAK_STARTED: ("Pomodoro completed!", "Time for a short break."),
    NotifyKind.LONG_BREAK_STARTED: ("Pomodoro completed!", "Time for a long break."),
    NotifyKind.FOCUS_STARTED: ("Break completed!", "Time to focus again."),
}

SOUNDS: dict[NotifyKind, str] = {
    NotifyKind.SHORT_BREAK_STARTED: "break_start",
    NotifyKind.LONG_BREAK_STARTED: "long_break_start",
    NotifyKind.FOCUS_STARTED: "focus_start",
}


class Notifier(QObject):
    """Turns transition kinds into a toast message and a sound.

    ``message(title, body)`` is emitted only while notifications are
    enabled; the sound follows the ``SoundManager``'s own enabled flag.
    """

    message = pyqtSignal(str, str)

    def __init__(
        self,
        sounds=None,
        parent: QObject | None = None,
        *,
        enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._sounds = sounds
        self.enabled = enabled

    def notify(self, kind: NotifyKind) -> None:
        text = MESSAGES.get(kind)
        if text is None:
            logger.warning("no message for notification %r", kind)
            return
        if self.enabled:
            self.message.emit(*text)
        if self._sounds is not None:
            self._sounds.play(SOUNDS[kind])

    def apply_preferences(self, settings) -> None:
        """Follow the notification and sound toggles in *settings*."""
        self.enabled = settings.notifications_enabled
        if self._sounds is not None:
            self._sounds.set_enabled(settings.sound_enabled)
            self._sounds.set_volume(settings.sound_volume)
