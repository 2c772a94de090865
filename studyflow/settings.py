"""Application settings with JSON persistence.

Settings are stored at:
    ~/.studyflow/settings.json

Set ``STUDYFLOW_HOME`` to keep settings, the session database and the
sound cache somewhere else.

Usage::

    provider = SettingsProvider()
    provider.update(focus_minutes=50)
    engine.apply_settings(provider.current_settings())
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path

from PyQt6.QtCore import QObject, pyqtSignal

from .timer.engine import TimerSettings


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path(os.environ.get("STUDYFLOW_HOME", Path.home() / ".studyflow"))
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

THEMES = ("light", "dark")


class SettingsError(ValueError):
    """Raised when a settings value can't be handed to the timer."""


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── pomodoro ──────────────────────────────────────────────────────
    focus_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    long_break_interval: int = 4           # focus intervals per long break
    auto_start_breaks: bool = False
    auto_start_focus: bool = False

    # ── goals ─────────────────────────────────────────────────────────
    daily_goal_hours: int = 4
    weekly_goal_hours: int = 20

    # ── appearance / feedback ─────────────────────────────────────────
    theme: str = "light"
    notifications_enabled: bool = True
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    def timer_settings(self) -> TimerSettings:
        return TimerSettings.from_minutes(
            self.focus_minutes,
            self.short_break_minutes,
            self.long_break_minutes,
            self.long_break_interval,
            auto_start_breaks=self.auto_start_breaks,
            auto_start_focus=self.auto_start_focus,
        )


def validate_settings(settings: Settings) -> None:
    """Raise ``SettingsError`` describing the first bad field."""
    for name in ("focus_minutes", "short_break_minutes", "long_break_minutes"):
        value = getattr(settings, name)
        if not isinstance(value, int) or value <= 0:
            raise SettingsError(f"{name} must be a positive whole number, got {value!r}")
    if not isinstance(settings.long_break_interval, int) or settings.long_break_interval < 1:
        raise SettingsError(
            f"long_break_interval must be at least 1, got {settings.long_break_interval!r}"
        )
    for name in ("daily_goal_hours", "weekly_goal_hours"):
        if getattr(settings, name) < 0:
            raise SettingsError(f"{name} can't be negative")
    if not 0 <= settings.sound_volume <= 100:
        raise SettingsError(f"sound_volume must be 0-100, got {settings.sound_volume}")
    if settings.theme not in THEMES:
        raise SettingsError(f"unknown theme {settings.theme!r}")


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        settings = Settings(**filtered)
        validate_settings(settings)
        return settings
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("unreadable settings at %s, using defaults", SETTINGS_PATH, exc_info=True)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )


class SettingsProvider(QObject):
    """Owns the live ``Settings`` and tells timers when they change.

    Signals
    -------
    changed(settings: TimerSettings)
        Emitted when an update alters the timer snapshot.
    preferences_changed(settings: Settings)
        Emitted after every accepted update.
    """

    changed = pyqtSignal(object)
    preferences_changed = pyqtSignal(object)

    def __init__(
        self,
        settings: Settings | None = None,
        parent: QObject | None = None,
        *,
        persist: bool = True,
    ) -> None:
        super().__init__(parent)
        self._settings = settings if settings is not None else load_settings()
        self._persist = persist

    @property
    def settings(self) -> Settings:
        """A copy of the current preferences."""
        return replace(self._settings)

    def current_settings(self) -> TimerSettings:
        return self._settings.timer_settings()

    def update(self, **changes) -> Settings:
        """Validate and apply *changes*.  Nothing changes if validation fails."""
        unknown = set(changes) - {f.name for f in fields(Settings)}
        if unknown:
            raise SettingsError(f"unknown settings: {', '.join(sorted(unknown))}")

        candidate = replace(self._settings, **changes)
        validate_settings(candidate)

        before = self._settings.timer_settings()
        self._settings = candidate
        if self._persist:
            save_settings(candidate)
        logger.info("settings updated: %s", ", ".join(sorted(changes)))

        after = candidate.timer_settings()
        if after != before:
            self.changed.emit(after)
        self.preferences_changed.emit(self.settings)
        return self.settings
