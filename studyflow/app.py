"""Main application window for StudyFlow."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QTabWidget, QProgressBar,
)

from .audio.sounds import SoundManager
from .notifications import Notifier
from .recorder import SessionRecorder
from .settings import Settings, SettingsProvider
from .stats import format_focus_hours, goal_progress
from .timer.clock import TimerController
from .ui.activity import RecentActivity, WeeklyBarChart
from .ui.settings_dialog import SettingsDialog
from .ui.styles import build_stylesheet, get_palette
from .ui.timer_view import TimerView


logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Dashboard and Pomodoro tabs, each with its own timer and recorder."""

    def __init__(
        self,
        provider: SettingsProvider | None = None,
        *,
        sounds: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("StudyFlow")
        self.resize(520, 760)

        self._provider = provider if provider is not None else SettingsProvider(parent=self)
        self._sounds = sounds
        self._notifier = Notifier(sounds, parent=self)
        self._notifier.apply_preferences(self._provider.settings)

        self._dashboard_recorder = SessionRecorder()
        self._page_recorder = SessionRecorder()
        self._dashboard_timer = TimerController(
            self._provider, recorder=self._dashboard_recorder,
            notifier=self._notifier, parent=self,
        )
        self._page_timer = TimerController(
            self._provider, recorder=self._page_recorder,
            notifier=self._notifier, parent=self,
        )

        self._build_ui()
        self._build_menu()
        self._apply_theme(self._provider.settings.theme)

        self._notifier.message.connect(self._show_message)
        self._provider.preferences_changed.connect(self._on_preferences_changed)
        for controller in self.controllers:
            controller.focus_completed.connect(self._refresh_stats)
        self._refresh_stats()

    @property
    def controllers(self) -> tuple[TimerController, TimerController]:
        return (self._dashboard_timer, self._page_timer)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root = QVBoxLayout(central)

        self._tabs = QTabWidget(central)
        root.addWidget(self._tabs)

        # ── dashboard ────────────────────────────────────────────────
        dashboard = QWidget()
        dash_layout = QVBoxLayout(dashboard)
        self._dashboard_view = TimerView(
            self._dashboard_timer, recorder=self._dashboard_recorder,
            sounds=self._sounds, compact=True,
        )
        dash_layout.addWidget(self._dashboard_view)

        self._daily_label = QLabel()
        self._daily_bar = QProgressBar()
        self._daily_bar.setRange(0, 100)
        self._weekly_label = QLabel()
        self._weekly_bar = QProgressBar()
        self._weekly_bar.setRange(0, 100)
        for w in (self._daily_label, self._daily_bar, self._weekly_label, self._weekly_bar):
            dash_layout.addWidget(w)

        chart_header = QLabel("Study Progress")
        chart_header.setObjectName("sectionHeader")
        dash_layout.addWidget(chart_header)
        self._weekly_chart = WeeklyBarChart()
        dash_layout.addWidget(self._weekly_chart)

        self._recent = RecentActivity()
        dash_layout.addWidget(self._recent)
        dash_layout.addStretch()
        self._tabs.addTab(dashboard, "Dashboard")

        # ── full pomodoro page ───────────────────────────────────────
        self._page_view = TimerView(
            self._page_timer, recorder=self._page_recorder, sounds=self._sounds,
        )
        self._tabs.addTab(self._page_view, "Pomodoro")

    def _build_menu(self) -> None:
        menu = self.menuBar().addMenu("StudyFlow")
        prefs_action = QAction("Settings…", self)
        prefs_action.setShortcut(QKeySequence("Ctrl+,"))
        prefs_action.triggered.connect(self.open_settings)
        menu.addAction(prefs_action)

        quit_action = QAction("Quit StudyFlow", self)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        menu.addAction(quit_action)

    # ── theming ───────────────────────────────────────────────────────────

    def _apply_theme(self, theme: str) -> None:
        palette = get_palette(theme)
        self.setStyleSheet(build_stylesheet(palette))
        self._weekly_chart.apply_palette(palette)
        self._theme = theme

    # ── slots ─────────────────────────────────────────────────────────────

    def open_settings(self) -> None:
        SettingsDialog(self._provider, self).exec()

    def _show_message(self, title: str, body: str) -> None:
        self.statusBar().showMessage(f"{title} {body}", 5000)

    def _on_preferences_changed(self, settings: Settings) -> None:
        self._notifier.apply_preferences(settings)
        if settings.theme != self._theme:
            self._apply_theme(settings.theme)
        self._refresh_stats()

    def _refresh_stats(self, *_args) -> None:
        """Reload goals, the weekly chart and recent sessions."""
        try:
            progress = goal_progress(self._provider.settings)
            self._weekly_chart.refresh()
            self._recent.refresh()
        except SQLAlchemyError:
            logger.warning("could not load study statistics", exc_info=True)
            return

        self._daily_label.setText(
            f"Today: {format_focus_hours(progress.daily_minutes)} of "
            f"{format_focus_hours(progress.daily_goal_minutes)}"
        )
        self._daily_bar.setValue(round(progress.daily_fraction * 100))
        self._weekly_label.setText(
            f"This week: {format_focus_hours(progress.weekly_minutes)} of "
            f"{format_focus_hours(progress.weekly_goal_minutes)}"
        )
        self._weekly_bar.setValue(round(progress.weekly_fraction * 100))

    def closeEvent(self, event) -> None:  # type: ignore[override]
        for controller in self.controllers:
            controller.shutdown()
        logger.info("window closed, timers stopped")
        event.accept()
