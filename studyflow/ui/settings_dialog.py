"""Settings dialog for StudyFlow.

Every edit goes through ``SettingsProvider.update`` so it is validated,
saved, and pushed to any running timer straight away.
"""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QComboBox, QPushButton, QFrame,
)
from PyQt6.QtCore import Qt

from ..settings import SettingsError, SettingsProvider, THEMES


logger = logging.getLogger(__name__)


class SettingsDialog(QDialog):
    """Modal dialog for timer, goal, and feedback preferences."""

    def __init__(self, provider: SettingsProvider, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(420)
        self.setModal(True)

        self._provider = provider
        self._populating = True

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Pomodoro ─────────────────────────────────────────────────
        root.addWidget(self._section_label("Pomodoro"))
        timer_form = QFormLayout()

        self._focus_spin = self._minutes_spin(1, 120)
        timer_form.addRow("Focus time:", self._focus_spin)
        self._short_spin = self._minutes_spin(1, 30)
        timer_form.addRow("Short break:", self._short_spin)
        self._long_spin = self._minutes_spin(1, 60)
        timer_form.addRow("Long break:", self._long_spin)

        self._interval_spin = QSpinBox()
        self._interval_spin.setRange(1, 12)
        self._interval_spin.setPrefix("Every ")
        self._interval_spin.setSuffix(" pomodoros")
        self._interval_spin.valueChanged.connect(self._on_changed)
        timer_form.addRow("Long break interval:", self._interval_spin)

        self._auto_breaks_cb = QCheckBox("Auto-start breaks")
        self._auto_breaks_cb.toggled.connect(self._on_changed)
        timer_form.addRow("", self._auto_breaks_cb)
        self._auto_focus_cb = QCheckBox("Auto-start pomodoros")
        self._auto_focus_cb.toggled.connect(self._on_changed)
        timer_form.addRow("", self._auto_focus_cb)
        root.addLayout(timer_form)

        root.addWidget(self._separator())

        # ── Goals ────────────────────────────────────────────────────
        root.addWidget(self._section_label("Goals"))
        goal_form = QFormLayout()
        self._daily_spin = QSpinBox()
        self._daily_spin.setRange(0, 24)
        self._daily_spin.setSuffix(" h")
        self._daily_spin.valueChanged.connect(self._on_changed)
        goal_form.addRow("Daily goal:", self._daily_spin)
        self._weekly_spin = QSpinBox()
        self._weekly_spin.setRange(0, 168)
        self._weekly_spin.setSuffix(" h")
        self._weekly_spin.valueChanged.connect(self._on_changed)
        goal_form.addRow("Weekly goal:", self._weekly_spin)
        root.addLayout(goal_form)

        root.addWidget(self._separator())

        # ── Feedback ─────────────────────────────────────────────────
        root.addWidget(self._section_label("Appearance & Notifications"))
        fb_form = QFormLayout()
        self._theme_combo = QComboBox()
        self._theme_combo.addItems(THEMES)
        self._theme_combo.currentTextChanged.connect(self._on_changed)
        fb_form.addRow("Theme:", self._theme_combo)
        self._notif_cb = QCheckBox("Show notifications")
        self._notif_cb.toggled.connect(self._on_changed)
        fb_form.addRow("", self._notif_cb)
        self._sound_cb = QCheckBox("Sound effects")
        self._sound_cb.toggled.connect(self._on_changed)
        fb_form.addRow("", self._sound_cb)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_slider.valueChanged.connect(self._on_changed)
        fb_form.addRow("Volume:", self._vol_slider)
        root.addLayout(fb_form)

        self._error_label = QLabel()
        self._error_label.setObjectName("errorLabel")
        self._error_label.setVisible(False)
        root.addWidget(self._error_label)

        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.setObjectName("secondaryButton")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    def _minutes_spin(self, low: int, high: int) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(low, high)
        spin.setSuffix(" min")
        spin.valueChanged.connect(self._on_changed)
        return spin

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE / SAVE
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        s = self._provider.settings
        self._populating = True
        try:
            self._focus_spin.setValue(s.focus_minutes)
            self._short_spin.setValue(s.short_break_minutes)
            self._long_spin.setValue(s.long_break_minutes)
            self._interval_spin.setValue(s.long_break_interval)
            self._auto_breaks_cb.setChecked(s.auto_start_breaks)
            self._auto_focus_cb.setChecked(s.auto_start_focus)
            self._daily_spin.setValue(s.daily_goal_hours)
            self._weekly_spin.setValue(s.weekly_goal_hours)
            self._theme_combo.setCurrentText(s.theme)
            self._notif_cb.setChecked(s.notifications_enabled)
            self._sound_cb.setChecked(s.sound_enabled)
            self._vol_slider.setValue(s.sound_volume)
        finally:
            self._populating = False

    def _on_changed(self, *_args) -> None:
        if self._populating:
            return
        try:
            self._provider.update(
                focus_minutes=self._focus_spin.value(),
                short_break_minutes=self._short_spin.value(),
                long_break_minutes=self._long_spin.value(),
                long_break_interval=self._interval_spin.value(),
                auto_start_breaks=self._auto_breaks_cb.isChecked(),
                auto_start_focus=self._auto_focus_cb.isChecked(),
                daily_goal_hours=self._daily_spin.value(),
                weekly_goal_hours=self._weekly_spin.value(),
                theme=self._theme_combo.currentText(),
                notifications_enabled=self._notif_cb.isChecked(),
                sound_enabled=self._sound_cb.isChecked(),
                sound_volume=self._vol_slider.value(),
            )
        except SettingsError as exc:
            logger.info("rejected settings edit: %s", exc)
            self._error_label.setText(str(exc))
            self._error_label.setVisible(True)
            return
        self._error_label.setVisible(False)
