"""Pomodoro timer view.

Layout (top → bottom):
    - Mode tabs (Focus / Short Break / Long Break)
    - Subject and notes inputs (full page only)
    - Countdown + progress bar
    - Start/Pause and Reset
    - Completed pomodoros and focused hours (full page only)

The view keeps no timer logic of its own: it renders ``TimerState`` from
its ``TimerController`` and turns clicks into controller commands.  The
dashboard card and the full page are the same widget, the card built with
``compact=True``.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QLineEdit, QProgressBar, QFrame, QButtonGroup,
)

from ..stats import format_focus_hours
from ..timer.clock import TimerController
from ..timer.engine import TimerMode, TimerState


MODE_LABELS: dict[TimerMode, str] = {
    TimerMode.FOCUS:       "Focus Time",
    TimerMode.SHORT_BREAK: "Short Break",
    TimerMode.LONG_BREAK:  "Long Break",
}


def format_countdown(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class TimerView(QWidget):
    """Renders one controller's state."""

    def __init__(
        self,
        controller: TimerController,
        parent: QWidget | None = None,
        *,
        recorder=None,
        sounds=None,
        compact: bool = False,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._recorder = recorder
        self._sounds = sounds
        self._compact = compact
        self._build_ui()
        self._connect_signals()
        self._render(controller.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── mode tabs ────────────────────────────────────────────────
        tab_row = QHBoxLayout()
        tab_row.setSpacing(8)
        self._mode_group = QButtonGroup(self)
        self._mode_group.setExclusive(True)
        self._mode_buttons: dict[TimerMode, QPushButton] = {}
        for mode, text in MODE_LABELS.items():
            btn = QPushButton(text, card)
            btn.setCheckable(True)
            btn.setObjectName("modeTab")
            self._mode_group.addButton(btn)
            self._mode_buttons[mode] = btn
            tab_row.addWidget(btn)
        layout.addLayout(tab_row)

        # ── subject / notes ──────────────────────────────────────────
        show_tags = not self._compact and self._recorder is not None
        self._subject_input = QLineEdit(card)
        self._subject_input.setPlaceholderText("What are you studying? (optional)")
        self._subject_input.setMaxLength(100)
        self._subject_input.setVisible(show_tags)
        layout.addWidget(self._subject_input)

        self._notes_input = QLineEdit(card)
        self._notes_input.setPlaceholderText("Notes for this session (optional)")
        self._notes_input.setVisible(show_tags)
        layout.addWidget(self._notes_input)

        # ── countdown ────────────────────────────────────────────────
        self._time_label = QLabel("25:00", card)
        self._time_label.setObjectName("countdown")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        size = 40 if self._compact else 72
        self._time_label.setStyleSheet(f"font-size: {size}px; font-weight: 700;")
        layout.addWidget(self._time_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        # ── session summary ──────────────────────────────────────────
        self._summary_label = QLabel(card)
        self._summary_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._summary_label.setVisible(not self._compact)
        layout.addWidget(self._summary_label)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._controller.toggle)
        self._reset_btn.clicked.connect(self._controller.reset)
        for mode, btn in self._mode_buttons.items():
            btn.clicked.connect(lambda _checked=False, m=mode: self._controller.skip_to_mode(m))
        for btn in (self._start_pause_btn, self._reset_btn, *self._mode_buttons.values()):
            btn.clicked.connect(self._play_click)
        self._subject_input.textChanged.connect(self._on_subject_changed)
        self._notes_input.textChanged.connect(self._on_notes_changed)

        self._controller.tick.connect(self._on_tick)
        self._controller.state_changed.connect(self._render)

    # ── slots ─────────────────────────────────────────────────────────────

    def _play_click(self) -> None:
        if self._sounds is not None:
            self._sounds.play("click")

    def _on_subject_changed(self, text: str) -> None:
        if self._recorder is not None:
            self._recorder.subject = text.strip() or None

    def _on_notes_changed(self, text: str) -> None:
        if self._recorder is not None:
            self._recorder.notes = text.strip() or None

    def _on_tick(self, remaining: int) -> None:
        self._time_label.setText(format_countdown(remaining))
        self._progress.setValue(int(self._controller.engine.percent_complete * 1000))

    def _render(self, state: TimerState) -> None:
        self._mode_buttons[state.mode].setChecked(True)
        self._start_pause_btn.setText("Pause" if state.running else "Start")
        self._on_tick(state.remaining_seconds)

        focused_minutes = self._controller.engine.focused_seconds // 60
        self._summary_label.setText(
            f"Completed: {state.completed_focus_count}    "
            f"Focused: {format_focus_hours(focused_minutes)}"
        )

    # ── test/inspection helpers ───────────────────────────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def start_pause_text(self) -> str:
        return self._start_pause_btn.text()

    @property
    def summary_text(self) -> str:
        return self._summary_label.text()

    def checked_mode(self) -> TimerMode | None:
        for mode, btn in self._mode_buttons.items():
            if btn.isChecked():
                return mode
        return None

    def click_mode(self, mode: TimerMode) -> None:
        self._mode_buttons[mode].click()

    def click_start_pause(self) -> None:
        self._start_pause_btn.click()

    def click_reset(self) -> None:
        self._reset_btn.click()
