"""Dashboard activity widgets: the weekly focus chart and recent sessions.

Both widgets read from ``studyflow.stats`` on ``refresh()``; the main
window decides when to call it.
"""

from __future__ import annotations

from datetime import date

from PyQt6.QtCore import Qt, QRect
from PyQt6.QtGui import QPainter, QColor, QPen, QFont
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame

from ..stats import format_focus_hours, recent_sessions, weekly_focus
from .styles import get_palette


# ═══════════════════════════════════════════════════════════════════════════
#  WEEKLY BAR CHART
# ═══════════════════════════════════════════════════════════════════════════


class WeeklyBarChart(QWidget):
    """Bar chart of focus minutes per day for the last 7 days."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._data: list[tuple[str, int, bool]] = []
        self.apply_palette(get_palette("light"))
        self.setMinimumHeight(160)

    @property
    def data(self) -> list[tuple[str, int, bool]]:
        return list(self._data)

    def refresh(self, today: date | None = None) -> None:
        today = today or date.today()
        self._data = [
            (day.strftime("%a"), minutes, day == today)
            for day, minutes in weekly_focus(today)
        ]
        self.update()

    def apply_palette(self, palette: dict[str, str]) -> None:
        self._accent = palette["accent"]
        self._accent2 = palette["accent2"]
        self._text_color = palette["text"]
        self._text_muted = palette["text_muted"]
        self._border = palette["border"]
        self.update()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        if not self._data:
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w = self.width()
        h = self.height()
        margin = 8
        top_margin = 20
        bottom_margin = 26
        chart_w = w - margin * 2
        chart_h = h - top_margin - bottom_margin

        max_val = max((v for _, v, _ in self._data), default=1) or 1

        # ── gridlines ─────────────────────────────────────────────────
        grid_pen = QPen(QColor(self._border))
        grid_pen.setStyle(Qt.PenStyle.DotLine)
        painter.setPen(grid_pen)
        for frac in (0.25, 0.50, 0.75):
            y = int(top_margin + chart_h * (1.0 - frac))
            painter.drawLine(margin, y, w - margin, y)

        small_font = QFont()
        small_font.setPixelSize(9)
        painter.setFont(small_font)
        painter.setPen(QColor(self._text_muted))
        painter.drawText(
            QRect(margin, 2, 60, 16),
            Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
            f"{max_val} min",
        )

        # ── bars ──────────────────────────────────────────────────────
        bar_spacing = chart_w / len(self._data)
        bar_width = int(bar_spacing * 0.55)
        label_font = QFont()
        label_font.setPixelSize(11)

        for i, (label, value, is_today) in enumerate(self._data):
            cx = int(margin + bar_spacing * (i + 0.5))
            bar_x = cx - bar_width // 2
            bar_h = int((value / max_val) * chart_h) if value > 0 else 0
            bar_y = top_margin + chart_h - bar_h

            if bar_h > 0:
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QColor(self._accent2 if is_today else self._accent))
                painter.drawRoundedRect(bar_x, bar_y, bar_width, bar_h, 4, 4)

            painter.setPen(QColor(self._text_color if is_today else self._text_muted))
            painter.setFont(label_font)
            painter.drawText(
                QRect(cx - 20, top_margin + chart_h + 4, 40, 20),
                Qt.AlignmentFlag.AlignCenter,
                label,
            )

        painter.end()


# ═══════════════════════════════════════════════════════════════════════════
#  RECENT ACTIVITY
# ═══════════════════════════════════════════════════════════════════════════


class RecentActivity(QWidget):
    """The last few recorded study sessions, newest first."""

    def __init__(self, parent: QWidget | None = None, *, limit: int = 5) -> None:
        super().__init__(parent)
        self._limit = limit
        self._row_widgets: list[QWidget] = []
        self._row_texts: list[str] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 0)
        layout.setSpacing(4)

        header = QLabel("Recent Activity")
        header.setObjectName("sectionHeader")
        layout.addWidget(header)

        self._rows_container = QVBoxLayout()
        self._rows_container.setSpacing(2)
        layout.addLayout(self._rows_container)

        self._empty_label = QLabel("No study sessions yet.")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._empty_label)

    @property
    def row_texts(self) -> list[str]:
        return list(self._row_texts)

    def refresh(self) -> None:
        """Reload the latest sessions from the database."""
        sessions = recent_sessions(self._limit)

        for w in self._row_widgets:
            w.setParent(None)
            w.deleteLater()
        self._row_widgets.clear()
        self._row_texts.clear()

        self._empty_label.setVisible(not sessions)
        for sess in sessions:
            row = self._make_row(
                sess.subject or "Untitled session",
                format_focus_hours(sess.duration_minutes),
                f"{sess.end_time:%a %H:%M}" if sess.end_time else "",
            )
            self._rows_container.addWidget(row)
            self._row_widgets.append(row)

    def _make_row(self, subject: str, duration: str, when: str) -> QWidget:
        frame = QFrame(self)
        row = QHBoxLayout(frame)
        row.setContentsMargins(8, 2, 8, 2)
        row.addWidget(QLabel(subject), stretch=1)
        for text in (duration, when):
            lbl = QLabel(text)
            lbl.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            row.addWidget(lbl)
        self._row_texts.append(f"{subject}  {duration}  {when}".rstrip())
        return frame
