"""UI package."""

from .activity import RecentActivity, WeeklyBarChart
from .settings_dialog import SettingsDialog
from .styles import build_stylesheet, get_palette
from .timer_view import TimerView, format_countdown

__all__ = [
    "TimerView", "format_countdown", "SettingsDialog",
    "RecentActivity", "WeeklyBarChart", "build_stylesheet", "get_palette",
]
