"""Tests for the timer view, settings dialog, and main window."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

import pytest

from studyflow.app import MainWindow
from studyflow.database.db import configure_engine, get_session
from studyflow.database.models import StudySession
from studyflow.recorder import SessionRecorder
from studyflow.timer.engine import TimerMode
from studyflow.ui.activity import RecentActivity, WeeklyBarChart
from studyflow.ui.settings_dialog import SettingsDialog
from studyflow.ui.styles import PALETTES, build_stylesheet, get_palette
from studyflow.ui.timer_view import TimerView, format_countdown

from helpers import FakeSounds


class TestFormatCountdown:
    @pytest.mark.parametrize("seconds, text", [
        (1500, "25:00"), (61, "01:01"), (0, "00:00"), (-3, "00:00"), (7200, "120:00"),
    ])
    def test_format(self, seconds, text):
        assert format_countdown(seconds) == text


# ═══════════════════════════════════════════════════════════════════════
#  TIMER VIEW
# ═══════════════════════════════════════════════════════════════════════


class TestTimerView:

    def test_initial_render(self, controller):
        view = TimerView(controller)
        assert view.time_text == "25:00"
        assert view.start_pause_text == "Start"
        assert view.checked_mode() == TimerMode.FOCUS

    def test_start_pause_button(self, controller):
        view = TimerView(controller)
        view.click_start_pause()
        assert controller.state.running is True
        assert view.start_pause_text == "Pause"
        view.click_start_pause()
        assert controller.state.running is False
        assert view.start_pause_text == "Start"

    def test_tick_updates_countdown(self, controller):
        view = TimerView(controller)
        controller.start()
        controller._on_tick()
        assert view.time_text == "24:59"

    def test_mode_tab_switches_mode(self, controller):
        view = TimerView(controller)
        view.click_mode(TimerMode.SHORT_BREAK)
        assert controller.state.mode == TimerMode.SHORT_BREAK
        assert view.time_text == "05:00"
        assert view.checked_mode() == TimerMode.SHORT_BREAK

    def test_reset_button(self, controller):
        view = TimerView(controller)
        controller.start()
        controller._on_tick()
        view.click_reset()
        assert view.time_text == "25:00"
        assert controller.state.running is False

    def test_transition_moves_tab_and_summary(self, controller):
        view = TimerView(controller)
        controller.start()
        controller.engine._remaining = 1
        controller._on_tick()
        assert view.checked_mode() == TimerMode.SHORT_BREAK
        assert view.summary_text.startswith("Completed: 1")
        assert "25m" in view.summary_text

    def test_subject_goes_to_recorder(self, controller):
        recorder = SessionRecorder()
        view = TimerView(controller, recorder=recorder)
        view._subject_input.setText("  Chemistry ")
        assert recorder.subject == "Chemistry"
        view._subject_input.setText("")
        assert recorder.subject is None

    def test_notes_go_to_recorder(self, controller):
        recorder = SessionRecorder()
        view = TimerView(controller, recorder=recorder)
        view._notes_input.setText("past papers ")
        assert recorder.notes == "past papers"
        view._notes_input.setText("   ")
        assert recorder.notes is None

    def test_compact_hides_extras(self, controller):
        view = TimerView(controller, recorder=SessionRecorder(), compact=True)
        assert view._summary_label.isHidden()
        assert view._subject_input.isHidden()
        assert view._notes_input.isHidden()

    def test_buttons_play_click(self, controller):
        sounds = FakeSounds()
        view = TimerView(controller, sounds=sounds)
        view.click_start_pause()
        view.click_reset()
        view.click_mode(TimerMode.LONG_BREAK)
        assert sounds.played == ["click", "click", "click"]

    def test_ticks_are_silent(self, controller):
        sounds = FakeSounds()
        TimerView(controller, sounds=sounds)
        controller.start()
        controller._on_tick()
        assert sounds.played == []


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS DIALOG
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsDialog:

    def test_populates_from_provider(self, qapp, provider):
        provider.update(focus_minutes=40, long_break_interval=3)
        dlg = SettingsDialog(provider)
        assert dlg._focus_spin.value() == 40
        assert dlg._interval_spin.value() == 3

    def test_edit_goes_through_provider(self, qapp, provider):
        dlg = SettingsDialog(provider)
        dlg._focus_spin.setValue(50)
        assert provider.settings.focus_minutes == 50
        assert provider.current_settings().focus_seconds == 3000

    def test_toggle_auto_start(self, qapp, provider):
        dlg = SettingsDialog(provider)
        dlg._auto_breaks_cb.setChecked(True)
        assert provider.settings.auto_start_breaks is True

    def test_edit_reaches_paused_timer(self, controller, provider):
        dlg = SettingsDialog(provider)
        dlg._short_spin.setValue(8)
        controller.skip_to_mode(TimerMode.SHORT_BREAK)
        assert controller.state.remaining_seconds == 480


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


class TestMainWindow:

    @pytest.fixture
    def window(self, qapp, provider):
        w = MainWindow(provider)
        yield w
        w.close()

    def test_two_independent_timers(self, window):
        dash, page = window.controllers
        assert dash.engine is not page.engine
        page.start()
        assert dash.state.running is False

    def test_completed_focus_is_stored(self, window):
        _, page = window.controllers
        page.start()
        page.engine._remaining = 1
        page._on_tick()
        with get_session() as db:
            assert db.query(StudySession).count() == 1

    def test_goal_labels_refresh(self, window):
        _, page = window.controllers
        page.start()
        page.engine._remaining = 1
        page._on_tick()
        assert window._daily_label.text().startswith("Today: 25m")

    def test_notification_reaches_status_bar(self, window):
        _, page = window.controllers
        page.start()
        page.engine._remaining = 1
        page._on_tick()
        assert "Time for a short break." in window.statusBar().currentMessage()

    def test_settings_change_reaches_both_timers(self, window, provider):
        provider.update(focus_minutes=35)
        assert all(c.state.remaining_seconds == 35 * 60 for c in window.controllers)

    def test_close_stops_timers(self, window):
        for c in window.controllers:
            c.start()
        window.close()
        assert not any(c.is_ticking for c in window.controllers)

    def test_broken_storage_keeps_app_running(self, window, caplog):
        _, page = window.controllers
        configure_engine("sqlite:///:memory:")  # no tables
        page.start()
        page.engine._remaining = 1
        with caplog.at_level(logging.WARNING):
            page._on_tick()
        assert page.state.mode == TimerMode.SHORT_BREAK
        assert page.state.completed_focus_count == 1
        assert "Time for a short break." in window.statusBar().currentMessage()
        assert any("ignoring failed delivery" in r.getMessage() for r in caplog.records)

    def test_stats_refresh_survives_broken_storage(self, window, provider, caplog):
        configure_engine("sqlite:///:memory:")
        with caplog.at_level(logging.WARNING):
            provider.update(daily_goal_hours=6)
        assert any(
            "could not load study statistics" in r.getMessage() for r in caplog.records
        )

    def test_dashboard_shows_week_and_recent_sessions(self, window):
        _, page = window.controllers
        window._page_view._subject_input.setText("Physics")
        page.start()
        page.engine._remaining = 1
        page._on_tick()
        label, minutes, is_today = window._weekly_chart.data[-1]
        assert (minutes, is_today) == (25, True)
        assert window._recent.row_texts[0].startswith("Physics  25m")

    def test_each_view_tags_its_own_sessions(self, window):
        dash, _ = window.controllers
        window._page_view._subject_input.setText("Physics")
        dash.start()
        dash.engine._remaining = 1
        dash._on_tick()
        with get_session() as db:
            assert db.query(StudySession).one().subject is None

    def test_theme_follows_settings(self, window, provider):
        assert PALETTES["light"]["bg"] in window.styleSheet()
        provider.update(theme="dark")
        assert PALETTES["dark"]["bg"] in window.styleSheet()
        assert PALETTES["light"]["bg"] not in window.styleSheet()


# ═══════════════════════════════════════════════════════════════════════
#  STYLES / ACTIVITY WIDGETS
# ═══════════════════════════════════════════════════════════════════════


class TestStyles:

    def test_palettes_share_keys(self):
        assert PALETTES["light"].keys() == PALETTES["dark"].keys()

    def test_unknown_theme_falls_back_to_light(self):
        assert get_palette("neon") == PALETTES["light"]

    def test_stylesheet_uses_palette(self):
        qss = build_stylesheet(get_palette("dark"))
        assert PALETTES["dark"]["accent"] in qss


class TestActivityWidgets:

    def test_chart_is_seven_days_ending_today(self, qapp):
        chart = WeeklyBarChart()
        chart.refresh()
        assert len(chart.data) == 7
        assert [today for _, _, today in chart.data] == [False] * 6 + [True]
        assert all(minutes == 0 for _, minutes, _ in chart.data)

    def test_recent_activity_empty(self, qapp):
        recent = RecentActivity()
        recent.refresh()
        assert recent.row_texts == []
        assert not recent._empty_label.isHidden()

    def test_recent_activity_lists_newest_first(self, qapp):
        rec = SessionRecorder()
        now = datetime.now()
        rec.subject = "History"
        rec.record_focus_session(600, now - timedelta(hours=1))
        rec.subject = None
        rec.record_focus_session(1500, now)

        recent = RecentActivity(limit=5)
        recent.refresh()
        texts = recent.row_texts
        assert texts[0].startswith("Untitled session  25m")
        assert texts[1].startswith("History  10m")
        assert recent._empty_label.isHidden()
