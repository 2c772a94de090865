"""Tests for settings persistence, validation, and the settings provider."""

from __future__ import annotations

import json

import pytest

from studyflow.settings import (
    Settings, SettingsError, SettingsProvider,
    load_settings, save_settings, validate_settings,
)
from studyflow.timer.engine import TimerSettings

from helpers import SignalCollector


# ═══════════════════════════════════════════════════════════════════════
#  DEFAULTS / CONVERSION
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsDefaults:
    def test_pomodoro_defaults(self):
        s = Settings()
        assert (s.focus_minutes, s.short_break_minutes, s.long_break_minutes) == (25, 5, 15)
        assert s.long_break_interval == 4

    def test_auto_start_defaults(self):
        s = Settings()
        assert s.auto_start_breaks is False
        assert s.auto_start_focus is False

    def test_goal_defaults(self):
        s = Settings()
        assert s.daily_goal_hours == 4
        assert s.weekly_goal_hours == 20

    def test_timer_settings_in_seconds(self):
        s = Settings(focus_minutes=50, short_break_minutes=10, long_break_minutes=20,
                     long_break_interval=2, auto_start_focus=True)
        assert s.timer_settings() == TimerSettings(
            focus_seconds=3000, short_break_seconds=600, long_break_seconds=1200,
            long_break_interval=2, auto_start_breaks=False, auto_start_focus=True,
        )


# ═══════════════════════════════════════════════════════════════════════
#  VALIDATION
# ═══════════════════════════════════════════════════════════════════════


class TestValidation:
    def test_defaults_are_valid(self):
        validate_settings(Settings())

    @pytest.mark.parametrize("field", ["focus_minutes", "short_break_minutes", "long_break_minutes"])
    @pytest.mark.parametrize("value", [0, -5])
    def test_durations_must_be_positive(self, field, value):
        with pytest.raises(SettingsError, match=field):
            validate_settings(Settings(**{field: value}))

    def test_long_break_interval_at_least_one(self):
        with pytest.raises(SettingsError, match="long_break_interval"):
            validate_settings(Settings(long_break_interval=0))

    def test_volume_range(self):
        with pytest.raises(SettingsError):
            validate_settings(Settings(sound_volume=101))

    def test_unknown_theme(self):
        with pytest.raises(SettingsError):
            validate_settings(Settings(theme="neon"))

    def test_is_a_value_error(self):
        assert issubclass(SettingsError, ValueError)


# ═══════════════════════════════════════════════════════════════════════
#  JSON PERSISTENCE
# ═══════════════════════════════════════════════════════════════════════


class TestPersistence:
    def test_missing_file_gives_defaults(self):
        assert load_settings() == Settings()

    def test_round_trip(self):
        original = Settings(focus_minutes=45, auto_start_breaks=True, theme="dark")
        save_settings(original)
        assert load_settings() == original

    def test_unknown_keys_ignored(self, settings_home):
        (settings_home / "settings.json").write_text(
            json.dumps({"focus_minutes": 40, "window_x": 10}), encoding="utf-8",
        )
        loaded = load_settings()
        assert loaded.focus_minutes == 40
        assert loaded.short_break_minutes == 5

    def test_corrupt_file_gives_defaults(self, settings_home):
        (settings_home / "settings.json").write_text("{not json", encoding="utf-8")
        assert load_settings() == Settings()

    def test_invalid_values_give_defaults(self, settings_home):
        (settings_home / "settings.json").write_text(
            json.dumps({"focus_minutes": 0}), encoding="utf-8",
        )
        assert load_settings() == Settings()

    def test_saved_file_is_indented_json(self, settings_home):
        save_settings(Settings())
        text = (settings_home / "settings.json").read_text(encoding="utf-8")
        assert text.startswith("{\n")
        assert json.loads(text)["focus_minutes"] == 25


# ═══════════════════════════════════════════════════════════════════════
#  PROVIDER
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsProvider:
    def test_current_settings_snapshot(self, provider):
        assert provider.current_settings() == TimerSettings()

    def test_update_emits_changed(self, provider):
        c = SignalCollector()
        provider.changed.connect(c)
        provider.update(focus_minutes=30)
        assert c.last.focus_seconds == 1800

    def test_non_timer_update_does_not_emit_changed(self, provider):
        changed = SignalCollector()
        prefs = SignalCollector()
        provider.changed.connect(changed)
        provider.preferences_changed.connect(prefs)
        provider.update(daily_goal_hours=6)
        assert len(changed) == 0
        assert prefs.last.daily_goal_hours == 6

    def test_invalid_update_changes_nothing(self, provider):
        c = SignalCollector()
        provider.changed.connect(c)
        with pytest.raises(SettingsError):
            provider.update(focus_minutes=0)
        assert provider.settings.focus_minutes == 25
        assert len(c) == 0

    def test_unknown_field_rejected(self, provider):
        with pytest.raises(SettingsError, match="unknown"):
            provider.update(pomodoro_minutes=3)

    def test_settings_property_is_a_copy(self, provider):
        copy = provider.settings
        copy.focus_minutes = 99
        assert provider.settings.focus_minutes == 25

    def test_update_persists(self, qapp, settings_home):
        provider = SettingsProvider(Settings())
        provider.update(long_break_interval=3)
        assert load_settings().long_break_interval == 3

    def test_persist_off_writes_nothing(self, provider, settings_home):
        provider.update(focus_minutes=20)
        assert not (settings_home / "settings.json").exists()

    def test_loads_from_disk_by_default(self, qapp):
        save_settings(Settings(short_break_minutes=7))
        provider = SettingsProvider()
        assert provider.current_settings().short_break_seconds == 420
