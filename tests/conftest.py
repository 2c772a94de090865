"""Shared pytest fixtures for StudyFlow tests."""

import os
import sys
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from studyflow.database.db import configure_engine, init_db
from studyflow.settings import Settings, SettingsProvider
from studyflow.timer.clock import TimerController
from studyflow.timer.engine import TimerEngine, TimerSettings

from helpers import FakeRecorder, FakeNotifier


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def settings_home(tmp_path, monkeypatch):
    """Keep settings.json out of the real home directory."""
    monkeypatch.setattr("studyflow.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("studyflow.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield tmp_path


@pytest.fixture
def pomodoro_settings():
    """25/5/15 minutes, long break every 4th focus interval."""
    return TimerSettings(
        focus_seconds=1500,
        short_break_seconds=300,
        long_break_seconds=900,
        long_break_interval=4,
    )


@pytest.fixture
def recorder():
    return FakeRecorder()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def engine(pomodoro_settings, recorder, notifier):
    """Fresh engine with fake collaborators, auto-start OFF."""
    return TimerEngine(pomodoro_settings, recorder=recorder, notifier=notifier)


@pytest.fixture
def provider(qapp):
    """Settings provider that never touches disk."""
    return SettingsProvider(Settings(), persist=False)


@pytest.fixture
def controller(qapp, provider, recorder, notifier):
    ctrl = TimerController(provider, recorder=recorder, notifier=notifier)
    yield ctrl
    ctrl.shutdown()
