"""Shared test helpers for StudyFlow."""

from studyflow.timer.engine import TimerEngine, TimerMode


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def __call__(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None


class FakeRecorder:
    def __init__(self, fail: bool = False):
        self.calls: list = []
        self.fail = fail

    def record_focus_session(self, duration_seconds, completed_at):
        self.calls.append((duration_seconds, completed_at))
        if self.fail:
            raise RuntimeError("disk full")


class FakeNotifier:
    def __init__(self, fail: bool = False):
        self.kinds: list = []
        self.fail = fail

    def notify(self, kind):
        self.kinds.append(kind)
        if self.fail:
            raise RuntimeError("no display")


def finish_interval(engine: TimerEngine) -> None:
    """Jump to the last second of the current interval and tick it."""
    engine.start()
    engine._remaining = 1
    engine.tick()


def complete_focus_intervals(engine: TimerEngine, count: int) -> None:
    """Run *count* focus intervals (and the breaks between them) to the end."""
    done = 0
    while done < count:
        if engine.mode == TimerMode.FOCUS:
            done += 1
        finish_interval(engine)


class FakeSounds:
    """Stands in for ``SoundManager``; remembers what was played."""

    def __init__(self):
        self.played: list[str] = []
        self.enabled = True
        self.volume = 70

    def play(self, name):
        self.played.append(name)

    def set_enabled(self, enabled):
        self.enabled = enabled

    def set_volume(self, level):
        self.volume = level
