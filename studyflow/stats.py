"""Study statistics: daily totals, the weekly chart, and goal progress."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from .database.db import get_session
from .database.models import StudySession, DailyStats
from .settings import Settings


def format_focus_hours(total_minutes: int) -> str:
    """125 → '2h 5m', 0 → '0m', 60 → '1h 0m'."""
    if total_minutes <= 0:
        return "0m"
    hours, mins = divmod(total_minutes, 60)
    if hours == 0:
        return f"{mins}m"
    return f"{hours}h {mins}m"


@dataclass
class GoalProgress:
    daily_minutes: int
    daily_goal_minutes: int
    weekly_minutes: int
    weekly_goal_minutes: int

    @property
    def daily_fraction(self) -> float:
        return _fraction(self.daily_minutes, self.daily_goal_minutes)

    @property
    def weekly_fraction(self) -> float:
        return _fraction(self.weekly_minutes, self.weekly_goal_minutes)


def _fraction(done: int, goal: int) -> float:
    if goal <= 0:
        return 1.0
    return min(1.0, done / goal)


def focus_minutes_on(day: date) -> int:
    with get_session() as db:
        row = db.query(DailyStats).filter_by(date=day).first()
        return row.focus_minutes if row else 0


def weekly_focus(end: date | None = None) -> list[tuple[date, int]]:
    """Seven ``(day, minutes)`` rows ending at *end*, oldest first."""
    end = end or date.today()
    start = end - timedelta(days=6)

    with get_session() as db:
        rows = (
            db.query(DailyStats)
            .filter(DailyStats.date >= start, DailyStats.date <= end)
            .all()
        )
        by_day = {r.date: r.focus_minutes for r in rows}

    return [
        (start + timedelta(days=i), by_day.get(start + timedelta(days=i), 0))
        for i in range(7)
    ]


def recent_sessions(limit: int = 10) -> list[StudySession]:
    """Most recently finished sessions first."""
    with get_session() as db:
        return (
            db.query(StudySession)
            .order_by(StudySession.end_time.desc(), StudySession.id.desc())
            .limit(limit)
            .all()
        )


def goal_progress(settings: Settings, today: date | None = None) -> GoalProgress:
    today = today or date.today()
    week = weekly_focus(today)
    return GoalProgress(
        daily_minutes=focus_minutes_on(today),
        daily_goal_minutes=settings.daily_goal_hours * 60,
        weekly_minutes=sum(minutes for _, minutes in week),
        weekly_goal_minutes=settings.weekly_goal_hours * 60,
    )
