"""SQLAlchemy ORM models for StudyFlow."""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Date
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class StudySession(Base):
    """One completed focus interval."""

    __tablename__ = "study_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    duration_seconds = Column(Integer, nullable=False, default=0)
    subject = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    @property
    def duration_minutes(self) -> int:
        return (self.duration_seconds or 0) // 60

    def __repr__(self) -> str:
        return (
            f"<StudySession id={self.id} start={self.start_time:%Y-%m-%d %H:%M} "
            f"minutes={self.duration_minutes}>"
        )


class DailyStats(Base):
    """Per-day focus totals for quick goal and chart lookups."""

    __tablename__ = "daily_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True)
    sessions_completed = Column(Integer, nullable=False, default=0)
    focus_seconds = Column(Integer, nullable=False, default=0)

    @property
    def focus_minutes(self) -> int:
        return (self.focus_seconds or 0) // 60

    def __repr__(self) -> str:
        return (
            f"<DailyStats date={self.date} sessions={self.sessions_completed} "
            f"focus={self.focus_minutes}m>"
        )
