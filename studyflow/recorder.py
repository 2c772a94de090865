"""Persists completed focus intervals as study sessions."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from .database.db import get_session
from .database.models import StudySession, DailyStats


logger = logging.getLogger(__name__)


class SessionRecorder:
    """Writes one ``StudySession`` row per completed focus interval.

    ``subject`` and ``notes`` tag every record written until they are
    changed; the timer view sets them from its inputs.

    Storage errors propagate.  The timer engine treats recording as
    fire-and-forget and absorbs them itself.
    """

    def __init__(self) -> None:
        self.subject: str | None = None
        self.notes: str | None = None

    def record_focus_session(
        self, duration_seconds: int, completed_at: datetime
    ) -> int:
        """Store the interval and fold it into that day's totals.

        Returns the new session id.
        """
        start_time = completed_at - timedelta(seconds=duration_seconds)

        with get_session() as db:
            record = StudySession(
                start_time=start_time,
                end_time=completed_at,
                duration_seconds=duration_seconds,
                subject=self.subject or None,
                notes=self.notes or None,
            )
            db.add(record)

            day = completed_at.date()
            stats = db.query(DailyStats).filter_by(date=day).first()
            if stats is None:
                stats = DailyStats(date=day, sessions_completed=0, focus_seconds=0)
                db.add(stats)
            stats.sessions_completed += 1
            stats.focus_seconds += duration_seconds

            db.flush()
            session_id = record.id

        logger.info("recorded %ds study session #%d", duration_seconds, session_id)
        return session_id
