from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from openbalti.db.nosql.documents import utcnow
from openbalti.services.numbers import round_half_up

STREAK_WINDOW_DAYS = 30


def streak_days(session_dates: Iterable[datetime], today: Optional[date] = None) -> int:
    """
    Consecutive UTC days with at least one session, counting back from today.
    Today may be empty without breaking the streak. Looks back at most 30 days.
    """
    today = today or utcnow().date()
    days = {d.date() for d in session_dates}
    streak = 0
    for i in range(STREAK_WINDOW_DAYS):
        if today - timedelta(days=i) in days:
            streak += 1
        elif i > 0:
            break
    return streak


def learning_stats(sessions: list[dict], today: Optional[date] = None) -> dict:
    words = {str(w) for s in sessions for w in (s.get("wordsStudied") or [])}
    average = (
        round_half_up(sum(s.get("score") or 0 for s in sessions) / len(sessions)) if sessions else 0
    )
    return {
        "wordsLearned": len(words),
        "streakDays": streak_days((s["createdAt"] for s in sessions if s.get("createdAt")), today),
        "totalSessions": len(sessions),
        "averageScore": average,
        "weakWords": [],
        "strongWords": [],
    }
