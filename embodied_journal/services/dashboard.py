from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from embodied_journal.models.ritual import DailyRitual, MicroWin
from embodied_journal.services.widgets import (
    DASHBOARD_CARDS,
    QUICK_ACTIONS,
    embodiment_gauge,
    streak_badge,
)

MICRO_WIN_WINDOW_DAYS = 7


def micro_win_cutoff(today: date, days: int = MICRO_WIN_WINDOW_DAYS) -> date:
    """Micro wins dated strictly after this day fall inside the last `days` days."""
    return today - timedelta(days=days)


def compute_streak(ritual_dates: Iterable[date], *, today: date) -> int:
    """
    Consecutive ritual days ending today.

    A missing ritual for today does not break the streak yet; counting
    then starts from yesterday.
    """
    logged = set(ritual_dates)

    cursor = today if today in logged else today - timedelta(days=1)
    streak = 0
    while cursor in logged:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def format_header(now: datetime) -> Dict[str, str]:
    # e.g. "Monday, October 19, 2026" / "02:30 PM"
    return {
        "date": f"{now:%A}, {now:%B} {now.day}, {now:%Y}",
        "time": now.strftime("%I:%M %p"),
    }


async def dashboard_summary(
    db: AsyncSession,
    *,
    user_id: UUID,
    now: datetime,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    today = today or now.date()

    ritual_dates = (
        await db.execute(
            select(DailyRitual.date)
            .where(DailyRitual.user_id == user_id, DailyRitual.date <= today)
            .order_by(DailyRitual.date.desc())
        )
    ).scalars().all()

    latest_score = (
        await db.execute(
            select(DailyRitual.embodiment_score)
            .where(
                DailyRitual.user_id == user_id,
                DailyRitual.embodiment_score.isnot(None),
            )
            .order_by(DailyRitual.date.desc())
            .limit(1)
        )
    ).scalar_one_or_none()

    micro_wins = (
        await db.execute(
            select(func.count(MicroWin.id)).where(
                MicroWin.user_id == user_id,
                MicroWin.date > micro_win_cutoff(today),
            )
        )
    ).scalar_one()

    streak = compute_streak(ritual_dates, today=today)
    score = latest_score or 0

    return {
        **format_header(now),
        "stats": {
            "streak_count": streak,
            "embodiment_score": score,
            "micro_wins_count": int(micro_wins or 0),
        },
        "embodiment_gauge": embodiment_gauge(score, size="sm"),
        "streak": streak_badge(streak),
        "cards": DASHBOARD_CARDS,
        "quick_actions": QUICK_ACTIONS,
    }
