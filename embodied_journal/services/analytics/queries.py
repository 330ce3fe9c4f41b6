import logging
from datetime import date, timedelta
from typing import Any, Awaitable, Callable, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from embodied_journal.models.ritual import DailyRitual
from embodied_journal.models.trade import Trade
from embodied_journal.services.analytics.aggregation import (
    embodiment_series,
    emotional_state_distribution,
    nervous_system_win_rate,
    performance_by_identity,
)

logger = logging.getLogger(__name__)

DATE_RANGES = {
    7: "Last 7 days",
    30: "Last 30 days",
    90: "Last 90 days",
}
DEFAULT_RANGE_DAYS = 30


class InvalidDateRange(ValueError):
    """Raised for a look-back window other than 7, 30 or 90 days."""


def range_start(days: int, *, today: Optional[date] = None) -> date:
    if days not in DATE_RANGES:
        raise InvalidDateRange(
            f"days must be one of {sorted(DATE_RANGES)}, got {days}"
        )
    return (today or date.today()) - timedelta(days=days)


# -------------------------------------------------
# Range + owner scoped queries
# -------------------------------------------------

async def fetch_ritual_scores(db: AsyncSession, *, user_id: UUID, start_date: date) -> List[Any]:
    stmt = (
        select(DailyRitual.date, DailyRitual.embodiment_score)
        .where(
            DailyRitual.user_id == user_id,
            DailyRitual.date >= start_date,
            DailyRitual.embodiment_score.isnot(None),
        )
        .order_by(DailyRitual.date.asc())
    )
    return (await db.execute(stmt)).all()


async def fetch_identity_pnl(db: AsyncSession, *, user_id: UUID, start_date: date) -> List[Any]:
    stmt = (
        select(Trade.identity_state, Trade.pnl)
        .where(
            Trade.user_id == user_id,
            Trade.date >= start_date,
            Trade.identity_state.isnot(None),
        )
        .order_by(Trade.date.asc(), Trade.id.asc())
    )
    return (await db.execute(stmt)).all()


async def fetch_nervous_system_pnl(db: AsyncSession, *, user_id: UUID, start_date: date) -> List[Any]:
    stmt = (
        select(Trade.nervous_system_state, Trade.pnl)
        .where(
            Trade.user_id == user_id,
            Trade.date >= start_date,
            Trade.nervous_system_state.isnot(None),
        )
        .order_by(Trade.date.asc(), Trade.id.asc())
    )
    return (await db.execute(stmt)).all()


async def _rows_or_empty(
    db: AsyncSession,
    name: str,
    fetch: Callable[..., Awaitable[List[Any]]],
    **kwargs: Any,
) -> List[Any]:
    """A failed query becomes an empty dataset; the others still run."""
    try:
        return await fetch(db, **kwargs)
    except SQLAlchemyError:
        logger.exception("Error fetching %s analytics data", name)
        await db.rollback()
        return []


# -------------------------------------------------
# Public contract
# -------------------------------------------------

async def build_analytics(
    db: AsyncSession,
    *,
    user_id: UUID,
    days: int = DEFAULT_RANGE_DAYS,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Three independent owner-scoped queries, reduced locally into the
    four chart datasets. No cross-checks between the result sets.
    """
    start_date = range_start(days, today=today)
    scope = {"user_id": user_id, "start_date": start_date}

    rituals = await _rows_or_empty(db, "embodiment", fetch_ritual_scores, **scope)
    identity_rows = await _rows_or_empty(db, "identity", fetch_identity_pnl, **scope)
    nervous_rows = await _rows_or_empty(db, "nervous system", fetch_nervous_system_pnl, **scope)

    return {
        "days": days,
        "start_date": start_date,
        "embodiment": embodiment_series(rituals),
        "identity_performance": performance_by_identity(identity_rows),
        "emotional_states": emotional_state_distribution(score for _, score in rituals),
        "nervous_system": nervous_system_win_rate(nervous_rows),
    }
