from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from embodied_journal.api.deps import get_current_user
from embodied_journal.db.database import get_db
from embodied_journal.models.user import User
from embodied_journal.schemas.analytics import AnalyticsResponse
from embodied_journal.services.analytics import (
    DATE_RANGES,
    DEFAULT_RANGE_DAYS,
    InvalidDateRange,
    build_analytics,
)
from embodied_journal.services.widgets import chart_panels

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsResponse)
async def analytics_overview(
    days: int = DEFAULT_RANGE_DAYS,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Embodiment series, P&L by identity, emotional-state distribution and
    nervous-system win rate for the selected window (7 / 30 / 90 days).
    """
    try:
        data = await build_analytics(db, user_id=user.id, days=days)
    except InvalidDateRange as exc:
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        )

    return {
        **data,
        "range_label": DATE_RANGES[days],
        "panels": chart_panels(data),
    }


@router.get("/ranges")
async def analytics_ranges():
    return [
        {"value": days, "label": label, "default": days == DEFAULT_RANGE_DAYS}
        for days, label in DATE_RANGES.items()
    ]
