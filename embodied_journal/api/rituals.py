from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from embodied_journal.api.deps import get_current_user
from embodied_journal.db.database import get_db
from embodied_journal.models.ritual import DailyRitual, MicroWin
from embodied_journal.models.user import User
from embodied_journal.schemas.ritual import (
    DailyRitualCreate,
    DailyRitualOut,
    MicroWinCreate,
    MicroWinOut,
)
from embodied_journal.services.dashboard import MICRO_WIN_WINDOW_DAYS, micro_win_cutoff

router = APIRouter(
    prefix="/api/rituals",
    tags=["rituals"],
)

micro_wins_router = APIRouter(
    prefix="/api/micro-wins",
    tags=["rituals"],
)


def _ritual_exists() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Daily ritual already exists for this date",
    )


@router.post(
    "",
    response_model=DailyRitualOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_daily_ritual(
    payload: DailyRitualCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    # One ritual per user per day
    result = await db.execute(
        select(DailyRitual).where(
            DailyRitual.user_id == user.id,
            DailyRitual.date == payload.date,
        )
    )
    if result.scalar_one_or_none():
        raise _ritual_exists()

    ritual = DailyRitual(user_id=user.id, **payload.model_dump())

    db.add(ritual)
    try:
        await db.commit()
    except IntegrityError:
        # a concurrent request claimed the date after our check
        await db.rollback()
        raise _ritual_exists()
    await db.refresh(ritual)

    return ritual


@router.get(
    "",
    response_model=list[DailyRitualOut],
)
async def list_daily_rituals(
    days: int = Query(30, ge=1, le=3650),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Rituals in the look-back window, oldest first.
    """
    start_date = date.today() - timedelta(days=days)

    result = await db.execute(
        select(DailyRitual)
        .where(DailyRitual.user_id == user.id, DailyRitual.date >= start_date)
        .order_by(DailyRitual.date.asc())
    )

    return result.scalars().all()


@micro_wins_router.post(
    "",
    response_model=MicroWinOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_micro_win(
    payload: MicroWinCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    win = MicroWin(user_id=user.id, **payload.model_dump())

    db.add(win)
    await db.commit()
    await db.refresh(win)

    return win


@micro_wins_router.get(
    "",
    response_model=list[MicroWinOut],
)
async def list_micro_wins(
    days: int = Query(MICRO_WIN_WINDOW_DAYS, ge=1, le=3650),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    cutoff = micro_win_cutoff(date.today(), days)

    result = await db.execute(
        select(MicroWin)
        .where(MicroWin.user_id == user.id, MicroWin.date > cutoff)
        .order_by(MicroWin.date.desc(), MicroWin.id.desc())
    )

    return result.scalars().all()
