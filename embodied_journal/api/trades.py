from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from embodied_journal.api.deps import get_clock, get_current_user
from embodied_journal.db.database import get_db
from embodied_journal.models.trade import Trade
from embodied_journal.models.user import User
from embodied_journal.schemas.trade import (
    PnlPreviewOut,
    PnlPreviewRequest,
    TradeEntryCreate,
    TradeList,
    TradeOut,
    TradeSaveResponse,
)
from embodied_journal.services.clock import MinuteClock
from embodied_journal.services.trade_entry import (
    SAVE_FAILED_NOTICE,
    TradeSaveError,
    calculate_pnl,
    save_trade,
    success_notice,
)

router = APIRouter(prefix="/api/trades", tags=["trades"])

DASHBOARD_PATH = "/dashboard"


# =================================================
# SUBMIT TRADE (save / save-and-add-another)
# =================================================
@router.post(
    "",
    response_model=TradeSaveResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_trade(
    payload: TradeEntryCreate,
    add_another: bool = False,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    clock: MinuteClock = Depends(get_clock),
):
    """
    Validate and record one trade.

    Invalid payloads are rejected with per-field messages before anything
    is written. `add_another=true` keeps the user on the form.
    """
    try:
        trade = await save_trade(db, payload, user_id=user.id, now=clock.current)
    except TradeSaveError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=SAVE_FAILED_NOTICE.model_dump(),
        )

    return TradeSaveResponse(
        trade=TradeOut.model_validate(trade),
        notice=success_notice(trade),
        redirect_to=None if add_another else DASHBOARD_PATH,
    )


# =================================================
# P&L PREVIEW (no persistence)
# =================================================
@router.post("/pnl", response_model=PnlPreviewOut)
async def preview_pnl(
    payload: PnlPreviewRequest,
    user: User = Depends(get_current_user),
):
    return PnlPreviewOut(
        pnl=calculate_pnl(payload.entry_price, payload.exit_price, payload.position_size)
    )


# =================================================
# LIST OWN TRADES
# =================================================
@router.get("", response_model=TradeList)
async def list_trades(
    days: int = Query(30, ge=1, le=3650),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    start_date = date.today() - timedelta(days=days)

    result = await db.execute(
        select(Trade)
        .where(Trade.user_id == user.id, Trade.date >= start_date)
        .order_by(Trade.date.desc(), Trade.time.desc(), Trade.id.desc())
    )

    return TradeList(
        items=[TradeOut.model_validate(t) for t in result.scalars().all()]
    )
