from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from embodied_journal.api.deps import get_clock, get_current_user
from embodied_journal.db.database import get_db
from embodied_journal.models.user import User
from embodied_journal.services.clock import MinuteClock
from embodied_journal.services.dashboard import dashboard_summary

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("")
async def dashboard(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    clock: MinuteClock = Depends(get_clock),
):
    return await dashboard_summary(db, user_id=user.id, now=clock.current)
