import logging
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from embodied_journal.models.trade import Trade
from embodied_journal.schemas.trade import Notice, TradeEntryCreate, field_errors

logger = logging.getLogger(__name__)

PNL_FIELDS = ("entry_price", "exit_price", "position_size")

SAVE_FAILED_NOTICE = Notice(
    level="error",
    title="Failed to save trade",
    description="Please try again or contact support if the issue persists.",
)


class TradeValidationError(ValueError):
    """Raised when a trade form fails local validation. Nothing is written."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Trade form is invalid: " + ", ".join(sorted(errors)))
        self.errors = errors


class TradeSaveError(RuntimeError):
    """Raised when the insert fails. The caller shows a generic retry notice."""


def calculate_pnl(entry_price: float, exit_price: float, position_size: float) -> float:
    """
    P&L = (exit - entry) * size.
    Zero until all three inputs are strictly positive.
    """
    if entry_price > 0 and exit_price > 0 and position_size > 0:
        return (exit_price - entry_price) * position_size
    return 0.0


@dataclass
class TradeDraft:
    """
    In-memory trade form state.

    `pnl` is derived on every update that touches a price or the size,
    so it always reflects the current inputs.
    """

    asset: str = ""
    entry_price: float = 0.0
    exit_price: float = 0.0
    position_size: float = 0.0
    identity_state: str = ""
    embodiment_rating: int = 5
    beliefs_influence: str = ""
    nervous_system_state: Optional[str] = None
    pnl: float = field(default=0.0, init=False)

    def update(self, **changes: Any) -> "TradeDraft":
        for name, value in changes.items():
            if name == "pnl" or name not in self._field_names():
                raise AttributeError(f"Unknown trade form field: {name}")
            if name == "asset" and isinstance(value, str):
                value = value.upper()
            setattr(self, name, value)

        if any(name in PNL_FIELDS for name in changes):
            self.pnl = calculate_pnl(self.entry_price, self.exit_price, self.position_size)
        return self

    def reset(self) -> None:
        for f in fields(self):
            if f.init:
                setattr(self, f.name, f.default)
        self.pnl = 0.0

    def values(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.init}

    def validate(self) -> TradeEntryCreate:
        return validate_trade_form(self.values())

    @classmethod
    def _field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


def validate_trade_form(data: Dict[str, Any]) -> TradeEntryCreate:
    try:
        return TradeEntryCreate.model_validate(data)
    except ValidationError as exc:
        raise TradeValidationError(field_errors(exc.errors())) from exc


def build_trade(form: TradeEntryCreate, *, user_id: UUID, today: date, now: datetime) -> Trade:
    """Shape the insert row. P&L is always recomputed from the validated inputs."""
    return Trade(
        user_id=user_id,
        date=today,
        time=now.time().replace(microsecond=0),
        asset=form.asset.upper(),
        entry=form.entry_price,
        exit=form.exit_price,
        position_size=form.position_size,
        pnl=calculate_pnl(form.entry_price, form.exit_price, form.position_size),
        identity_state=form.identity_state.value,
        embodiment_rating=form.embodiment_rating,
        beliefs_influence=form.beliefs_influence,
        nervous_system_state=form.nervous_system_state.value,
    )


def success_notice(trade: Trade) -> Notice:
    return Notice(
        level="success",
        title="Trade saved successfully!",
        description=f"{trade.asset} trade recorded with P&L of ${float(trade.pnl or 0):.2f}",
    )


async def save_trade(
    db: AsyncSession,
    form: TradeEntryCreate,
    *,
    user_id: UUID,
    now: datetime,
    today: Optional[date] = None,
) -> Trade:
    """
    Insert one trade row for the user.

    `now` is the displayed clock value (minute resolution); the date is
    taken from the real calendar day unless given.
    """
    trade = build_trade(
        form,
        user_id=user_id,
        today=today or date.today(),
        now=now,
    )

    db.add(trade)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Error saving trade for user %s", user_id)
        raise TradeSaveError("Failed to save trade") from exc

    # Row is committed; a failed reload must not read as a failed save
    await db.refresh(trade)

    logger.info(
        "Saved trade %s for user %s: %s pnl=%.2f",
        trade.id,
        user_id,
        trade.asset,
        float(trade.pnl or 0),
    )
    return trade


async def submit_draft(
    db: AsyncSession,
    draft: TradeDraft,
    *,
    user_id: UUID,
    now: datetime,
    today: Optional[date] = None,
) -> Tuple[Trade, Notice]:
    """
    Validate, insert, then clear the draft.
    On failure the draft keeps its values so the user can retry.
    """
    form = draft.validate()
    trade = await save_trade(db, form, user_id=user_id, now=now, today=today)
    draft.reset()
    return trade, success_notice(trade)
