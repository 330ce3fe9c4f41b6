import math
from datetime import date, datetime, time
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from embodied_journal.models.enums import IdentityState, NervousSystemState


def field_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, str]:
    """
    Flatten pydantic error dicts into {field: message}.
    The first error reported for a field wins.
    """
    out: Dict[str, str] = {}
    for err in errors:
        loc = [part for part in err.get("loc", ()) if part not in ("body", "query")]
        name = str(loc[-1]) if loc else "__root__"

        if err.get("type") == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err.get("msg", "Invalid value")

        out.setdefault(name, message)
    return out


# -------------------------
# TRADE ENTRY FORM
# -------------------------
class TradeEntryCreate(BaseModel):
    asset: str
    entry_price: float
    exit_price: float
    position_size: float
    identity_state: IdentityState
    embodiment_rating: int
    beliefs_influence: str
    nervous_system_state: Optional[NervousSystemState] = Field(
        default=None,
        validate_default=True,
    )

    @field_validator("asset")
    @classmethod
    def _asset_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Asset symbol is required")
        return value.upper()

    @field_validator("entry_price")
    @classmethod
    def _entry_non_negative(cls, value: float) -> float:
        if not math.isfinite(value) or value < 0:
            raise ValueError("Entry price must be positive")
        return value

    @field_validator("exit_price")
    @classmethod
    def _exit_non_negative(cls, value: float) -> float:
        if not math.isfinite(value) or value < 0:
            raise ValueError("Exit price must be positive")
        return value

    @field_validator("position_size")
    @classmethod
    def _size_non_negative(cls, value: float) -> float:
        if not math.isfinite(value) or value < 0:
            raise ValueError("Position size must be positive")
        return value

    @field_validator("identity_state", mode="before")
    @classmethod
    def _identity_selected(cls, value: Any) -> Any:
        if value is None or value == "":
            raise ValueError("Please select an identity state")
        return value

    @field_validator("embodiment_rating")
    @classmethod
    def _rating_in_range(cls, value: int) -> int:
        if not 1 <= value <= 10:
            raise ValueError("Embodiment rating must be between 1 and 10")
        return value

    @field_validator("beliefs_influence")
    @classmethod
    def _beliefs_detailed(cls, value: str) -> str:
        if len(value.strip()) < 10:
            raise ValueError("Please provide more detail about your beliefs")
        return value

    @field_validator("nervous_system_state", mode="before")
    @classmethod
    def _nervous_state_selected(cls, value: Any) -> Any:
        if value is None or value == "":
            raise ValueError("Please select your pre-trade state")
        return value


class TradeOut(BaseModel):
    id: int
    date: date
    time: time
    asset: str
    entry: float
    exit: float
    position_size: float
    pnl: Optional[float] = None
    identity_state: Optional[str] = None
    embodiment_rating: int
    beliefs_influence: Optional[str] = None
    nervous_system_state: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# -------------------------
# P&L PREVIEW
# -------------------------
class PnlPreviewRequest(BaseModel):
    entry_price: float = Field(default=0, allow_inf_nan=False)
    exit_price: float = Field(default=0, allow_inf_nan=False)
    position_size: float = Field(default=0, allow_inf_nan=False)


class PnlPreviewOut(BaseModel):
    pnl: float


# -------------------------
# SUBMISSION RESULT
# -------------------------
class Notice(BaseModel):
    level: str  # success / error
    title: str
    description: Optional[str] = None


class TradeSaveResponse(BaseModel):
    trade: TradeOut
    notice: Notice
    redirect_to: Optional[str] = None  # None means stay on the form


class TradeList(BaseModel):
    items: List[TradeOut]
