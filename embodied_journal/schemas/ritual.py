import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# -------------------------
# DAILY RITUAL
# -------------------------
class DailyRitualCreate(BaseModel):
    date: dt.date

    embodiment_score: Optional[int] = Field(default=None, ge=0, le=10)

    intention: Optional[str] = None
    reflection: Optional[str] = None


class DailyRitualOut(DailyRitualCreate):
    id: int
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


# -------------------------
# MICRO WINS
# -------------------------
class MicroWinCreate(BaseModel):
    # field shares its name with the type, so keep the module-qualified form
    date: dt.date = Field(default_factory=dt.date.today)
    description: str = Field(min_length=1)


class MicroWinOut(MicroWinCreate):
    id: int
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)
