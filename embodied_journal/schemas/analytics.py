import datetime as dt
from typing import Any, Dict, List

from pydantic import BaseModel


class EmbodimentPoint(BaseModel):
    date: str
    score: int


class IdentityPerformance(BaseModel):
    identity: str
    avg_pnl: float
    trade_count: int


class EmotionalStateBucket(BaseModel):
    state: str
    count: int
    percentage: float


class NervousSystemWinRate(BaseModel):
    state: str
    win_rate: float
    total_trades: int


class ChartPanel(BaseModel):
    tab: str
    title: str
    chart: str  # line / bar / pie
    x_key: str
    y_key: str
    colors: List[str]
    data: List[Dict[str, Any]]


class AnalyticsResponse(BaseModel):
    days: int
    range_label: str
    start_date: dt.date

    embodiment: List[EmbodimentPoint]
    identity_performance: List[IdentityPerformance]
    emotional_states: List[EmotionalStateBucket]
    nervous_system: List[NervousSystemWinRate]

    panels: List[ChartPanel]
