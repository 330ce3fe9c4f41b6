from embodied_journal.services.analytics.aggregation import (
    embodiment_series,
    emotional_state_distribution,
    nervous_system_win_rate,
    performance_by_identity,
)
from embodied_journal.services.analytics.queries import (
    DATE_RANGES,
    DEFAULT_RANGE_DAYS,
    InvalidDateRange,
    build_analytics,
    range_start,
)

__all__ = [
    "DATE_RANGES",
    "DEFAULT_RANGE_DAYS",
    "InvalidDateRange",
    "build_analytics",
    "embodiment_series",
    "emotional_state_distribution",
    "nervous_system_win_rate",
    "performance_by_identity",
    "range_start",
]
