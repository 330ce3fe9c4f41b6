# embodied_journal/services/analytics/aggregation.py

from typing import Any, Dict, Iterable, List, Optional, Tuple

from embodied_journal.models.enums import IDENTITY_LABELS, NERVOUS_SYSTEM_LABELS


# -------------------------------------------------
# Emotional-state buckets (embodiment score as proxy)
# -------------------------------------------------
# (label, inclusive upper bound); the last bucket is open-ended.
EMOTIONAL_BUCKETS: Tuple[Tuple[str, Optional[int]], ...] = (
    ("Low (1-3)", 3),
    ("Medium (4-6)", 6),
    ("High (7-10)", None),
)


def _pct(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def embodiment_series(rituals: Iterable[Tuple[Any, int]]) -> List[Dict[str, Any]]:
    """
    One point per ritual row, in the order the rows arrive
    (queries return them sorted by date).
    """
    return [
        {"date": ritual_date.isoformat(), "score": score}
        for ritual_date, score in rituals
    ]


def performance_by_identity(trades: Iterable[Tuple[str, Optional[float]]]) -> List[Dict[str, Any]]:
    """
    Mean P&L and trade count per identity state.

    Missing P&L counts as 0. Unknown identity values keep their raw label.
    Groups come out in first-seen order.
    """
    groups: Dict[str, Dict[str, float]] = {}

    for identity, pnl in trades:
        bucket = groups.setdefault(identity, {"total_pnl": 0.0, "count": 0})
        bucket["total_pnl"] += float(pnl or 0)
        bucket["count"] += 1

    return [
        {
            "identity": IDENTITY_LABELS.get(identity, identity),
            "avg_pnl": data["total_pnl"] / data["count"],
            "trade_count": int(data["count"]),
        }
        for identity, data in groups.items()
    ]


def emotional_state_distribution(scores: Iterable[int]) -> List[Dict[str, Any]]:
    """
    Three-bucket histogram of embodiment scores.
    Boundaries are inclusive at 3 and 6; percentages are 0 when empty.
    """
    counts = [0] * len(EMOTIONAL_BUCKETS)

    for score in scores:
        for index, (_, upper) in enumerate(EMOTIONAL_BUCKETS):
            if upper is None or score <= upper:
                counts[index] += 1
                break

    total = sum(counts)

    return [
        {"state": label, "count": count, "percentage": _pct(count, total)}
        for (label, _), count in zip(EMOTIONAL_BUCKETS, counts)
    ]


def nervous_system_win_rate(trades: Iterable[Tuple[str, Optional[float]]]) -> List[Dict[str, Any]]:
    """
    Win percentage per nervous-system state (win = P&L > 0).
    """
    groups: Dict[str, Dict[str, int]] = {}

    for state, pnl in trades:
        bucket = groups.setdefault(state, {"wins": 0, "total": 0})
        bucket["total"] += 1
        if pnl is not None and float(pnl) > 0:
            bucket["wins"] += 1

    return [
        {
            "state": NERVOUS_SYSTEM_LABELS.get(state, state),
            "win_rate": _pct(data["wins"], data["total"]),
            "total_trades": data["total"],
        }
        for state, data in groups.items()
    ]
