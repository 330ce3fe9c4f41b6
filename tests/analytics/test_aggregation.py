from datetime import date

import pytest

from embodied_journal.services.analytics import (
    embodiment_series,
    emotional_state_distribution,
    nervous_system_win_rate,
    performance_by_identity,
)


# =================================================
# EMBODIMENT SERIES
# =================================================

def test_embodiment_series_keeps_row_order():
    rows = [(date(2026, 10, 1), 4), (date(2026, 10, 2), 7)]

    assert embodiment_series(rows) == [
        {"date": "2026-10-01", "score": 4},
        {"date": "2026-10-02", "score": 7},
    ]


def test_embodiment_series_empty():
    assert embodiment_series([]) == []


# =================================================
# PERFORMANCE BY IDENTITY
# =================================================

def test_identity_average_pnl_and_count():
    trades = [("disciplined_trader", 100), ("disciplined_trader", -20)]

    assert performance_by_identity(trades) == [
        {"identity": "Disciplined Trader", "avg_pnl": 40.0, "trade_count": 2},
    ]


def test_identity_groups_first_seen_order_and_raw_unknown_labels():
    trades = [
        ("revenge_trader", -50),
        ("zen_master", 10),
        ("revenge_trader", None),  # missing pnl counts as 0
    ]

    result = performance_by_identity(trades)

    assert [row["identity"] for row in result] == ["Revenge Trader", "zen_master"]
    assert result[0]["avg_pnl"] == pytest.approx(-25.0)
    assert result[0]["trade_count"] == 2
    assert result[1] == {"identity": "zen_master", "avg_pnl": 10.0, "trade_count": 1}


# =================================================
# EMOTIONAL STATE DISTRIBUTION
# =================================================

def test_one_score_per_bucket_is_a_third_each():
    result = emotional_state_distribution([2, 5, 8])

    assert [row["count"] for row in result] == [1, 1, 1]
    for row in result:
        assert row["percentage"] == pytest.approx(33.333, abs=0.001)
    assert sum(row["percentage"] for row in result) == pytest.approx(100.0)


def test_bucket_boundaries_are_inclusive_at_3_and_6():
    result = emotional_state_distribution([3, 4, 6, 7])

    counts = {row["state"]: row["count"] for row in result}
    assert counts == {"Low (1-3)": 1, "Medium (4-6)": 2, "High (7-10)": 1}


def test_empty_distribution_is_all_zero():
    result = emotional_state_distribution([])

    assert [row["state"] for row in result] == ["Low (1-3)", "Medium (4-6)", "High (7-10)"]
    assert all(row["count"] == 0 and row["percentage"] == 0 for row in result)


def test_distribution_sums_to_100():
    result = emotional_state_distribution([0, 1, 1, 5, 9, 10, 10])
    assert sum(row["percentage"] for row in result) == pytest.approx(100.0)


# =================================================
# NERVOUS SYSTEM WIN RATE
# =================================================

def test_win_rate_per_state():
    trades = [
        ("calm_confidence", 50),
        ("calm_confidence", 0),  # breakeven is not a win
        ("calm_confidence", 10),
        ("fight_flight", -10),
        ("fight_flight", None),
    ]

    result = {row["state"]: row for row in nervous_system_win_rate(trades)}

    assert result["Calm Confidence"]["win_rate"] == pytest.approx(200 / 3)
    assert result["Calm Confidence"]["total_trades"] == 3
    assert result["Fight/Flight"]["win_rate"] == 0
    assert result["Fight/Flight"]["total_trades"] == 2


def test_win_rate_without_trades_is_empty_not_an_error():
    assert nervous_system_win_rate([]) == []
