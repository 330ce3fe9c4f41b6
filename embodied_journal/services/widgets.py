# embodied_journal/services/widgets.py

import math
from typing import Any, Dict, List

# -------------------------------------------------
# Render-ready widget data. Pure functions, no I/O.
# -------------------------------------------------

CHART_COLORS = ["#fbbf24", "#f59e0b", "#d97706", "#92400e", "#78350f"]

# size -> (diameter px, stroke width, radius)
GAUGE_SIZES = {
    "sm": (64, 3, 26),
    "md": (80, 4, 32),
    "lg": (96, 5, 38),
}

# (exclusive upper bound, colour, message); last tier catches the rest
SCORE_TIERS = (
    (3, "red", "Needs attention"),
    (5, "orange", "Building awareness"),
    (7, "yellow", "Good presence"),
    (9, "green", "Strong embodiment"),
    (None, "emerald", "Fully embodied"),
)

# (exclusive upper bound, emoji)
STREAK_EMOJI = (
    (1, "❄️"),
    (3, "🔥"),
    (7, "🔥🔥"),
    (14, "🔥🔥🔥"),
    (30, "🔥🔥🔥🔥"),
    (None, "🔥🔥🔥🔥🔥"),
)

STREAK_MESSAGES = (
    (1, "Start your streak!"),
    (2, "Great start!"),
    (7, "Building momentum!"),
    (14, "On fire!"),
    (30, "Unstoppable!"),
    (None, "Legendary!"),
)


def _tier(value: float, tiers):
    for row in tiers:
        upper = row[0]
        if upper is None or value < upper:
            return row[1:]
    raise ValueError(f"No tier for {value}")


def score_tier(score: float) -> Dict[str, str]:
    color, message = _tier(score, SCORE_TIERS)
    return {"color": color, "message": message}


def embodiment_gauge(
    score: float,
    *,
    max_score: float = 10,
    size: str = "md",
    show_label: bool = True,
) -> Dict[str, Any]:
    """
    Circular progress gauge geometry for a single score.

    The progress arc is drawn with a dash offset of
    circumference * (1 - percentage / 100).
    """
    if size not in GAUGE_SIZES:
        raise ValueError(f"size must be one of {sorted(GAUGE_SIZES)}, got {size!r}")
    if max_score <= 0:
        raise ValueError("max_score must be greater than zero")

    diameter, stroke_width, radius = GAUGE_SIZES[size]
    percentage = (score / max_score) * 100
    circumference = 2 * math.pi * radius
    tier = score_tier(score)

    return {
        "score": score,
        "max_score": max_score,
        "percentage": percentage,
        "size": size,
        "diameter": diameter,
        "center": diameter // 2,
        "radius": radius,
        "stroke_width": stroke_width,
        "circumference": circumference,
        "stroke_dashoffset": circumference - (percentage / 100) * circumference,
        "color": tier["color"],
        "label": tier["message"] if show_label else None,
    }


def streak_badge(streak_count: int) -> Dict[str, Any]:
    (emoji,) = _tier(streak_count, STREAK_EMOJI)
    (message,) = _tier(streak_count, STREAK_MESSAGES)
    return {
        "streak_count": streak_count,
        "emoji": emoji,
        "message": message,
        "unit": "day" if streak_count == 1 else "days",
    }


# -------------------------------------------------
# Dashboard layout
# -------------------------------------------------

DASHBOARD_CARDS: List[Dict[str, str]] = [
    {
        "key": "pre_market",
        "icon": "sun",
        "title": "Pre-Market",
        "description": "Set your intention and prepare your mindset",
        "button_text": "Start Ritual",
        "action": "/api/rituals",
    },
    {
        "key": "during_trading",
        "icon": "trending-up",
        "title": "During Trading",
        "description": "Track trades and maintain embodiment",
        "button_text": "Log Trade",
        "action": "/api/trades",
    },
    {
        "key": "post_market",
        "icon": "moon",
        "title": "Post-Market",
        "description": "Reflect and capture micro-evidence",
        "button_text": "Review Day",
        "action": "/api/rituals",
    },
]

QUICK_ACTIONS: List[Dict[str, str]] = [
    {"key": "add_micro_win", "label": "Add Micro Win", "action": "/api/micro-wins"},
    {"key": "weekly_review", "label": "Weekly Review", "action": "/api/analytics?days=7"},
    {"key": "monthly_review", "label": "Monthly Review", "action": "/api/analytics?days=30"},
    {"key": "view_stats", "label": "View Stats", "action": "/api/analytics"},
]


# -------------------------------------------------
# Tabbed chart panels
# -------------------------------------------------

def chart_panels(datasets: Dict[str, List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Bind each aggregated dataset to its tab and chart type."""
    return [
        {
            "tab": "embodiment",
            "title": "Embodiment Score Over Time",
            "chart": "line",
            "x_key": "date",
            "y_key": "score",
            "colors": CHART_COLORS[:1],
            "data": datasets.get("embodiment", []),
        },
        {
            "tab": "identity",
            "title": "Average P&L by Identity State",
            "chart": "bar",
            "x_key": "identity",
            "y_key": "avg_pnl",
            "colors": CHART_COLORS[:1],
            "data": datasets.get("identity_performance", []),
        },
        {
            "tab": "emotional",
            "title": "Emotional State Distribution",
            "chart": "pie",
            "x_key": "state",
            "y_key": "percentage",
            "colors": CHART_COLORS,
            "data": datasets.get("emotional_states", []),
        },
        {
            "tab": "nervous_system",
            "title": "Win Rate by Nervous System State",
            "chart": "bar",
            "x_key": "state",
            "y_key": "win_rate",
            "colors": CHART_COLORS[1:2],
            "data": datasets.get("nervous_system", []),
        },
    ]
