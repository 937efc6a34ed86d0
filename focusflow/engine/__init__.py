"""Analytics engine for FocusFlow."""

from focusflow.engine.analytics import (
    summarize,
    daily_trends,
    hourly_patterns,
    category_breakdown,
    productive_hours,
    top_interruptions,
    build_recommendations,
    build_insights,
    trend_window,
)

__all__ = [
    "summarize",
    "daily_trends",
    "hourly_patterns",
    "category_breakdown",
    "productive_hours",
    "top_interruptions",
    "build_recommendations",
    "build_insights",
    "trend_window",
]
