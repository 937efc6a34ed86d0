"""Data models for FocusFlow."""

from focusflow.models.session import PomodoroSession, SessionType, TaskInfo, Interruption
from focusflow.models.user import User, UserPublic, UserSummary, Preferences
from focusflow.models.analytics import (
    SummaryStats,
    DailyTrend,
    HourlyPattern,
    CategoryStat,
    ProductiveHour,
    InterruptionReason,
    Recommendation,
    Insights,
)

__all__ = [
    "PomodoroSession",
    "SessionType",
    "TaskInfo",
    "Interruption",
    "User",
    "UserPublic",
    "UserSummary",
    "Preferences",
    "SummaryStats",
    "DailyTrend",
    "HourlyPattern",
    "CategoryStat",
    "ProductiveHour",
    "InterruptionReason",
    "Recommendation",
    "Insights",
]
